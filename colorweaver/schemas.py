"""
ColorWeaver Schemas
Pydantic models for extraction options, extracted colors and run reports.
"""
from enum import Enum
from typing import List, Dict, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from colorweaver.config import config


class ClusterAlgorithm(str, Enum):
    """Supported palette clustering strategies."""
    KMEANS = "kmeans"
    MEDIAN_CUT = "median_cut"


class ExtractionStage(str, Enum):
    """Linear states of a single extraction run."""
    SAMPLING = "sampling"
    CLUSTERING = "clustering"
    FILTERING = "filtering"
    DONE = "done"
    FAILED = "failed"


# ============================================================================
# COLOR SCHEMAS
# ============================================================================

class RGB(BaseModel):
    """Byte-valued RGB triple."""
    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)


class HSL(BaseModel):
    """Hue in degrees, saturation and lightness in percent."""
    h: float = Field(..., ge=0.0, lt=360.0)
    s: float = Field(..., ge=0.0, le=100.0)
    l: float = Field(..., ge=0.0, le=100.0)


class Color(BaseModel):
    """A color with its hex, RGB and HSL representations."""
    hex: str = Field(
        ...,
        pattern=r"^#[0-9a-f]{6}$",
        description="Lowercase hex color code in format #rrggbb"
    )
    rgb: RGB
    hsl: HSL


class ExtractedColor(Color):
    """Palette entry produced by a clusterer."""
    type: Literal["primary"] = "primary"
    percentage: float = Field(
        ...,
        gt=0.0,
        le=1.0,
        description="Share of sampled pixels represented by this color"
    )
    dominance: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description="percentage * 100, for display"
    )
    cluster: List[float] = Field(
        ...,
        min_length=3,
        max_length=3,
        description="Unrounded centroid or bucket mean as [r, g, b]"
    )
    confidence: float = Field(..., ge=0.0, le=1.0)


# ============================================================================
# EXTRACTION OPTIONS
# ============================================================================

class ExtractionOptions(BaseModel):
    """Caller-supplied extraction settings. Accepts snake_case or camelCase keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    algorithm: ClusterAlgorithm = Field(
        default=ClusterAlgorithm(config.DEFAULT_ALGORITHM),
        description="Clustering strategy: 'kmeans' or 'median_cut'"
    )
    color_count: int = Field(
        default=config.DEFAULT_COLOR_COUNT,
        description="Maximum number of colors in the returned palette"
    )
    min_color_percentage: float = Field(
        default=config.DEFAULT_MIN_COLOR_PERCENTAGE,
        description="Colors covering less than this share of samples are dropped"
    )
    include_neutral: bool = Field(
        default=True,
        description="Keep grays and near-grays in the palette"
    )
    exclude_similar: bool = Field(
        default=True,
        description="Greedily drop colors close to an already kept color"
    )
    sensitivity: float = Field(
        default=config.DEFAULT_SENSITIVITY,
        description="Dedup distance is (1 - sensitivity) * 100 in RGB units"
    )

    @field_validator("color_count")
    @classmethod
    def check_color_count(cls, value: int) -> int:
        if not config.validate_color_count(value):
            raise ValueError(f"color_count must be >= 1, got {value}")
        return value

    @field_validator("min_color_percentage", "sensitivity")
    @classmethod
    def check_unit_interval(cls, value: float, info) -> float:
        if not config.validate_unit_interval(value):
            raise ValueError(f"{info.field_name} must be within [0, 1], got {value}")
        return value

    @property
    def similarity_distance(self) -> float:
        """Minimum RGB distance a color must keep from every kept color."""
        return (1.0 - self.sensitivity) * 100.0


# ============================================================================
# RESULT SCHEMAS
# ============================================================================

class ExtractionReport(BaseModel):
    """Outcome of a completed extraction run."""
    extraction_id: str = Field(..., description="Correlation ID used in logs")
    algorithm: ClusterAlgorithm
    stage: ExtractionStage = Field(..., description="Terminal stage of the run")
    palette: List[ExtractedColor] = Field(default_factory=list)
    sampled_pixels: int = Field(..., ge=0, description="Pixels fed to the clusterer")
    raw_color_count: int = Field(..., ge=0, description="Colors before post-filtering")
    durations_ms: Dict[str, float] = Field(
        default_factory=dict,
        description="Wall-clock duration of each stage in milliseconds"
    )


class PaletteAnalysis(BaseModel):
    """Aggregate description of a palette's look."""
    brightness: int = Field(..., ge=0, le=100)
    saturation: int = Field(..., ge=0, le=100)
    warmth: int = Field(..., ge=0, le=100, description="Share of warm hues, percent")
    avg_hue: int = Field(..., ge=0, le=360)
    style_tags: List[str] = Field(default_factory=list)


class PaletteColor(Color):
    """A generated palette color with a display name and usage role."""
    name: str
    role: Literal["primary", "secondary", "accent", "success", "warning"]
