"""
Tests for configuration, ID generation and structured logging.
"""

import pytest
from loguru import logger

from colorweaver.config import Config, _optional_int
from colorweaver.errors import (
    ColorExtractionError, EmptyPixelSetError, InvalidOptionsError, InvalidRasterError
)
from colorweaver.utils.ids import extract_timestamp_from_id, generate_extraction_id
from colorweaver import PaletteExtractor
from colorweaver.utils.logging import StructuredLogger, configure_logging, get_logger


class TestConfig:
    """Test configuration defaults and validators"""

    def test_defaults(self):
        assert Config.SAMPLE_TARGET == 10_000
        assert Config.ALPHA_THRESHOLD == 128
        assert Config.KMEANS_MAX_ITERATIONS == 50
        assert Config.NEUTRAL_THRESHOLD == 30

    def test_validate_algorithm(self):
        assert Config.validate_algorithm("kmeans")
        assert Config.validate_algorithm("median_cut")
        assert not Config.validate_algorithm("octree")

    def test_validate_color_count(self):
        assert Config.validate_color_count(1)
        assert Config.validate_color_count(100)
        assert not Config.validate_color_count(0)

    def test_validate_unit_interval(self):
        assert Config.validate_unit_interval(0.0)
        assert Config.validate_unit_interval(1.0)
        assert not Config.validate_unit_interval(1.01)
        assert not Config.validate_unit_interval(-0.01)

    def test_validate_sample_target(self):
        assert Config.validate_sample_target(1)
        assert not Config.validate_sample_target(0)

    def test_optional_int_from_environment(self, monkeypatch):
        monkeypatch.setenv("COLORWEAVER_TEST_SEED", "17")
        assert _optional_int("COLORWEAVER_TEST_SEED") == 17
        monkeypatch.setenv("COLORWEAVER_TEST_SEED", "  ")
        assert _optional_int("COLORWEAVER_TEST_SEED") is None
        monkeypatch.delenv("COLORWEAVER_TEST_SEED")
        assert _optional_int("COLORWEAVER_TEST_SEED") is None


class TestErrors:
    """Test the error taxonomy"""

    def test_hierarchy(self):
        assert issubclass(EmptyPixelSetError, ColorExtractionError)
        assert issubclass(EmptyPixelSetError, RuntimeError)
        assert issubclass(InvalidOptionsError, ValueError)
        assert issubclass(InvalidRasterError, ValueError)

    def test_stage_is_carried(self):
        error = EmptyPixelSetError("nothing opaque", stage="sampling")
        assert error.stage == "sampling"
        assert str(error) == "nothing opaque"


class TestExtractionIds:
    """Test extraction ID generation"""

    def test_format(self):
        extraction_id = generate_extraction_id()
        prefix, timestamp, suffix = extraction_id.split("-")
        assert prefix == "ext"
        assert len(timestamp) == 14
        assert len(suffix) == 8

    def test_unique(self):
        assert len({generate_extraction_id() for _ in range(100)}) == 100

    def test_custom_prefix_and_timestamp(self):
        extraction_id = generate_extraction_id("bench")
        assert extraction_id.startswith("bench-")
        assert extract_timestamp_from_id(extraction_id) == extraction_id.split("-")[1]

    def test_malformed_id(self):
        assert extract_timestamp_from_id("garbage") == ""


@pytest.fixture
def captured_records():
    """Enable colorweaver records and collect them from a temporary sink."""
    records = []
    logger.enable("colorweaver")
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(sink_id)
    logger.disable("colorweaver")


class TestStructuredLogger:
    """Test loguru-backed structured logging"""

    def test_get_logger_is_singleton(self):
        assert get_logger() is get_logger()

    def test_extra_fields_are_bound(self, captured_records):
        get_logger().info("palette ready", extra={"extraction_id": "ext-1"})
        get_logger().debug("plain message")

        assert captured_records[0]["message"] == "palette ready"
        assert captured_records[0]["extra"]["extraction_id"] == "ext-1"
        assert captured_records[1]["message"] == "plain message"
        assert captured_records[1]["extra"] == {}

    def test_bind_merges_context(self, captured_records):
        run_log = StructuredLogger(extraction_id="ext-2").bind(algorithm="kmeans")
        run_log.warning("slow stage", extra={"ms": 12.5})

        assert captured_records[0]["level"].name == "WARNING"
        assert captured_records[0]["extra"] == {
            "extraction_id": "ext-2", "algorithm": "kmeans", "ms": 12.5
        }

    def test_records_point_at_the_caller(self, captured_records):
        get_logger().error("failed")
        assert captured_records[0]["function"] == "test_records_point_at_the_caller"

    def test_extraction_records_carry_run_context(self, captured_records, red_raster):
        report = PaletteExtractor().run(red_raster)

        run_records = [r for r in captured_records if "extraction_id" in r["extra"]]
        assert run_records
        for record in run_records:
            assert record["extra"]["extraction_id"] == report.extraction_id
            assert record["extra"]["algorithm"] == "kmeans"

    def test_silent_by_default(self, red_raster):
        records = []
        sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
        try:
            PaletteExtractor().run(red_raster)
        finally:
            logger.remove(sink_id)

        assert not [r for r in records if r["name"].startswith("colorweaver")]

    def test_host_sink_survives_extraction(self, red_raster):
        received = []
        sink_id = logger.add(lambda message: received.append(message.record["message"]))
        try:
            PaletteExtractor().run(red_raster)
            logger.info("host message after extraction")
        finally:
            logger.remove(sink_id)

        assert received == ["host message after extraction"]

    def test_configure_logging_only_forwards_engine_records(self, red_raster):
        lines = []
        sink_id = configure_logging(level="INFO", sink=lines.append)
        try:
            logger.info("host message")
            PaletteExtractor().run(red_raster)
        finally:
            logger.remove(sink_id)
            logger.disable("colorweaver")

        assert lines
        assert not any("host message" in line for line in lines)
        assert any("Palette extraction complete" in line for line in lines)
