"""
ColorWeaver Extraction ID Utilities
Generate unique extraction IDs for log correlation.
"""
import uuid
from datetime import datetime


def generate_extraction_id(prefix: str = "ext") -> str:
    """
    Generate a unique extraction ID for tracking.

    Args:
        prefix: Short tag identifying the kind of run

    Returns:
        Unique ID string such as ``ext-20240101120000-1a2b3c4d``
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]
    return f"{prefix}-{timestamp}-{short_uuid}"


def extract_timestamp_from_id(extraction_id: str) -> str:
    """
    Extract timestamp from an extraction ID.

    Returns:
        Timestamp string or empty if the ID is malformed
    """
    parts = extraction_id.split("-")
    if len(parts) >= 3 and parts[1].isdigit() and len(parts[1]) == 14:
        return parts[1]
    return ""
