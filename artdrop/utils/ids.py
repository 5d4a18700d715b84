"""
ArtDrop Operation ID Utilities
Generate unique operation IDs for tracing log lines.
"""
import uuid
from datetime import datetime


def generate_operation_id(prefix: str = "op") -> str:
    """
    Generate a unique operation ID for tracking.

    Args:
        prefix: Short tag naming the operation family ("seg", "pal", ...)

    Returns:
        Unique operation ID string
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]
    return f"{prefix}-{timestamp}-{short_uuid}"
