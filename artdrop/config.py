"""
ArtDrop Configuration
Manages environment variables and defaults for the imaging core.
"""
import os
from typing import Literal


class Config:
    """Configuration class for ArtDrop imaging services."""

    # Logging
    LOG_LEVEL: str = os.environ.get("ARTDROP_LOG_LEVEL", "INFO")

    # Palette extraction
    PALETTE_K: int = int(os.environ.get("ARTDROP_PALETTE_K", "5"))
    IMAGE_PALETTE_K: int = int(os.environ.get("ARTDROP_IMAGE_PALETTE_K", "7"))
    PALETTE_MAX_EDGE: int = int(os.environ.get("ARTDROP_PALETTE_MAX_EDGE", "200"))

    # Auto-crop
    CROP_TOLERANCE: int = int(os.environ.get("ARTDROP_CROP_TOLERANCE", "10"))
    CROP_PADDING_PERCENT: float = float(os.environ.get("ARTDROP_CROP_PADDING_PERCENT", "5"))

    # Background removal
    BG_TOLERANCE: int = int(os.environ.get("ARTDROP_BG_TOLERANCE", "30"))
    BG_ENGINE_DEFAULT: Literal["auto", "u2netp", "grabcut", "heuristic"] = os.environ.get(
        "ARTDROP_BG_ENGINE_DEFAULT", "heuristic"
    )
    MIN_MASK_AREA_RATIO: float = float(os.environ.get("ARTDROP_MIN_MASK_AREA_RATIO", "0.03"))

    # Fallback palette returned when an image cannot be analysed
    DEFAULT_PALETTE = ["#000000", "#333333", "#666666", "#999999", "#cccccc"]
    DEFAULT_DOMINANT = "#666666"

    ENGINES = ["auto", "u2netp", "grabcut", "heuristic"]

    @classmethod
    def validate_engine(cls, engine: str) -> bool:
        """Validate engine parameter."""
        return engine in cls.ENGINES

    @classmethod
    def validate_tolerance(cls, tolerance: float) -> bool:
        """Validate per-channel color tolerance."""
        return 0 <= tolerance <= 255

    @classmethod
    def validate_padding(cls, padding_percent: float) -> bool:
        """Validate crop padding percentage."""
        return 0 <= padding_percent <= 100

    @classmethod
    def validate_cluster_count(cls, k: int) -> bool:
        """Validate k-means cluster count."""
        return 1 <= k <= 64


# Global config instance
config = Config()
