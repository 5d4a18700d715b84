"""ArtDrop imaging core: palettes, color harmony, auto-crop and background removal."""

__version__ = "0.1.0"

from .errors import ArtDropError, InvalidInput, NoContentDetected, ProviderUnavailable
from .schemas import BoundingBox, ColorAnalysis, ColorHarmony, ImagePalette

__all__ = [
    "ArtDropError",
    "InvalidInput",
    "NoContentDetected",
    "ProviderUnavailable",
    "BoundingBox",
    "ColorAnalysis",
    "ColorHarmony",
    "ImagePalette",
]
