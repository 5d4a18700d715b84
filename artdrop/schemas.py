"""
ArtDrop Result Schemas
Pydantic models for the color and crop results handed to downstream collaborators.
"""
from typing import List, Literal, Optional
from pydantic import BaseModel, Field


HEX_PATTERN = r"^#[0-9a-f]{6}$"


class BoundingBox(BaseModel):
    """Crop rectangle in image pixel coordinates."""
    x: int = Field(..., ge=0, description="Left edge")
    y: int = Field(..., ge=0, description="Top edge")
    width: int = Field(..., ge=1, description="Box width in pixels")
    height: int = Field(..., ge=1, description="Box height in pixels")

    def as_xywh(self) -> List[int]:
        """Return the box as [x, y, width, height]."""
        return [self.x, self.y, self.width, self.height]


class ColorAnalysis(BaseModel):
    """Coarse style buckets derived from channel statistics."""
    brightness: Literal["dark", "medium", "light"] = "medium"
    saturation: Literal["low", "medium", "high"] = "medium"
    warmth: Literal["cool", "neutral", "warm"] = "neutral"
    contrast: Literal["low", "medium", "high"] = "medium"


class ColorHarmony(BaseModel):
    """Hue-rotated companions of a base color."""
    complementary: str = Field(..., pattern=HEX_PATTERN)
    analogous: List[str] = Field(..., min_length=2, max_length=2)
    triadic: List[str] = Field(..., min_length=2, max_length=2)
    split_complementary: List[str] = Field(..., min_length=2, max_length=2)


class ImagePalette(BaseModel):
    """Palette extracted from an image together with its dominant entry."""
    palette: List[str] = Field(default_factory=list, description="Hex colors, lightest first")
    dominant: str = Field(..., pattern=HEX_PATTERN)


class ImageMetadata(BaseModel):
    """Basic facts about a decoded image. Fields a decoder cannot supply stay None."""
    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)
    channels: int = Field(..., ge=1, le=4)
    format: Optional[str] = Field(None, description="Container format reported by the decoder, e.g. 'PNG'")
    mode: Optional[str] = Field(None, description="Decoder pixel mode, e.g. 'RGBA'")
