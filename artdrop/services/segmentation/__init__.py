"""
ArtDrop Segmentation Module

Auto-crop bounds detection and background separation with a
corner-sampling heuristic as the last-resort engine.
"""

from .background import BackgroundRemoval, compose_matte, remove_background
from .crop import center_crop_box, closeup_boxes, detect_bounds, find_background_color
from .pipeline import auto_crop, separate_background

__all__ = [
    "BackgroundRemoval",
    "auto_crop",
    "center_crop_box",
    "closeup_boxes",
    "compose_matte",
    "detect_bounds",
    "find_background_color",
    "remove_background",
    "separate_background",
]
