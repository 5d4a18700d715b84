"""Segmentation engines that turn an RGB buffer into a binary foreground mask."""

from .grabcut_engine import GrabCutEngine
from .rembg_engine import RembgEngine, get_rembg_engine

__all__ = ["GrabCutEngine", "RembgEngine", "get_rembg_engine"]
