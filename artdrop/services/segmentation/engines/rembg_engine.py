"""
rembg Segmentation Engine
Primary segmentation using the rembg U²-Netp model.
"""
import numpy as np
from typing import Optional

try:
    from rembg import remove, new_session
except ImportError:
    # rembg is an optional extra; the engine reports itself unavailable
    remove = None
    new_session = None

from artdrop.errors import ProviderUnavailable


class RembgEngine:
    """U²-Netp segmentation engine using rembg."""

    name = "u2netp"

    def __init__(self, model_name: str = "u2netp"):
        """Initialize rembg session with the given model."""
        self.model_name = model_name
        self._session = None
        self._initialize_session()

    def _initialize_session(self) -> None:
        """Initialize the rembg session."""
        if new_session is None:
            raise ProviderUnavailable("rembg not available. Install with: pip install 'artdrop-imaging[segmentation]'")

        try:
            self._session = new_session(self.model_name)
        except Exception as e:
            raise ProviderUnavailable(f"Failed to initialize rembg session: {str(e)}")

    def segment(self, image_rgb: np.ndarray) -> np.ndarray:
        """
        Segment image using rembg.

        Args:
            image_rgb: Input image in RGB format (uint8)

        Returns:
            Binary mask (uint8, 0 or 255)

        Raises:
            RuntimeError: If segmentation fails
        """
        if self._session is None:
            self._initialize_session()

        try:
            # rembg expects RGB input and returns RGBA output
            result_rgba = remove(image_rgb[:, :, :3], session=self._session)
        except Exception as e:
            raise RuntimeError(f"rembg segmentation failed: {str(e)}")

        result_rgba = np.asarray(result_rgba)
        if result_rgba.ndim != 3 or result_rgba.shape[2] != 4:
            raise RuntimeError("rembg output format unexpected")

        # Convert to binary mask (threshold alpha > 10)
        return np.where(result_rgba[:, :, 3] > 10, 255, 0).astype("uint8")


# Global instance for reuse across calls; model loading is expensive
_rembg_engine: Optional[RembgEngine] = None


def get_rembg_engine() -> RembgEngine:
    """Get or create global rembg engine instance."""
    global _rembg_engine
    if _rembg_engine is None:
        _rembg_engine = RembgEngine()
    return _rembg_engine
