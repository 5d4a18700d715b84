"""
GrabCut Segmentation Engine
Secondary segmentation using the OpenCV GrabCut algorithm.
"""
import cv2
import numpy as np

# Fraction of each edge left outside the initial foreground rectangle
RECT_MARGIN = 0.15
GRABCUT_ITERATIONS = 5


class GrabCutEngine:
    """GrabCut segmentation engine using OpenCV."""

    name = "grabcut"

    def segment(self, image_rgb: np.ndarray) -> np.ndarray:
        """
        Segment image using GrabCut with a central rectangle initialization.

        Args:
            image_rgb: Input image in RGB(A) format (uint8)

        Returns:
            Binary mask (uint8, 0 or 255)

        Raises:
            RuntimeError: If segmentation fails
        """
        height, width = image_rgb.shape[:2]

        # Initialize with central 70% rectangle
        margin_w = int(RECT_MARGIN * width)
        margin_h = int(RECT_MARGIN * height)
        rect_w = width - 2 * margin_w
        rect_h = height - 2 * margin_h

        if margin_w == 0 or margin_h == 0 or rect_w <= 0 or rect_h <= 0:
            raise RuntimeError("Image too small for GrabCut rectangle initialization")

        rect = (margin_w, margin_h, rect_w, rect_h)

        image_bgr = cv2.cvtColor(np.ascontiguousarray(image_rgb[:, :, :3]), cv2.COLOR_RGB2BGR)
        mask = np.zeros((height, width), np.uint8)
        bgd_model = np.zeros((1, 65), np.float64)
        fgd_model = np.zeros((1, 65), np.float64)

        try:
            cv2.grabCut(
                image_bgr, mask, rect, bgd_model, fgd_model,
                GRABCUT_ITERATIONS, cv2.GC_INIT_WITH_RECT
            )
        except cv2.error as e:
            raise RuntimeError(f"GrabCut segmentation failed: {str(e)}")

        fg_mask = (mask == cv2.GC_FGD) | (mask == cv2.GC_PR_FGD)
        return np.where(fg_mask, 255, 0).astype("uint8")
