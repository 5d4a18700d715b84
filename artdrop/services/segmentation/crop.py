"""
ArtDrop Auto-Crop
Background estimation from image corners, content bounding boxes and
fixed crop layouts (center crop, close-up regions).
"""
from collections import Counter
from typing import List, Optional, Tuple

import numpy as np
from loguru import logger

from artdrop.config import config
from artdrop.errors import InvalidInput, NoContentDetected
from artdrop.schemas import BoundingBox
from artdrop.services.colors.space import round_half_up
from artdrop.services.imaging import ensure_pixel_buffer, get_image_dimensions

# Close-up layouts as (left, top, width, height) fractions of the image
CLOSEUP_REGIONS = [
    (0.1, 0.1, 0.4, 0.4),  # top-left detail
    (0.25, 0.25, 0.5, 0.5),  # center focus
    (0.5, 0.5, 0.4, 0.4),  # bottom-right detail
    (0.382, 0.382, 0.3, 0.3),  # golden ratio point
]


def corner_pixels(pixels: np.ndarray) -> List[Tuple[int, ...]]:
    """Top-left, top-right, bottom-left and bottom-right pixels, all channels."""
    pixels = ensure_pixel_buffer(pixels)
    height, width = pixels.shape[:2]
    corners = [
        pixels[0, 0],
        pixels[0, width - 1],
        pixels[height - 1, 0],
        pixels[height - 1, width - 1],
    ]
    return [tuple(int(c) for c in corner) for corner in corners]


def find_background_color(pixels: np.ndarray) -> Tuple[int, ...]:
    """
    Estimate the background color as the most common corner pixel.

    Ties go to the corner seen first (top-left, top-right, bottom-left,
    bottom-right).
    """
    # Counter.most_common keeps insertion order among equal counts
    background, count = Counter(corner_pixels(pixels)).most_common(1)[0]
    logger.debug(f"Background estimate {background} from {count}/4 corners")
    return background


def background_similarity(
    pixels: np.ndarray,
    background: Tuple[int, ...],
    tolerance: float,
    include_alpha: bool,
) -> np.ndarray:
    """
    Boolean (H, W) map of pixels within tolerance of the background on every
    compared channel.

    Alpha is compared only when include_alpha is set and both the buffer and
    the background carry it.
    """
    channels = 3
    if include_alpha and pixels.shape[2] == 4 and len(background) == 4:
        channels = 4

    reference = np.array(background[:channels], dtype=np.int16)
    diff = np.abs(pixels[:, :, :channels].astype(np.int16) - reference)
    return np.all(diff <= tolerance, axis=2)


def _validate_tolerance(tolerance: float) -> None:
    if not config.validate_tolerance(tolerance):
        raise InvalidInput(f"Tolerance must be within [0, 255], got {tolerance}")


def detect_bounds(
    pixels: np.ndarray,
    tolerance: Optional[float] = None,
    padding_percent: Optional[float] = None,
) -> BoundingBox:
    """
    Find the padded bounding box of everything that is not background.

    A pixel is content when any channel (alpha included, if present) differs
    from the corner background estimate by more than ``tolerance``. Padding
    is ``padding_percent`` of the tight content box's own width and height,
    added on every side and clamped to the image.

    Args:
        pixels: (H, W, 3|4) uint8 buffer
        tolerance: Per-channel tolerance (default ``config.CROP_TOLERANCE``)
        padding_percent: Padding percentage (default ``config.CROP_PADDING_PERCENT``)

    Returns:
        BoundingBox inside the image with positive width and height

    Raises:
        InvalidInput: For a malformed buffer or out-of-range parameters
        NoContentDetected: If every pixel matches the background
    """
    if tolerance is None:
        tolerance = config.CROP_TOLERANCE
    if padding_percent is None:
        padding_percent = config.CROP_PADDING_PERCENT

    pixels = ensure_pixel_buffer(pixels)
    _validate_tolerance(tolerance)
    if not config.validate_padding(padding_percent):
        raise InvalidInput(f"Padding must be within [0, 100] percent, got {padding_percent}")

    width, height = get_image_dimensions(pixels)
    background = find_background_color(pixels)

    content = ~background_similarity(pixels, background, tolerance, include_alpha=True)
    ys, xs = np.nonzero(content)
    if len(xs) == 0:
        raise NoContentDetected(
            f"No pixel differs from background {background} within tolerance {tolerance}"
        )

    min_x, max_x = int(xs.min()), int(xs.max())
    min_y, max_y = int(ys.min()), int(ys.max())
    crop_width = max_x - min_x + 1
    crop_height = max_y - min_y + 1

    padding_x = round_half_up(crop_width * padding_percent / 100)
    padding_y = round_half_up(crop_height * padding_percent / 100)

    final_x = max(0, min_x - padding_x)
    final_y = max(0, min_y - padding_y)
    final_width = min(width - final_x, crop_width + 2 * padding_x)
    final_height = min(height - final_y, crop_height + 2 * padding_y)

    box = BoundingBox(x=final_x, y=final_y, width=final_width, height=final_height)
    logger.info(f"Detected content bounds {box.as_xywh()} in {width}x{height} image "
                f"(tolerance={tolerance}, padding={padding_percent}%)")
    return box


def _clamped_box(x: int, y: int, w: int, h: int, width: int, height: int) -> BoundingBox:
    x = min(max(0, x), width - 1)
    y = min(max(0, y), height - 1)
    w = max(1, min(w, width - x))
    h = max(1, min(h, height - y))
    return BoundingBox(x=x, y=y, width=w, height=h)


def center_crop_box(width: int, height: int, aspect_ratio: float = 1.0) -> BoundingBox:
    """
    Largest centered box with the given width/height aspect ratio.

    Raises:
        InvalidInput: For non-positive dimensions or aspect ratio
    """
    if width < 1 or height < 1:
        raise InvalidInput(f"Image dimensions must be positive, got {width}x{height}")
    if aspect_ratio <= 0:
        raise InvalidInput(f"Aspect ratio must be positive, got {aspect_ratio}")

    crop_width = width
    crop_height = height
    current_ratio = width / height

    if current_ratio > aspect_ratio:
        # Wider than target ratio
        crop_width = round_half_up(height * aspect_ratio)
    elif current_ratio < aspect_ratio:
        # Taller than target ratio
        crop_height = round_half_up(width / aspect_ratio)

    left = round_half_up((width - crop_width) / 2)
    top = round_half_up((height - crop_height) / 2)

    return _clamped_box(left, top, crop_width, crop_height, width, height)


def closeup_boxes(width: int, height: int, count: int = 3) -> List[BoundingBox]:
    """
    Detail regions for close-up crops, in priority order.

    At most four regions exist: top-left detail, center focus, bottom-right
    detail and the golden ratio point.
    """
    if width < 1 or height < 1:
        raise InvalidInput(f"Image dimensions must be positive, got {width}x{height}")

    boxes = []
    for left, top, w, h in CLOSEUP_REGIONS[:max(0, count)]:
        boxes.append(_clamped_box(
            round_half_up(width * left),
            round_half_up(height * top),
            round_half_up(width * w),
            round_half_up(height * h),
            width,
            height,
        ))
    return boxes
