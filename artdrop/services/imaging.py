"""
ArtDrop Imaging Utilities
Decoding, validation, resizing and encoding of in-memory pixel buffers.

Buffers are numpy arrays of shape (H, W, 3) or (H, W, 4), dtype uint8, in
RGB(A) channel order. Nothing here touches the file system.
"""
import base64
import io
from typing import Tuple

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from artdrop.errors import InvalidInput
from artdrop.schemas import ImageMetadata


def _open_image(data: bytes) -> Image.Image:
    if not data:
        raise InvalidInput("Image data is empty")

    try:
        pil_image = Image.open(io.BytesIO(data))
        pil_image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidInput(f"Failed to decode image: {str(e)}")

    return pil_image


def decode_image(data: bytes) -> np.ndarray:
    """
    Decode compressed image bytes into an RGB or RGBA pixel buffer.

    Images carrying transparency keep an alpha channel; everything else is
    converted to RGB.

    Raises:
        InvalidInput: If the bytes are empty or cannot be decoded
    """
    pil_image = _open_image(data)

    has_alpha = pil_image.mode in ("RGBA", "LA", "PA") or (
        pil_image.mode == "P" and "transparency" in pil_image.info
    )
    target_mode = "RGBA" if has_alpha else "RGB"
    if pil_image.mode != target_mode:
        pil_image = pil_image.convert(target_mode)

    return np.array(pil_image)


def describe_image(data: bytes) -> ImageMetadata:
    """Read dimensions and format information from compressed image bytes."""
    pil_image = _open_image(data)
    width, height = pil_image.size

    return ImageMetadata(
        width=width,
        height=height,
        channels=len(pil_image.getbands()),
        format=pil_image.format,
        mode=pil_image.mode,
    )


def ensure_pixel_buffer(pixels: np.ndarray) -> np.ndarray:
    """
    Validate that an array is a usable (H, W, 3|4) uint8 pixel buffer.

    Returns:
        The same buffer as a numpy array

    Raises:
        InvalidInput: For wrong shape, dtype or an empty buffer
    """
    arr = np.asarray(pixels)

    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise InvalidInput(f"Expected pixel buffer of shape (H, W, 3|4), got {arr.shape}")

    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InvalidInput("Pixel buffer is empty")

    if arr.dtype != np.uint8:
        raise InvalidInput(f"Expected uint8 pixel buffer, got {arr.dtype}")

    return arr


def get_image_dimensions(pixels: np.ndarray) -> Tuple[int, int]:
    """
    Get image width and height.

    Returns:
        Tuple of (width, height)
    """
    height, width = pixels.shape[:2]
    return width, height


def resize_to_fit(pixels: np.ndarray, max_edge: int) -> np.ndarray:
    """
    Shrink a buffer so both edges fit within max_edge, keeping aspect ratio.

    Buffers already within bounds are returned unchanged; nothing is upsampled.
    """
    pixels = ensure_pixel_buffer(pixels)
    width, height = get_image_dimensions(pixels)

    if max(width, height) <= max_edge:
        return pixels

    pil_image = Image.fromarray(pixels)
    pil_image.thumbnail((max_edge, max_edge), Image.LANCZOS)
    return np.array(pil_image)


def encode_png_base64(pixels: np.ndarray) -> str:
    """
    Encode a mask, RGB or RGBA buffer to a base64 PNG string.

    Args:
        pixels: (H, W) mask or (H, W, 3|4) buffer in RGB(A) order

    Returns:
        Base64 encoded PNG string
    """
    arr = np.asarray(pixels)

    if arr.ndim == 3 and arr.shape[2] == 4:
        arr = cv2.cvtColor(arr, cv2.COLOR_RGBA2BGRA)
    elif arr.ndim == 3 and arr.shape[2] == 3:
        arr = cv2.cvtColor(arr, cv2.COLOR_RGB2BGR)
    elif arr.ndim != 2:
        raise InvalidInput(f"Cannot encode array of shape {arr.shape} as PNG")

    success, buffer = cv2.imencode('.png', arr)
    if not success:
        raise RuntimeError("Failed to encode image as PNG")

    return base64.b64encode(buffer).decode('utf-8')
