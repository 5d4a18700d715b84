"""
ArtDrop Segmentation Pipeline
Background separation with engine fallback, plus auto-crop.
"""
from typing import List, Optional

import numpy as np

from artdrop.config import config
from artdrop.errors import InvalidInput, ProviderUnavailable
from artdrop.services.imaging import ensure_pixel_buffer, get_image_dimensions
from artdrop.services.segmentation.background import (
    HEURISTIC_PROVIDER,
    BackgroundRemoval,
    calculate_mask_area_ratio,
    compose_matte,
    remove_background,
)
from artdrop.services.segmentation.crop import detect_bounds
from artdrop.services.segmentation.engines import GrabCutEngine, get_rembg_engine
from artdrop.utils.ids import generate_operation_id
from artdrop.utils.logging import get_logger, performance_monitor

# Engines tried, in order, for each requested engine. The heuristic always closes the chain.
ENGINE_CHAINS = {
    "auto": ["u2netp", "grabcut", HEURISTIC_PROVIDER],
    "u2netp": ["u2netp", HEURISTIC_PROVIDER],
    "grabcut": ["grabcut", HEURISTIC_PROVIDER],
    HEURISTIC_PROVIDER: [HEURISTIC_PROVIDER],
}


def _get_engine(name: str):
    """Return the model-backed engine registered under ``name``."""
    if name == "u2netp":
        return get_rembg_engine()
    if name == "grabcut":
        return GrabCutEngine()
    raise InvalidInput(f"Unknown segmentation engine: {name}")


def engine_chain(engine: str) -> List[str]:
    """Engines that ``separate_background`` will try for a requested engine."""
    if not config.validate_engine(engine):
        raise InvalidInput(f"Invalid engine value: {engine}")
    return list(ENGINE_CHAINS[engine])


def separate_background(
    pixels: np.ndarray,
    engine: Optional[str] = None,
    tolerance: Optional[float] = None,
) -> BackgroundRemoval:
    """
    Separate foreground from background, falling back across engines.

    Model-backed engines are tried first; an engine that is unavailable,
    fails, or returns a mask smaller than ``config.MIN_MASK_AREA_RATIO`` hands
    over to the next one. The corner heuristic is always the last resort, so
    this only raises for structurally invalid input.

    Args:
        pixels: (H, W, 3|4) uint8 buffer
        engine: "auto", "u2netp", "grabcut" or "heuristic"
                (default ``config.BG_ENGINE_DEFAULT``)
        tolerance: Heuristic RGB tolerance (default ``config.BG_TOLERANCE``)

    Returns:
        BackgroundRemoval tagged with the engine that produced it
    """
    if engine is None:
        engine = config.BG_ENGINE_DEFAULT

    pixels = ensure_pixel_buffer(pixels)
    chain = engine_chain(engine)

    operation_id = generate_operation_id("seg")
    logger = get_logger()
    width, height = get_image_dimensions(pixels)
    logger.info("Starting background separation", extra={
        "operation_id": operation_id,
        "engine": engine,
        "dims": f"{width}x{height}",
    })

    for position, name in enumerate(chain):
        fallback_used = position > 0

        if name == HEURISTIC_PROVIDER:
            with performance_monitor("segment_heuristic", operation_id=operation_id):
                result = remove_background(pixels, tolerance)
            result.fallback_used = fallback_used
            break

        try:
            with performance_monitor(f"segment_{name}", operation_id=operation_id):
                mask = _get_engine(name).segment(pixels)

            mask_ratio = calculate_mask_area_ratio(mask)
            if mask_ratio < config.MIN_MASK_AREA_RATIO:
                raise RuntimeError(f"Mask too small (ratio: {mask_ratio:.3f})")

        except (ProviderUnavailable, RuntimeError) as e:
            logger.warning(f"{name} failed: {str(e)}, falling back", extra={
                "operation_id": operation_id,
                "engine": name,
            })
            continue

        result = BackgroundRemoval(
            mask=mask,
            matte=compose_matte(pixels, mask),
            provider=name,
            fallback_used=fallback_used,
        )
        break

    logger.info("Background separation completed", extra={
        "operation_id": operation_id,
        "provider": result.provider,
        "fallback_used": result.fallback_used,
        "mask_area_ratio": round(result.mask_area_ratio, 4),
    })
    return result


def auto_crop(
    pixels: np.ndarray,
    tolerance: Optional[float] = None,
    padding_percent: Optional[float] = None,
) -> np.ndarray:
    """
    Crop a buffer to its detected content bounds.

    Returns:
        A view of the input buffer restricted to the padded content box

    Raises:
        NoContentDetected: If the image is uniform background
    """
    with performance_monitor("auto_crop", operation_id=generate_operation_id("crop")):
        box = detect_bounds(pixels, tolerance, padding_percent)
    return pixels[box.y:box.y + box.height, box.x:box.x + box.width]
