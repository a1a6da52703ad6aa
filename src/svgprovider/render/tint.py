"""Tint colour resolution and the source-atop colour filter."""

from __future__ import annotations

import numpy as np
from PIL import Image

from svgprovider.types import TRANSPARENT, WEB_SAFE_TRANSPARENT, Color


def resolve_filter_color(color: Color | None, transparent_workaround: bool = False) -> Color:
    """Colour handed to the rasterizer for a key's optional tint.

    ``None`` means no tint and becomes TRANSPARENT. Some backends fail on
    exactly TRANSPARENT; with ``transparent_workaround`` set it is swapped
    for WEB_SAFE_TRANSPARENT (alpha 1/255).
    """
    resolved = color or TRANSPARENT
    if transparent_workaround and resolved == TRANSPARENT:
        return WEB_SAFE_TRANSPARENT
    return resolved


def apply_tint(image: Image.Image, color: Color) -> Image.Image:
    """Blend a solid colour over the image with source-atop compositing.

    Alpha is preserved; RGB moves toward the tint by the tint's alpha.
    """
    if color.alpha == 0:
        return image

    pixels = np.asarray(image.convert("RGBA"), dtype=np.float32)
    strength = color.alpha / 255.0
    tint = np.array([color.red, color.green, color.blue], dtype=np.float32)

    blended = pixels.copy()
    blended[..., :3] = tint * strength + pixels[..., :3] * (1.0 - strength)
    return Image.fromarray(np.clip(np.rint(blended), 0, 255).astype(np.uint8))
