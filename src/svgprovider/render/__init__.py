"""Render — rasterizer backend, scoped scene release and tinting."""

from svgprovider.render.rasterizer import (
    CairoRasterizer,
    CairoScene,
    Rasterizer,
    VectorScene,
    released,
)
from svgprovider.render.tint import apply_tint, resolve_filter_color

__all__ = [
    "CairoRasterizer",
    "CairoScene",
    "Rasterizer",
    "VectorScene",
    "apply_tint",
    "released",
    "resolve_filter_color",
]
