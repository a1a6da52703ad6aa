"""Cache key derivation — maps a request plus display metrics to a comparable key."""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator

from svgprovider.config.defaults import DEFAULT_LOGICAL_EXTENT, DEFAULT_SCALE
from svgprovider.types import Color, ImageConfiguration, SvgRequest, SvgSource


class SvgImageKey(BaseModel):
    """Everything that affects the rasterized bytes of one SVG at one size.

    Equality and hashing are structural, except ``svg_getter`` which compares
    by identity. ``pixel_width``/``pixel_height`` are physical pixels;
    ``scale`` converts them back to logical pixels.
    """

    model_config = {"frozen": True}

    path: str
    source: SvgSource
    pixel_width: int = Field(ge=0)
    pixel_height: int = Field(ge=0)
    scale: float = Field(gt=0)
    color: Color | None = None
    headers: tuple[tuple[str, str], ...] | None = None
    svg_getter: Callable[..., Any] | None = None

    @field_validator("headers", mode="before")
    @classmethod
    def _normalize_headers(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            value = tuple(sorted((str(k), str(v)) for k, v in value.items()))
        return value or None

    def _structural_fields(self) -> tuple[Any, ...]:
        return (
            self.path,
            self.source,
            self.pixel_width,
            self.pixel_height,
            self.scale,
            self.color,
            self.headers,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SvgImageKey):
            return NotImplemented
        return (
            self.svg_getter is other.svg_getter
            and self._structural_fields() == other._structural_fields()
        )

    def __hash__(self) -> int:
        return hash((self._structural_fields(), id(self.svg_getter)))

    @property
    def headers_dict(self) -> dict[str, str]:
        return dict(self.headers or ())

    @property
    def logical_size(self) -> tuple[float, float]:
        return self.pixel_width / self.scale, self.pixel_height / self.scale


def derive_key(
    request: SvgRequest,
    configuration: ImageConfiguration | None = None,
    default_extent: float = DEFAULT_LOGICAL_EXTENT,
) -> SvgImageKey:
    """Derive the cache key for a request under the given display configuration.

    Never raises for a valid request: unusable scales and sizes fall back
    along request -> ambient -> default, width and height independently.
    """
    configuration = configuration or ImageConfiguration()
    ambient = configuration.size
    requested = request.size

    scale = _first_usable(
        (request.scale, configuration.device_pixel_ratio),
        DEFAULT_SCALE,
        _is_positive,
    )
    logical_width = _first_usable(
        (
            requested.width if requested else None,
            ambient.width if ambient else None,
        ),
        default_extent,
        _is_extent,
    )
    logical_height = _first_usable(
        (
            requested.height if requested else None,
            ambient.height if ambient else None,
        ),
        default_extent,
        _is_extent,
    )

    # Headers only reach the network; elsewhere they cannot change the pixels.
    headers = request.headers if request.source == SvgSource.NETWORK else None

    return SvgImageKey(
        path=request.path,
        source=request.source,
        pixel_width=round_half_away(logical_width * scale),
        pixel_height=round_half_away(logical_height * scale),
        scale=scale,
        color=request.color,
        headers=headers,
        svg_getter=request.svg_getter,
    )


async def obtain_key(
    request: SvgRequest,
    configuration: ImageConfiguration | None = None,
    default_extent: float = DEFAULT_LOGICAL_EXTENT,
) -> SvgImageKey:
    """Async form of derive_key for consumers with an async resolution protocol.

    Completes without suspending.
    """
    return derive_key(request, configuration, default_extent)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero, clamped at 0."""
    if not math.isfinite(value) or value <= 0:
        return 0
    return int(math.floor(value + 0.5))


def _first_usable(
    candidates: tuple[float | None, ...],
    default: float,
    usable: Callable[[float], bool],
) -> float:
    for candidate in candidates:
        if candidate is not None and usable(candidate):
            return float(candidate)
    return default


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _is_extent(value: float) -> bool:
    return math.isfinite(value) and value >= 0
