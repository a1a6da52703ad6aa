"""Shared Pydantic models for svgprovider."""

from __future__ import annotations

import io
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from PIL import Image
from pydantic import BaseModel, Field

# ── Enums ──


class SvgSource(StrEnum):
    ASSET = "asset"
    FILE = "file"
    NETWORK = "network"
    RAW = "raw"


# ── Value models ──


class Color(BaseModel):
    """Straight-alpha RGBA colour, channels 0-255."""

    model_config = {"frozen": True}

    red: int = Field(ge=0, le=255)
    green: int = Field(ge=0, le=255)
    blue: int = Field(ge=0, le=255)
    alpha: int = Field(default=255, ge=0, le=255)

    @classmethod
    def from_argb(cls, value: int) -> Color:
        """Build from a packed 0xAARRGGBB integer."""
        return cls(
            alpha=(value >> 24) & 0xFF,
            red=(value >> 16) & 0xFF,
            green=(value >> 8) & 0xFF,
            blue=value & 0xFF,
        )

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """Parse ``#RGB``, ``#RRGGBB`` or ``#RRGGBBAA``."""
        digits = text.strip().removeprefix("#")
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        if len(digits) == 6:
            digits += "ff"
        if len(digits) != 8:
            raise ValueError(f"Invalid colour: {text!r}")
        channels = bytes.fromhex(digits)
        return cls(red=channels[0], green=channels[1], blue=channels[2], alpha=channels[3])

    @property
    def argb(self) -> int:
        return (self.alpha << 24) | (self.red << 16) | (self.green << 8) | self.blue

    def __str__(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}{self.alpha:02x}"


TRANSPARENT = Color.from_argb(0x00000000)

# Nearly invisible stand-in for TRANSPARENT on backends that cannot take it.
WEB_SAFE_TRANSPARENT = Color.from_argb(0x01FFFFFF)


class Size(BaseModel):
    """Logical size; each side may be left unspecified."""

    model_config = {"frozen": True}

    width: float | None = None
    height: float | None = None


class ImageConfiguration(BaseModel):
    """Ambient display configuration supplied at resolution time."""

    model_config = {"frozen": True}

    size: Size | None = None
    device_pixel_ratio: float | None = None


# ── Request / result models ──


class SvgRequest(BaseModel):
    """A logical request to display an SVG.

    ``svg_getter`` is an optional override called with the derived key. It may
    return the markup, ``None`` to fall through to the built-in source, or an
    awaitable of either.
    """

    path: str
    source: SvgSource = SvgSource.ASSET
    size: Size | None = None
    scale: float | None = None
    color: Color | None = None
    headers: dict[str, str] | None = None
    svg_getter: Callable[..., Any] | None = None


class DecodedBitmap(BaseModel):
    """Decoded RGBA pixels plus the scale the consumer displays them at."""

    image: Image.Image
    scale: float = 1.0
    model_config = {"arbitrary_types_allowed": True}

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def pixels(self) -> bytes:
        return self.image.tobytes()

    @property
    def size_bytes(self) -> int:
        return self.width * self.height * 4

    def to_png(self) -> bytes:
        buf = io.BytesIO()
        self.image.save(buf, format="PNG")
        return buf.getvalue()
