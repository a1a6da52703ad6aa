"""Error handling — exception hierarchy for source, markup and config failures."""

from svgprovider.errors.exceptions import (
    InvalidConfigurationError,
    MalformedMarkupError,
    SourceUnavailableError,
    SvgProviderError,
)

__all__ = [
    "SvgProviderError",
    "SourceUnavailableError",
    "MalformedMarkupError",
    "InvalidConfigurationError",
]
