"""Custom exception hierarchy for svgprovider."""

from __future__ import annotations

from typing import Any


class SvgProviderError(Exception):
    """Base exception for all svgprovider errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class SourceUnavailableError(SvgProviderError):
    """The SVG markup could not be obtained.

    error_type is one of: not_found, permission, io_error, transport,
    bad_status, bad_fetcher_result.
    """

    def __init__(
        self,
        message: str = "",
        error_type: str = "not_found",
        locator: str | None = None,
        http_status: int | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.locator = locator
        self.http_status = http_status
        self.original = original


class MalformedMarkupError(SvgProviderError):
    """The rasterizer rejected the markup (parse_failure or render_failure)."""

    def __init__(
        self,
        message: str = "",
        error_type: str = "parse_failure",
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.original = original


class InvalidConfigurationError(SvgProviderError):
    """A configuration value failed validation.

    Only raised while loading settings. Key derivation clamps bad display
    values instead of raising.
    """

    def __init__(self, message: str = "", key: str | None = None) -> None:
        super().__init__(message)
        self.key = key
