"""Local file source."""

from __future__ import annotations

import asyncio
from pathlib import Path

from svgprovider.errors.exceptions import SourceUnavailableError


class LocalFileReader:
    """Reads SVG markup from the local filesystem on a worker thread."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    async def read_text(self, path: str | Path) -> str:
        path = Path(path)
        try:
            return await asyncio.to_thread(path.read_text, encoding=self._encoding)
        except FileNotFoundError as exc:
            raise SourceUnavailableError(
                f"File not found: {path}", error_type="not_found", locator=str(path), original=exc
            ) from exc
        except PermissionError as exc:
            raise SourceUnavailableError(
                f"Permission denied: {path}",
                error_type="permission",
                locator=str(path),
                original=exc,
            ) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnavailableError(
                f"Cannot read {path}: {exc}", error_type="io_error", locator=str(path), original=exc
            ) from exc
