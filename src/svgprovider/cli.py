"""Click CLI for svgprovider — inspect keys and render SVGs to PNG."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from svgprovider.config.settings import Settings, load_settings
from svgprovider.errors.exceptions import SvgProviderError
from svgprovider.key import SvgImageKey
from svgprovider.types import Color, ImageConfiguration, Size, SvgRequest, SvgSource

console = Console()
error_console = Console(stderr=True)


def _resolve_log_level(verbosity: int, base_level: str = "WARNING") -> int:
    """Configured level, lowered to INFO by -v and to DEBUG by -vv."""
    level: int = logging.getLevelName(base_level.upper())
    if verbosity == 1:
        level = min(level, logging.INFO)
    elif verbosity >= 2:
        level = logging.DEBUG
    return level


def _setup_logging(verbosity: int, base_level: str = "WARNING") -> None:
    """Configure logging based on settings and verbosity level."""
    logging.basicConfig(
        level=_resolve_log_level(verbosity, base_level),
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


def _settings_or_exit(**overrides: Any) -> Settings:
    try:
        return load_settings(**overrides)
    except SvgProviderError as e:
        error_console.print(f"[red]Invalid configuration:[/red] {e}")
        sys.exit(1)


def _parse_color(ctx: click.Context, param: click.Parameter, value: str | None) -> Color | None:
    if value is None:
        return None
    try:
        return Color.from_hex(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _parse_headers(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str] | None:
    headers: dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected 'Name: value', got {item!r}")
        headers[name.strip()] = value.strip()
    return headers or None


def _request_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    options = [
        click.argument("locator"),
        click.option(
            "--source",
            type=click.Choice([s.value for s in SvgSource]),
            default=SvgSource.ASSET.value,
            show_default=True,
            help="How LOCATOR is interpreted.",
        ),
        click.option("--width", type=float, default=None, help="Requested logical width."),
        click.option("--height", type=float, default=None, help="Requested logical height."),
        click.option("--scale", type=float, default=None, help="Requested scale."),
        click.option("--dpr", type=float, default=None, help="Ambient device pixel ratio."),
        click.option("--view-width", type=float, default=None, help="Ambient logical width."),
        click.option("--view-height", type=float, default=None, help="Ambient logical height."),
        click.option(
            "--color", callback=_parse_color, default=None, help="Tint, e.g. '#ff0000' or '#ff000080'."
        ),
        click.option(
            "-H",
            "--header",
            "headers",
            multiple=True,
            callback=_parse_headers,
            help="HTTP header for network sources ('Name: value'). Repeatable.",
        ),
        click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)."),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


def _build_request(
    locator: str,
    source: str,
    width: float | None,
    height: float | None,
    scale: float | None,
    dpr: float | None,
    view_width: float | None,
    view_height: float | None,
    color: Color | None,
    headers: dict[str, str] | None,
) -> tuple[SvgRequest, ImageConfiguration]:
    size = Size(width=width, height=height) if width is not None or height is not None else None
    view = (
        Size(width=view_width, height=view_height)
        if view_width is not None or view_height is not None
        else None
    )
    request = SvgRequest(
        path=locator,
        source=SvgSource(source),
        size=size,
        scale=scale,
        color=color,
        headers=headers,
    )
    return request, ImageConfiguration(size=view, device_pixel_ratio=dpr)


def _key_table(key: SvgImageKey) -> Table:
    table = Table(title="Image Key", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    locator = key.path if len(key.path) <= 60 else key.path[:57] + "..."
    table.add_row("Locator", locator)
    table.add_row("Source", key.source.value)
    table.add_row("Pixels", f"{key.pixel_width} x {key.pixel_height}")
    table.add_row("Scale", f"{key.scale:g}")
    table.add_row("Tint", str(key.color) if key.color else "-")
    if key.headers:
        table.add_row("Headers", ", ".join(f"{k}: {v}" for k, v in key.headers))
    return table


@click.group()
@click.version_option(package_name="svgprovider")
def cli() -> None:
    """svgprovider — rasterize SVGs into cached bitmaps."""


@cli.command("key")
@_request_options
def show_key(locator: str, verbose: int, **request_args: Any) -> None:
    """Show the cache key a request derives without loading the SVG."""
    settings = _settings_or_exit()
    _setup_logging(verbose, settings.log_level)
    from svgprovider.key import derive_key

    request, configuration = _build_request(locator, **request_args)
    key = derive_key(request, configuration, settings.default_extent)
    console.print(_key_table(key))


@cli.command()
@_request_options
@click.option("-o", "--output", type=click.Path(), required=True, help="Output PNG path.")
@click.option(
    "--asset-dir", type=click.Path(file_okay=False), default=None, help="Asset bundle root."
)
def render(
    locator: str,
    output: str,
    asset_dir: str | None,
    verbose: int,
    **request_args: Any,
) -> None:
    """Load an SVG and write the decoded bitmap as PNG."""
    settings = _settings_or_exit(asset_dir=asset_dir)
    _setup_logging(verbose, settings.log_level)
    from svgprovider.provider import SvgProvider

    request, configuration = _build_request(locator, **request_args)

    async def _run() -> tuple[SvgImageKey, bytes]:
        async with SvgProvider.from_settings(settings) as provider:
            key = provider.obtain_key(request, configuration)
            bitmap = await provider.resolve(request, configuration)
            return key, bitmap.to_png()

    try:
        key, png = asyncio.run(_run())
    except SvgProviderError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    out_path = Path(output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(png)
    console.print(f"[green]Written to {out_path}[/green]")
    if verbose >= 1:
        error_console.print(_key_table(key))


@cli.command("config")
def show_config() -> None:
    """Show the resolved configuration."""
    settings = _settings_or_exit()

    table = Table(title="Configuration", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for name, value in settings.model_dump().items():
        table.add_row(name, str(value))
    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    cli()
