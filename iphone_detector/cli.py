"""CLI entry point for iphone-detector."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

import iphone_detector
from iphone_detector.config import resolve_debounce_ms, resolve_log_level
from iphone_detector.core.environment import StaticDisplayEnvironment, parse_size
from iphone_detector.core.models import ScreenGeometry

app = typer.Typer(
    name="iphone-detector",
    help="Identify iPhone models from screen metrics and user agent.",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
) -> None:
    """Configure logging for every command."""
    try:
        level = resolve_log_level(verbose)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _build_environment(
    user_agent: str,
    screen: str,
    avail: Optional[str],
    inner: Optional[str],
    pixel_ratio: float,
    orientation: Optional[int],
) -> StaticDisplayEnvironment:
    """Build an environment from CLI values, exiting on bad sizes."""
    try:
        width, height = parse_size(screen)
        avail_width, avail_height = parse_size(avail) if avail else (width, height)
        inner_width, inner_height = parse_size(inner) if inner else (width, height)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)
    return StaticDisplayEnvironment(
        user_agent=user_agent,
        screen=ScreenGeometry(avail_width, avail_height, width, height),
        inner_width=inner_width,
        inner_height=inner_height,
        orientation=orientation,
        device_pixel_ratio=pixel_ratio,
    )


def _parse_step(step: str) -> tuple[int, int, Optional[int]]:
    """Parse ``WxH[@angle]`` into (inner_width, inner_height, angle)."""
    size, _, angle = step.partition("@")
    width, height = parse_size(size)
    try:
        return width, height, int(angle) if angle else None
    except ValueError:
        raise ValueError(f"Invalid orientation in step {step!r}") from None


def _print_environment(env: StaticDisplayEnvironment) -> None:
    geometry = env.screen_geometry()
    inner_width, inner_height = env.inner_size()
    table = Table(title="Environment")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("User agent", env.user_agent() or "(empty)")
    table.add_row("Screen", f"{geometry.width}x{geometry.height}")
    table.add_row("Available", f"{geometry.avail_width}x{geometry.avail_height}")
    table.add_row("Viewport", f"{inner_width}x{inner_height}")
    table.add_row("Pixel ratio", str(env.device_pixel_ratio()))
    orientation = env.orientation()
    table.add_row("Orientation", "(none)" if orientation is None else str(orientation))
    console.print(table)


@app.command()
def detect(
    user_agent: str = typer.Option(
        "", "--user-agent", "-u", help="Browser user agent string"
    ),
    screen: str = typer.Option(
        ..., "--screen", "-s", help="Screen size as WxH (e.g. 390x844)"
    ),
    avail: Optional[str] = typer.Option(
        None, "--avail", help="Available screen size as WxH (defaults to --screen)"
    ),
    inner: Optional[str] = typer.Option(
        None, "--inner", "-i", help="Viewport size as WxH (defaults to --screen)"
    ),
    pixel_ratio: float = typer.Option(
        1.0, "--pixel-ratio", "-r", help="Device pixel ratio"
    ),
    orientation: Optional[int] = typer.Option(
        None, "--orientation", "-o", help="Orientation angle (0, 90, -90, 180)"
    ),
) -> None:
    """Identify the iPhone model for a single screen snapshot."""
    from iphone_detector.core.detector import ScreenDetector
    from iphone_detector.core.scheduler import ManualScheduler
    from iphone_detector.presentation import DetectorView

    env = _build_environment(
        user_agent, screen, avail, inner, pixel_ratio, orientation
    )
    _print_environment(env)

    # A single snapshot never resizes, so no event loop is needed.
    with ScreenDetector(env, scheduler=ManualScheduler()) as detector:
        view = DetectorView(detector, console)
        view.render()
        view.close()

    if view.error:
        raise typer.Exit(1)


@app.command("list-devices")
def list_devices() -> None:
    """List all known iPhone screen signatures."""
    from iphone_detector.devices.signatures import display_name, get_all_signatures

    table = Table(title="Known iPhones")
    table.add_column("Identifier", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Logical size")
    table.add_column("Inner P/L")
    table.add_column("Expanded P/L")
    table.add_column("Ratio")
    table.add_column("iOS")

    for model, sig in get_all_signatures().items():
        table.add_row(
            model.value,
            display_name(model),
            f"{sig.logical_width}x{sig.logical_height}",
            f"{sig.inner_height_portrait}/{sig.inner_height_landscape}",
            f"{sig.inner_height_portrait_expanded or '-'}/"
            f"{sig.inner_height_landscape_expanded or '-'}",
            f"{sig.device_pixel_ratio:g}",
            str(sig.os_version),
        )

    console.print(table)


@app.command()
def watch(
    user_agent: str = typer.Option(
        "", "--user-agent", "-u", help="Browser user agent string"
    ),
    screen: str = typer.Option(
        ..., "--screen", "-s", help="Screen size as WxH (e.g. 390x844)"
    ),
    avail: Optional[str] = typer.Option(
        None, "--avail", help="Available screen size as WxH (defaults to --screen)"
    ),
    inner: Optional[str] = typer.Option(
        None, "--inner", "-i", help="Initial viewport size as WxH"
    ),
    pixel_ratio: float = typer.Option(
        1.0, "--pixel-ratio", "-r", help="Device pixel ratio"
    ),
    orientation: Optional[int] = typer.Option(
        None, "--orientation", "-o", help="Initial orientation angle"
    ),
    step: Optional[list[str]] = typer.Option(
        None, "--step", help="Viewport resize as WxH[@angle]; screen size stays fixed; repeatable"
    ),
    interval_ms: int = typer.Option(
        50, "--interval-ms", help="Delay between resize steps"
    ),
    debounce_ms: Optional[int] = typer.Option(
        None, "--debounce-ms", help="Quiet window before recomputing state"
    ),
) -> None:
    """Replay a sequence of resizes and render every published screen state."""
    env = _build_environment(
        user_agent, screen, avail, inner, pixel_ratio, orientation
    )
    try:
        steps = [_parse_step(s) for s in step or []]
        debounce = resolve_debounce_ms(debounce_ms)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)

    published = asyncio.run(_run_watch(env, steps, interval_ms, debounce))
    console.print(f"\n[dim]{len(steps)} resize(s), {published} state(s) published[/]")


async def _run_watch(
    env: StaticDisplayEnvironment,
    steps: list[tuple[int, int, Optional[int]]],
    interval_ms: int,
    debounce_ms: int,
) -> int:
    from iphone_detector.core.detector import ScreenDetector
    from iphone_detector.core.scheduler import AsyncioScheduler
    from iphone_detector.presentation import DetectorView

    published = 0

    def count(_state) -> None:
        nonlocal published
        published += 1

    with ScreenDetector(env, AsyncioScheduler(), debounce_ms) as detector:
        view = DetectorView(detector, console)
        view.render()
        detector.subscribe(count)
        for width, height, angle in steps:
            await asyncio.sleep(interval_ms / 1000)
            if angle is None:
                env.resize(inner_width=width, inner_height=height)
            else:
                env.resize(inner_width=width, inner_height=height, orientation=angle)
        # Let the last debounce window elapse before tearing down.
        await asyncio.sleep(debounce_ms / 1000 + 0.05)
        view.close()
    return published


@app.command()
def version() -> None:
    """Print version."""
    console.print(f"iphone-detector {iphone_detector.__version__}")


if __name__ == "__main__":
    app()
