"""Presentation — renders detector results as text for the console."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from iphone_detector.core.detector import InvalidEnvironmentError, ScreenDetector
from iphone_detector.core.environment import DisplayEnvironment
from iphone_detector.core.models import ScreenState
from iphone_detector.devices.signatures import display_name

logger = logging.getLogger(__name__)


def describe_name(detector: ScreenDetector) -> str:
    if not detector.is_iphone:
        return "This not iPhone"
    names = [display_name(model) for model in detector.matching_device_ids()]
    return f"This iPhone {' or '.join(names)}"


def describe_orientation(state: Optional[ScreenState]) -> Optional[str]:
    if state is None:
        return None
    return f"Orientation: {'portrait' if state.is_portrait else 'landscape'}"


def describe_size(environment: DisplayEnvironment) -> str:
    inner_width, inner_height = environment.inner_size()
    return f"{inner_width}x {inner_height}"


def describe_os(detector: ScreenDetector) -> str:
    if not detector.is_iphone:
        return "no Iphone"
    return f"Os ver: {detector.os_version}"


class DetectorView:
    """Re-renders the detector summary every time a new screen state arrives."""

    def __init__(self, detector: ScreenDetector, console: Optional[Console] = None):
        self.detector = detector
        self.console = console or Console()
        self.state: Optional[ScreenState] = None
        self.footer_expanded = False
        self.error: Optional[str] = None
        self.renders = 0
        self._subscription = detector.subscribe(self._on_state)

    def close(self) -> None:
        self._subscription.unsubscribe()

    def lines(self) -> list[str]:
        """Build the summary lines, falling back on malformed user agents."""
        state = self.state or self.detector.current_screen_state()
        try:
            lines = [
                describe_name(self.detector),
                describe_orientation(state),
                describe_size(self.detector.environment),
                describe_os(self.detector),
            ]
            self.footer_expanded = self.detector.is_chrome_expanded()
            self.error = None
        except InvalidEnvironmentError as e:
            logger.warning("Cannot identify device: %s", e)
            self.error = str(e)
            self.footer_expanded = False
            return [
                f"Unrecognised iPhone user agent: {e}",
                describe_orientation(state),
                describe_size(self.detector.environment),
            ]
        return lines

    def render(self) -> None:
        lines = self.lines()
        footer = "chrome expanded" if self.footer_expanded else "chrome collapsed"
        self.console.print(
            Panel(Text("\n".join(lines)), title="iPhone detector", subtitle=footer)
        )
        self.renders += 1

    def _on_state(self, state: ScreenState) -> None:
        self.state = state
        self.render()
