"""Display environment — the screen/browser capability the detector reads."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Callable, Optional

from iphone_detector.core.models import ScreenGeometry

logger = logging.getLogger(__name__)

ResizeListener = Callable[[], None]


class DisplayEnvironment(ABC):
    """Everything the detector is allowed to know about the display."""

    @abstractmethod
    def screen_geometry(self) -> ScreenGeometry: ...

    @abstractmethod
    def inner_size(self) -> tuple[int, int]:
        """Return the viewport (inner_width, inner_height)."""

    @abstractmethod
    def orientation(self) -> Optional[int]:
        """Return the orientation angle, or None when the browser reports none."""

    @abstractmethod
    def device_pixel_ratio(self) -> float: ...

    @abstractmethod
    def user_agent(self) -> str: ...

    @abstractmethod
    def add_resize_listener(self, callback: ResizeListener) -> Callable[[], None]:
        """Register callback for viewport resizes; return a function removing it."""


class StaticDisplayEnvironment(DisplayEnvironment):
    """In-memory environment with a settable snapshot.

    Used by the CLI to describe a device from command-line values and by the
    tests as a fake browser. ``resize()`` changes the snapshot and fires the
    resize listeners the way a browser fires ``resize``.
    """

    def __init__(
        self,
        user_agent: str = "",
        screen: Optional[ScreenGeometry] = None,
        inner_width: int = 0,
        inner_height: int = 0,
        orientation: Optional[int] = None,
        device_pixel_ratio: float = 1.0,
    ):
        self._user_agent = user_agent
        self._screen = screen or ScreenGeometry(0, 0, 0, 0)
        self._inner = (inner_width, inner_height)
        self._orientation = orientation
        self._device_pixel_ratio = device_pixel_ratio
        self._listeners: list[ResizeListener] = []

    # ------------------------------------------------------------------
    # DisplayEnvironment
    # ------------------------------------------------------------------

    def screen_geometry(self) -> ScreenGeometry:
        return self._screen

    def inner_size(self) -> tuple[int, int]:
        return self._inner

    def orientation(self) -> Optional[int]:
        return self._orientation

    def device_pixel_ratio(self) -> float:
        return self._device_pixel_ratio

    def user_agent(self) -> str:
        return self._user_agent

    def add_resize_listener(self, callback: ResizeListener) -> Callable[[], None]:
        self._listeners.append(callback)

        def remove() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return remove

    # ------------------------------------------------------------------
    # Snapshot control
    # ------------------------------------------------------------------

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def update(
        self,
        *,
        width: Optional[int] = None,
        height: Optional[int] = None,
        avail_width: Optional[int] = None,
        avail_height: Optional[int] = None,
        inner_width: Optional[int] = None,
        inner_height: Optional[int] = None,
        orientation: Optional[int] = None,
        clear_orientation: bool = False,
        device_pixel_ratio: Optional[float] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        """Change snapshot values without notifying listeners."""
        screen_changes = {
            key: value
            for key, value in (
                ("width", width),
                ("height", height),
                ("avail_width", avail_width),
                ("avail_height", avail_height),
            )
            if value is not None
        }
        if screen_changes:
            self._screen = replace(self._screen, **screen_changes)
        if inner_width is not None or inner_height is not None:
            self._inner = (
                self._inner[0] if inner_width is None else inner_width,
                self._inner[1] if inner_height is None else inner_height,
            )
        if clear_orientation:
            self._orientation = None
        elif orientation is not None:
            self._orientation = orientation
        if device_pixel_ratio is not None:
            self._device_pixel_ratio = device_pixel_ratio
        if user_agent is not None:
            self._user_agent = user_agent

    def resize(self, **changes) -> None:
        """Apply snapshot changes, then fire every resize listener."""
        self.update(**changes)
        self.fire_resize()

    def fire_resize(self) -> None:
        """Notify every listener; one failing listener does not stop the rest."""
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.warning("Resize listener %r failed", listener, exc_info=True)


def parse_size(value: str) -> tuple[int, int]:
    """Parse ``"390x844"`` into ``(390, 844)``. Raises ValueError."""
    parts = value.lower().replace(" ", "").split("x")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid size: {value!r}. Expected WIDTHxHEIGHT, e.g. 390x844")
    return int(parts[0]), int(parts[1])
