"""Screen detector — identifies the iPhone model and publishes screen state."""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional

from iphone_detector.config import DEFAULT_DEBOUNCE_MS
from iphone_detector.core.environment import DisplayEnvironment
from iphone_detector.core.models import IPhoneModel, ScreenState
from iphone_detector.core.scheduler import AsyncioScheduler, Scheduler, TimerHandle
from iphone_detector.core.stream import ReplayStream, Subscription
from iphone_detector.devices.signatures import get_all_signatures

logger = logging.getLogger(__name__)

_MOBILE_RE = re.compile(r"Mobile", re.IGNORECASE)
_IPHONE_RE = re.compile(r"iPhone", re.IGNORECASE)
_OS_VERSION_RE = re.compile(r"OS (\d+)_(\d+)(?:_(\d+))?")

PORTRAIT_ANGLE = 0
LANDSCAPE_ANGLE = 90


class InvalidEnvironmentError(ValueError):
    """The environment reported data the detector cannot interpret."""


class ScreenDetector:
    """Classifies the current display and republishes its state on resize.

    One resize listener is registered on construction and held until
    ``close()``. Raw resize notifications are debounced; after the quiet
    window the screen state is recomputed and published on ``screen_states``
    only when it differs from the previously published one.
    """

    def __init__(
        self,
        environment: DisplayEnvironment,
        scheduler: Optional[Scheduler] = None,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
    ):
        self.environment = environment
        self.debounce_ms = debounce_ms
        self._owns_scheduler = scheduler is None
        self.scheduler = scheduler or AsyncioScheduler()
        self._pending: Optional[TimerHandle] = None
        self._closed = False
        self.screen_states: ReplayStream[ScreenState] = ReplayStream()
        self._remove_listener: Optional[Callable[[], None]] = (
            environment.add_resize_listener(self._on_resize)
        )

    def __enter__(self) -> ScreenDetector:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    @property
    def is_mobile(self) -> bool:
        return bool(_MOBILE_RE.search(self.environment.user_agent()))

    @property
    def is_iphone(self) -> bool:
        return bool(_IPHONE_RE.search(self.environment.user_agent()))

    @property
    def os_version(self) -> Optional[int]:
        """Major iOS version, or None when the device is not an iPhone.

        Raises:
            InvalidEnvironmentError: The user agent claims iPhone but carries
                no ``OS <major>_<minor>`` version.
        """
        if not self.is_iphone:
            return None
        user_agent = self.environment.user_agent()
        match = _OS_VERSION_RE.search(user_agent)
        if match is None:
            raise InvalidEnvironmentError(
                f"iPhone user agent has no OS version: {user_agent!r}"
            )
        return int(match.group(1))

    @property
    def device_pixel_ratio(self) -> float:
        return self.environment.device_pixel_ratio()

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def matching_device_ids(self) -> list[IPhoneModel]:
        """Return every known model consistent with the current display."""
        if not (self.is_mobile and self.is_iphone):
            return []
        geometry = self.environment.screen_geometry()
        os_version = self.os_version
        ratio = self.device_pixel_ratio
        matches = [
            model
            for model, sig in get_all_signatures().items()
            if sig.matches_geometry(geometry.width, geometry.height)
            and sig.os_version == os_version
            and sig.device_pixel_ratio == ratio
        ]
        logger.debug(
            "Matched %s for %dx%d, iOS %s, ratio %s",
            [m.value for m in matches], geometry.width, geometry.height,
            os_version, ratio,
        )
        return matches

    def is_chrome_expanded(self) -> bool:
        """True if the viewport height equals a matching model's expanded height."""
        signatures = get_all_signatures()
        portrait = self.current_screen_state().is_portrait
        _, inner_height = self.environment.inner_size()
        return any(
            signatures[model].expanded_inner_height(portrait) == inner_height
            for model in self.matching_device_ids()
        )

    def current_screen_state(self) -> ScreenState:
        geometry = self.environment.screen_geometry()
        orientation = self.environment.orientation()
        # No orientation info (None or 0) reads as portrait. Angles other than
        # 0 and 90 are neither portrait nor landscape.
        if orientation:
            is_portrait = orientation == PORTRAIT_ANGLE
            is_landscape = orientation == LANDSCAPE_ANGLE
        else:
            is_portrait, is_landscape = True, False
        return ScreenState(
            avail_width=geometry.avail_width,
            avail_height=geometry.avail_height,
            width=geometry.width,
            height=geometry.height,
            is_portrait=is_portrait,
            is_landscape=is_landscape,
        )

    # ------------------------------------------------------------------
    # Reactive pipeline
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, callback: Callable[[ScreenState], None]) -> Subscription:
        return self.screen_states.subscribe(callback)

    def close(self) -> None:
        """Release the resize listener and cancel any pending recomputation."""
        if self._closed:
            return
        self._closed = True
        self._cancel_pending()
        if self._remove_listener is not None:
            self._remove_listener()
            self._remove_listener = None
        self.screen_states.close()
        if self._owns_scheduler:
            self.scheduler.close()
        logger.debug("Screen detector closed")

    def _on_resize(self) -> None:
        if self._closed:
            return
        self._cancel_pending()
        self._pending = self.scheduler.call_later(
            self.debounce_ms / 1000, self._on_quiet,
        )

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _on_quiet(self) -> None:
        self._pending = None
        if self._closed:
            return
        try:
            state = self.current_screen_state()
        except Exception:
            logger.warning("Failed to compute screen state", exc_info=True)
            return
        if self.screen_states.has_value and state == self.screen_states.latest:
            logger.debug("Screen state unchanged: %s", state)
            return
        logger.info("Screen state changed: %s", state)
        self.screen_states.publish(state)
