"""Shared test fixtures for iphone-detector tests."""

from __future__ import annotations

from typing import Optional

import pytest

from iphone_detector.core.detector import ScreenDetector
from iphone_detector.core.environment import StaticDisplayEnvironment
from iphone_detector.core.models import ScreenGeometry
from iphone_detector.core.scheduler import ManualScheduler


UA_IOS_14 = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 14_2 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/14.0 "
    "Mobile/15E148 Safari/604.1"
)
UA_IOS_13 = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 13_3_1 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/13.0.5 "
    "Mobile/15E148 Safari/604.1"
)
UA_ANDROID = (
    "Mozilla/5.0 (Linux; Android 10; SM-G973F) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/83.0.4103.106 Mobile Safari/537.36"
)
UA_DESKTOP_MAC = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/14.0 Safari/605.1.15"
)
UA_IPHONE_NO_VERSION = "Mozilla/5.0 (iPhone; CPU iPhone like Mac OS X) Mobile"


def ios_user_agent(major: int, minor: int = 0) -> str:
    return (
        f"Mozilla/5.0 (iPhone; CPU iPhone OS {major}_{minor} like Mac OS X) "
        "AppleWebKit/605.1.15 (KHTML, like Gecko) Mobile/15E148"
    )


def make_environment(
    user_agent: str = UA_IOS_14,
    width: int = 390,
    height: int = 844,
    inner_width: Optional[int] = None,
    inner_height: int = 778,
    orientation: Optional[int] = None,
    device_pixel_ratio: float = 3,
) -> StaticDisplayEnvironment:
    """Helper to create a StaticDisplayEnvironment; defaults to an iPhone 12."""
    return StaticDisplayEnvironment(
        user_agent=user_agent,
        screen=ScreenGeometry(width, height - 44, width, height),
        inner_width=width if inner_width is None else inner_width,
        inner_height=inner_height,
        orientation=orientation,
        device_pixel_ratio=device_pixel_ratio,
    )


@pytest.fixture
def iphone12_env() -> StaticDisplayEnvironment:
    """iPhone 12 on iOS 14.2, portrait, full browser chrome."""
    return make_environment()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def detector(iphone12_env, scheduler):
    """ScreenDetector over the iPhone 12 environment with a virtual clock."""
    det = ScreenDetector(iphone12_env, scheduler=scheduler)
    yield det
    det.close()
