"""Core data models for iphone-detector."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class IPhoneModel(Enum):
    XII = "XII"
    XI_Pro_Max_14 = "XI_Pro_Max_14"
    XI_Pro_Max = "XI_Pro_Max"
    XI_Pro = "XI_Pro"
    XI = "XI"
    XI_14 = "XI_14"
    XR = "XR"
    XS_Max = "XS_Max"
    XS = "XS"
    XS_13 = "XS_13"
    X = "X"


@dataclass(frozen=True)
class DeviceSignature:
    id: IPhoneModel
    logical_width: int
    logical_height: int
    inner_height_portrait: int
    inner_height_landscape: int
    inner_height_portrait_expanded: Optional[int]
    inner_height_landscape_expanded: Optional[int]
    device_pixel_ratio: float
    os_version: int  # major iOS version the inner heights were captured on

    def matches_geometry(self, width: int, height: int) -> bool:
        """True if the logical size equals (width, height) in either rotation."""
        return (self.logical_width, self.logical_height) in (
            (width, height),
            (height, width),
        )

    def expanded_inner_height(self, portrait: bool) -> Optional[int]:
        if portrait:
            return self.inner_height_portrait_expanded
        return self.inner_height_landscape_expanded


@dataclass(frozen=True)
class ScreenGeometry:
    avail_width: int
    avail_height: int
    width: int
    height: int


@dataclass(frozen=True)
class ScreenState:
    """Snapshot of screen geometry and orientation.

    A new instance is built on every computation; equality is by value so the
    detector can suppress repeated publications of the same state.
    """

    avail_width: int
    avail_height: int
    width: int
    height: int
    is_portrait: bool
    is_landscape: bool
