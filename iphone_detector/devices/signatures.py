"""Device signature table — known iPhone screen fingerprints."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from iphone_detector.core.models import DeviceSignature, IPhoneModel


def _signature(
    model: IPhoneModel,
    size: tuple[int, int],
    inner: tuple[int, int],
    expanded: tuple[int, int],
    ratio: float,
    os_version: int,
) -> DeviceSignature:
    return DeviceSignature(
        id=model,
        logical_width=size[0],
        logical_height=size[1],
        inner_height_portrait=inner[0],
        inner_height_landscape=inner[1],
        inner_height_portrait_expanded=expanded[0],
        inner_height_landscape_expanded=expanded[1],
        device_pixel_ratio=ratio,
        os_version=os_version,
    )


# Same chassis appears more than once: Safari chrome height changes between
# iOS releases, so inner heights are only valid together with os_version.
_SIGNATURES: tuple[DeviceSignature, ...] = (
    _signature(IPhoneModel.XII, (390, 844), (778, 390), (664, 340), 3, 14),
    _signature(IPhoneModel.XI_Pro_Max_14, (414, 896), (833, 414), (719, 364), 3, 14),
    _signature(IPhoneModel.XI_Pro_Max, (414, 896), (832, 414), (719, 364), 3, 13),
    _signature(IPhoneModel.XI_Pro, (375, 812), (749, 375), (635, 325), 3, 13),
    _signature(IPhoneModel.XI, (414, 896), (833, 414), (719, 364), 2, 13),
    _signature(IPhoneModel.XI_14, (414, 896), (829, 414), (715, 364), 2, 14),
    _signature(IPhoneModel.XR, (414, 896), (833, 414), (719, 364), 2, 12),
    _signature(IPhoneModel.XS_Max, (414, 896), (832, 414), (719, 364), 3, 12),
    _signature(IPhoneModel.XS, (375, 812), (748, 375), (635, 325), 3, 12),
    _signature(IPhoneModel.XS_13, (375, 812), (749, 375), (635, 325), 3, 13),
    _signature(IPhoneModel.X, (375, 812), (748, 375), (635, 325), 3, 11),
)

_TABLE: Mapping[IPhoneModel, DeviceSignature] = MappingProxyType(
    {sig.id: sig for sig in _SIGNATURES}
)


def get_all_signatures() -> Mapping[IPhoneModel, DeviceSignature]:
    """Return the read-only signature table, in table order."""
    return _TABLE


def display_name(model: IPhoneModel) -> str:
    """Human label for a model, e.g. ``XI_Pro_Max`` -> ``XI Pro Max``."""
    return " ".join(model.value.split("_"))
