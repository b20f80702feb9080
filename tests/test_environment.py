"""Tests for iphone_detector.core.environment — StaticDisplayEnvironment."""

from __future__ import annotations

import logging

import pytest

from iphone_detector.core.environment import (
    DisplayEnvironment,
    StaticDisplayEnvironment,
    parse_size,
)
from iphone_detector.core.models import ScreenGeometry


class TestSnapshot:
    def test_defaults(self):
        env = StaticDisplayEnvironment()
        assert env.screen_geometry() == ScreenGeometry(0, 0, 0, 0)
        assert env.inner_size() == (0, 0)
        assert env.orientation() is None
        assert env.device_pixel_ratio() == 1.0
        assert env.user_agent() == ""

    def test_is_display_environment(self):
        assert isinstance(StaticDisplayEnvironment(), DisplayEnvironment)

    def test_update_changes_only_given_fields(self):
        env = StaticDisplayEnvironment(
            screen=ScreenGeometry(390, 800, 390, 844),
            inner_width=390,
            inner_height=778,
        )
        env.update(avail_height=780, inner_height=664)
        assert env.screen_geometry() == ScreenGeometry(390, 780, 390, 844)
        assert env.inner_size() == (390, 664)

    def test_update_orientation_zero(self):
        env = StaticDisplayEnvironment(orientation=90)
        env.update(orientation=0)
        assert env.orientation() == 0

    def test_clear_orientation(self):
        env = StaticDisplayEnvironment(orientation=90)
        env.update(clear_orientation=True)
        assert env.orientation() is None

    def test_update_does_not_notify(self):
        env = StaticDisplayEnvironment()
        calls = []
        env.add_resize_listener(lambda: calls.append(1))
        env.update(width=10)
        assert calls == []


class TestResizeListeners:
    def test_resize_updates_then_notifies(self):
        env = StaticDisplayEnvironment()
        seen = []
        env.add_resize_listener(lambda: seen.append(env.inner_size()))
        env.resize(inner_width=844, inner_height=340)
        assert seen == [(844, 340)]

    def test_remove_listener(self):
        env = StaticDisplayEnvironment()
        calls = []
        remove = env.add_resize_listener(lambda: calls.append(1))
        assert env.listener_count == 1
        remove()
        env.fire_resize()
        assert calls == []
        assert env.listener_count == 0

    def test_remove_twice_is_noop(self):
        env = StaticDisplayEnvironment()
        remove = env.add_resize_listener(lambda: None)
        remove()
        remove()
        assert env.listener_count == 0

    def test_listener_removed_during_fire(self):
        env = StaticDisplayEnvironment()
        calls = []
        removers = []

        def first():
            calls.append("first")
            removers[0]()

        removers.append(env.add_resize_listener(first))
        env.add_resize_listener(lambda: calls.append("second"))
        env.fire_resize()
        assert calls == ["first", "second"]


class TestParseSize:
    @pytest.mark.parametrize("value, expected", [
        ("390x844", (390, 844)),
        ("390X844", (390, 844)),
        (" 414 x 896 ", (414, 896)),
    ])
    def test_valid(self, value, expected):
        assert parse_size(value) == expected

    @pytest.mark.parametrize("value", ["", "390", "390x", "x844", "390x844x1", "a x b", "-1x2"])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="Invalid size"):
            parse_size(value)


class TestListenerFailures:
    def test_failing_listener_does_not_skip_others(self, caplog):
        env = StaticDisplayEnvironment()
        calls = []

        def boom():
            raise RuntimeError("listener broke")

        env.add_resize_listener(boom)
        env.add_resize_listener(lambda: calls.append("second"))
        with caplog.at_level(logging.WARNING):
            env.resize(inner_height=664)
        assert calls == ["second"]
        assert "Resize listener" in caplog.text
