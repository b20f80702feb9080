"""Settings resolution — CLI flag, then environment variable, then default."""

from __future__ import annotations

import logging
import os
from typing import Optional

DEFAULT_DEBOUNCE_MS = 200
DEFAULT_LOG_LEVEL = "WARNING"

DEBOUNCE_ENV_VAR = "IPHONE_DETECTOR_DEBOUNCE_MS"
LOG_LEVEL_ENV_VAR = "IPHONE_DETECTOR_LOG_LEVEL"


def resolve_debounce_ms(value: Optional[int] = None) -> int:
    """Resolve the debounce window from flag -> env var -> default."""
    if value is not None:
        if value < 0:
            raise ValueError(f"Debounce must be >= 0 ms, got {value}")
        return value
    env_value = os.environ.get(DEBOUNCE_ENV_VAR)
    if env_value:
        try:
            parsed = int(env_value)
        except ValueError:
            raise ValueError(
                f"{DEBOUNCE_ENV_VAR} must be an integer, got {env_value!r}"
            ) from None
        if parsed < 0:
            raise ValueError(f"{DEBOUNCE_ENV_VAR} must be >= 0, got {parsed}")
        return parsed
    return DEFAULT_DEBOUNCE_MS


def resolve_log_level(verbose: bool = False) -> int:
    """Resolve the logging level; ``verbose`` forces DEBUG."""
    if verbose:
        return logging.DEBUG
    name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"{LOG_LEVEL_ENV_VAR} is not a logging level: {name!r}")
    return level
