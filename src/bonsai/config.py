"""Package-wide configuration for bonsai.

This module provides the small configuration surface shared by the growth
engine, the renderer and the command line front-end: robust logging level
control, JAX-style environment helpers, and the default growth settings that
may be overridden through ``BONSAI_*`` environment variables.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
import time
from typing import Optional


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
_LOGGER = logging.getLogger("bonsai")


def _parse_log_level(val: str | int | None, default: int = logging.WARNING) -> int:
    """Parse a logging level string or int into a `logging` level constant.

    Args:
        val: The desired level (e.g., "DEBUG", 10). May be None.
        default: Fallback level if `val` cannot be parsed.

    Returns:
        An integer logging level (e.g., logging.DEBUG).
    """
    if val is None:
        return default
    if isinstance(val, int):
        return val
    lvl = getattr(logging, str(val).strip().upper(), None)
    if isinstance(lvl, int):
        return lvl
    return default


def set_log_level(level: str | int = "WARNING") -> None:
    """Set the package logger level programmatically.

    Args:
        level: A standard logging level name or integer.
    """
    _LOGGER.setLevel(_parse_log_level(level))


def verbosity_to_level(verbosity: int) -> int:
    """Map a ``-v`` count onto a logging level (0 -> WARNING, 1 -> INFO, 2+ -> DEBUG)."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


# Default level can be overridden by env.
set_log_level(os.getenv("BONSAI_LOGLEVEL", "WARNING"))


# -----------------------------------------------------------------------------
# Env helpers (JAX-style)
# -----------------------------------------------------------------------------
def bool_env(varname: str, default: bool) -> bool:
    """Read an environment variable and interpret it as a boolean.

    True values: 'y', 'yes', 't', 'true', 'on', '1'.
    False values: 'n', 'no', 'f', 'false', 'off', '0'.

    Args:
        varname: The name of the environment variable.
        default: The default value if the variable is unset.

    Returns:
        A boolean value parsed from the environment.
    """
    val = os.getenv(varname, str(default))
    val = val.lower()
    if val in ("y", "yes", "t", "true", "on", "1"):
        return True
    if val in ("n", "no", "f", "false", "off", "0"):
        return False
    raise ValueError(f"invalid truth value {val!r} for environment {varname!r}")


def int_env(varname: str, default: int) -> int:
    """Read an environment variable and interpret it as an integer.

    Args:
        varname: The name of the environment variable.
        default: The default value if the variable is unset.

    Returns:
        The integer value parsed from the environment.
    """
    return int(os.getenv(varname, str(default)))


def float_env(varname: str, default: float) -> float:
    """Read an environment variable and interpret it as a float."""
    return float(os.getenv(varname, str(default)))


def time_seed() -> int:
    """Return a wall-clock derived seed (seconds since the epoch, never 0)."""
    seed = int(time.time())
    _LOGGER.debug("Derived time-based seed=%d", seed)
    return max(seed, 1)


# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Defaults:
    """Default growth and animation settings.

    Attributes:
        life_start: Life given to the first trunk segment.
        multiplier: Branching multiplier.
        time_step: Delay in seconds between live animation frames.
        time_wait: Delay in seconds between trees in infinite mode.
        leaves: Leaf strings used by the renderer.
        ground_margin: Rows above the ground where downward growth is damped.
        clamp_deltas: Clip every growth step to one cell in each axis.
    """

    life_start: int = 32
    multiplier: int = 5
    time_step: float = 0.03
    time_wait: float = 4.0
    leaves: tuple[str, ...] = ("&",)
    ground_margin: int = 2
    clamp_deltas: bool = False

    @classmethod
    def from_env(cls) -> "Defaults":
        """Build defaults, letting ``BONSAI_LIFE``, ``BONSAI_MULTIPLIER``,
        ``BONSAI_TIME``, ``BONSAI_WAIT`` and ``BONSAI_CLAMP_DELTAS`` override the
        built-in values.

        Raises:
            ValueError: If one of the variables cannot be parsed.
        """
        base = cls()
        defaults = cls(
            life_start=int_env("BONSAI_LIFE", base.life_start),
            multiplier=int_env("BONSAI_MULTIPLIER", base.multiplier),
            time_step=float_env("BONSAI_TIME", base.time_step),
            time_wait=float_env("BONSAI_WAIT", base.time_wait),
            clamp_deltas=bool_env("BONSAI_CLAMP_DELTAS", base.clamp_deltas),
        )
        _LOGGER.debug("Defaults resolved: %s", defaults)
        return defaults


def env_seed() -> Optional[int]:
    """Return ``BONSAI_SEED`` as an int, or None when unset or empty."""
    raw = os.getenv("BONSAI_SEED", "").strip()
    if not raw:
        return None
    return int(raw)
