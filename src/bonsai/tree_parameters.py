"""Module defining TreeOptions, the immutable configuration of a growth run.

TreeOptions holds every setting the growth engine reads: the viewport bounds
used for clamping, the life given to the first trunk, the branching
multiplier and the seed. The leaf strings travel with the options but are
only consumed by the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

MAX_LIFE = 200
MAX_MULTIPLIER = 20


class OptionsError(ValueError):
    """Raised when a TreeOptions value is outside its allowed range."""


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise OptionsError(msg)


@dataclass(frozen=True)
class TreeOptions:
    """Holds settings for growing a bonsai tree.

    Attributes:
        max_x (int): Largest column a segment may occupy.
        max_y (int): Largest row a segment may occupy; the trunk starts here.
        life_start (int): Life of the initial trunk (0-200).
        multiplier (int): Branching multiplier; higher -> more branching (0-20).
            A multiplier of 0 disables the life-modulo branching trigger.
        seed (Optional[int]): Explicit seed (> 0), or None for a time-based one.
        ground_margin (int): Rows above `max_y` where downward growth is damped.
        clamp_deltas (bool): Clip every step to ``{-1, 0, 1}`` in both axes.
        leaves (Tuple[str, ...]): Leaf strings, used only by the renderer.

    Notes:
        - The options are frozen; use :meth:`with_seed` or
          :func:`dataclasses.replace` to derive a variant.
    """

    max_x: int = 80
    max_y: int = 24
    life_start: int = 32
    multiplier: int = 5
    seed: Optional[int] = None
    ground_margin: int = 2
    clamp_deltas: bool = False
    leaves: Tuple[str, ...] = field(default=("&",))

    def validate(self) -> "TreeOptions":
        """Check every field and return self.

        Raises:
            OptionsError: If any value is out of range.
        """
        _require(self.max_x >= 0, f"max_x must be >= 0; got {self.max_x}")
        _require(self.max_y >= 0, f"max_y must be >= 0; got {self.max_y}")
        _require(
            0 <= self.life_start <= MAX_LIFE,
            f"life must be between 0 and {MAX_LIFE}; got {self.life_start}",
        )
        _require(
            0 <= self.multiplier <= MAX_MULTIPLIER,
            f"multiplier must be between 0 and {MAX_MULTIPLIER}; got {self.multiplier}",
        )
        _require(
            self.seed is None or self.seed > 0,
            f"seed must be a positive integer; got {self.seed}",
        )
        _require(
            self.ground_margin >= 0,
            f"ground_margin must be >= 0; got {self.ground_margin}",
        )
        _require(len(self.leaves) > 0, "leaves must contain at least one string")
        _require(
            all(isinstance(leaf, str) and leaf for leaf in self.leaves),
            "leaves must be non-empty strings",
        )
        return self

    def with_seed(self, seed: Optional[int]) -> "TreeOptions":
        """Return a copy of the options with a different seed."""
        return replace(self, seed=seed)


def parse_leaves(raw: str) -> Tuple[str, ...]:
    """Split a comma-delimited leaf list.

    Raises:
        OptionsError: If the list is empty or contains an empty entry.
    """
    parts = tuple(raw.split(","))
    _require(
        bool(raw) and all(parts),
        f"leaf list must be comma-delimited non-empty strings; got {raw!r}",
    )
    return parts
