"""Module defining the Branch segment and the records derived from it.

A Branch is one growing unit of the tree: an integer position, a remaining
life counter, a kind and a rendering style. The engine advances each branch
one step at a time; every step yields a Drawable for the renderer.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class BranchType(enum.Enum):
    """Role of a branch segment."""

    TRUNK = "trunk"
    SHOOT_LEFT = "shootLeft"
    SHOOT_RIGHT = "shootRight"
    DYING = "dying"
    DEAD = "dead"

    @property
    def is_shoot(self) -> bool:
        """Return True for the left and right shoot kinds."""
        return self in (BranchType.SHOOT_LEFT, BranchType.SHOOT_RIGHT)


@dataclass(frozen=True)
class Style:
    """Colour/weight tag for a drawn segment.

    Attributes:
        color (int): 256-colour palette index.
        bold (bool): Whether the segment is drawn bold.
    """

    color: int
    bold: bool = False


@dataclass(frozen=True)
class Drawable:
    """One drawable unit emitted by a growth step.

    Attributes:
        x (int): Column of the segment after the step.
        y (int): Row of the segment after the step.
        branch_type (BranchType): Kind of the segment that moved.
        style (Style): The segment's creation-time style.
        dx (int): Horizontal delta applied during the step.
        dy (int): Vertical delta applied during the step.
        life (int): Remaining life after the step.
    """

    x: int
    y: int
    branch_type: BranchType
    style: Style
    dx: int
    dy: int
    life: int


class Branch:
    """A single branch segment of the bonsai tree.

    Attributes:
        x (int): Current column.
        y (int): Current row (0 is the top of the viewport).
        life (int): Remaining growth steps; never negative.
        branch_type (BranchType): Kind set at creation.
        style (Style): Style chosen at creation; immutable.
        shoot_cooldown (int): Steps left before this lineage may spawn a shoot.
    """

    __slots__ = ("x", "y", "life", "branch_type", "style", "shoot_cooldown")

    def __init__(
        self,
        x: int,
        y: int,
        life: int,
        branch_type: BranchType,
        style: Style,
        shoot_cooldown: int,
    ) -> None:
        if life < 0:
            raise ValueError(f"Branch life must be non-negative; got {life}")
        self.x = x
        self.y = y
        self.life = life
        self.branch_type = branch_type
        self.style = style
        self.shoot_cooldown = shoot_cooldown

    @property
    def alive(self) -> bool:
        """Return True while the branch still has life to spend."""
        return self.life > 0

    def age(self, life_start: int) -> int:
        """Return the elapsed steps relative to `life_start`, floored at 0."""
        return max(life_start - self.life, 0)

    def move(self, dx: int, dy: int, max_x: int, max_y: int) -> None:
        """Apply a delta, saturating the position inside ``[0, max] x [0, max]``."""
        self.x = min(max(self.x + dx, 0), max_x)
        self.y = min(max(self.y + dy, 0), max_y)

    def to_drawable(self, dx: int, dy: int) -> Drawable:
        """Snapshot the branch as a Drawable for the renderer."""
        return Drawable(
            x=self.x,
            y=self.y,
            branch_type=self.branch_type,
            style=self.style,
            dx=dx,
            dy=dy,
            life=self.life,
        )

    def __repr__(self) -> str:
        """Return a string representation of the branch."""
        return (
            f"Branch(x={self.x}, y={self.y}, life={self.life}, "
            f"type={self.branch_type.value})"
        )
