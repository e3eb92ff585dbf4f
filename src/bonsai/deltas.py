"""Kind-dependent direction tables for branch growth.

Each table is a discrete distribution expressed as ``(weight, value)``
buckets over a die whose size is the sum of the weights. Rolling the die
once and walking the buckets picks the delta. The vertical delta is always
rolled before the horizontal one.
"""

from __future__ import annotations

import logging
from typing import Tuple

from .branch import BranchType
from .dice import Dice

_LOGGER = logging.getLogger(__name__)

Buckets = Tuple[Tuple[int, int], ...]

UNIFORM_STEP: Buckets = ((1, -1), (1, 0), (1, 1))

# young trunk grows wide
YOUNG_TRUNK_DX: Buckets = ((1, -2), (3, -1), (2, 0), (3, 1), (1, 2))
# middle-aged trunk climbs 70% of the time
MATURE_TRUNK_DY: Buckets = ((3, 0), (7, -1))

SHOOT_DY: Buckets = ((2, -1), (6, 0), (2, 1))
SHOOT_LEFT_DX: Buckets = ((2, -2), (4, -1), (3, 0), (1, 1))
SHOOT_RIGHT_DX: Buckets = ((2, 2), (4, 1), (3, 0), (1, -1))

DYING_DY: Buckets = ((2, -1), (7, 0), (1, 1))
DYING_DX: Buckets = ((1, -3), (2, -2), (3, -1), (3, 0), (3, 1), (2, 2), (1, 3))

DEAD_DY: Buckets = ((3, -1), (4, 0), (3, 1))


def die_size(buckets: Buckets) -> int:
    """Return the number of faces of the die backing `buckets`."""
    return sum(weight for weight, _ in buckets)


def roll_bucket(dice: Dice, buckets: Buckets) -> int:
    """Roll once and return the value of the bucket the face falls in."""
    face = dice.roll_int(die_size(buckets))
    for weight, value in buckets:
        if face < weight:
            return value
        face -= weight
    raise AssertionError("die face outside bucket table")  # pragma: no cover


def young_trunk_rises(age: int, multiplier: int) -> bool:
    """Return True on the ages where a young trunk moves up a row.

    Every ``multiplier // 2`` steps (at least every step) the trunk rises.
    """
    period = max(multiplier // 2, 1)
    return age % period == 0


def set_deltas(
    dice: Dice,
    branch_type: BranchType,
    life: int,
    age: int,
    multiplier: int,
) -> Tuple[int, int]:
    """Pick ``(dx, dy)`` for one step of a branch.

    Args:
        dice: Random source; advanced by the rolls the table needs.
        branch_type: Kind of the branch being stepped.
        life: Remaining life after this step's decrement.
        age: ``life_start - life``, floored at 0.
        multiplier: Branching multiplier from the options.

    Returns:
        The horizontal and vertical deltas, in that order.
    """
    if branch_type is BranchType.TRUNK:
        if age <= 2 or life < 4:
            # new or dead trunk
            dy = 0
            dx = roll_bucket(dice, UNIFORM_STEP)
        elif age < multiplier * 3:
            dy = -1 if young_trunk_rises(age, multiplier) else 0
            dx = roll_bucket(dice, YOUNG_TRUNK_DX)
        else:
            dy = roll_bucket(dice, MATURE_TRUNK_DY)
            dx = roll_bucket(dice, UNIFORM_STEP)
    elif branch_type is BranchType.SHOOT_LEFT:
        dy = roll_bucket(dice, SHOOT_DY)
        dx = roll_bucket(dice, SHOOT_LEFT_DX)
    elif branch_type is BranchType.SHOOT_RIGHT:
        dy = roll_bucket(dice, SHOOT_DY)
        dx = roll_bucket(dice, SHOOT_RIGHT_DX)
    elif branch_type is BranchType.DYING:
        dy = roll_bucket(dice, DYING_DY)
        dx = roll_bucket(dice, DYING_DX)
    else:
        dy = roll_bucket(dice, DEAD_DY)
        dx = roll_bucket(dice, UNIFORM_STEP)

    _LOGGER.debug(
        "set_deltas: type=%s life=%d age=%d -> dx=%d dy=%d",
        branch_type.value,
        life,
        age,
        dx,
        dy,
    )
    return dx, dy


def clamp_unit(value: int) -> int:
    """Clip a delta to ``{-1, 0, 1}``."""
    return max(-1, min(1, value))
