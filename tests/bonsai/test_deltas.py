from __future__ import annotations

import pytest

from bonsai.branch import BranchType
from bonsai.deltas import (
    DYING_DX,
    MATURE_TRUNK_DY,
    YOUNG_TRUNK_DX,
    clamp_unit,
    die_size,
    roll_bucket,
    set_deltas,
    young_trunk_rises,
)
from bonsai.dice import Dice


# -------------------------
# Bucket tables
# -------------------------


def test_die_sizes():
    assert die_size(YOUNG_TRUNK_DX) == 10
    assert die_size(MATURE_TRUNK_DY) == 10
    assert die_size(DYING_DX) == 15


def test_dying_dx_is_symmetric():
    weights = dict((value, weight) for weight, value in DYING_DX)
    for value in (1, 2, 3):
        assert weights[value] == weights[-value]


@pytest.mark.parametrize("face, expected", [(0, -2), (1, -1), (4, 0), (6, 1), (9, 2)])
def test_young_trunk_dx_buckets(scripted, face, expected):
    assert roll_bucket(scripted([face]), YOUNG_TRUNK_DX) == expected


# -------------------------
# set_deltas
# -------------------------


def test_new_trunk_stays_on_row(scripted):
    dice = scripted([2])
    dx, dy = set_deltas(dice, BranchType.TRUNK, life=31, age=1, multiplier=5)
    assert (dx, dy) == (1, 0)
    assert dice.calls == [3]


def test_young_trunk_rises_deterministically(scripted):
    # multiplier 5 -> rises every 2 steps; age 4 rises, age 5 does not
    dice = scripted([9])
    assert set_deltas(dice, BranchType.TRUNK, life=28, age=4, multiplier=5) == (2, -1)
    dice = scripted([0])
    assert set_deltas(dice, BranchType.TRUNK, life=27, age=5, multiplier=5) == (-2, 0)
    assert dice.calls == [10]


def test_mature_trunk_rolls_dy_before_dx(scripted):
    dice = scripted([3, 0])
    dx, dy = set_deltas(dice, BranchType.TRUNK, life=10, age=22, multiplier=5)
    assert (dx, dy) == (-1, -1)
    assert dice.calls == [10, 3]

    dice = scripted([2, 1])
    assert set_deltas(dice, BranchType.TRUNK, life=10, age=22, multiplier=5) == (0, 0)


def test_dying_trunk_moves_sideways(scripted):
    dice = scripted([0])
    assert set_deltas(dice, BranchType.TRUNK, life=3, age=29, multiplier=5) == (-1, 0)


def test_dying_deltas(scripted):
    dice = scripted([1, 14])
    assert set_deltas(dice, BranchType.DYING, life=5, age=0, multiplier=5) == (3, -1)
    assert dice.calls == [10, 15]
    dice = scripted([3, 0])
    assert set_deltas(dice, BranchType.DYING, life=5, age=0, multiplier=5) == (-3, 0)


def test_shoot_deltas_lean_outwards(scripted):
    dice = scripted([5, 0])
    assert set_deltas(dice, BranchType.SHOOT_LEFT, life=20, age=12, multiplier=5) == (-2, 0)
    dice = scripted([5, 0])
    assert set_deltas(dice, BranchType.SHOOT_RIGHT, life=20, age=12, multiplier=5) == (2, 0)
    assert dice.calls == [10, 10]


def test_dead_deltas(scripted):
    dice = scripted([9, 2])
    assert set_deltas(dice, BranchType.DEAD, life=1, age=0, multiplier=5) == (1, 1)
    assert dice.calls == [10, 3]


@pytest.mark.parametrize("branch_type", list(BranchType))
def test_deltas_stay_in_range(branch_type):
    dice = Dice(2024)
    for life in range(0, 40):
        dx, dy = set_deltas(dice, branch_type, life=life, age=max(32 - life, 0), multiplier=5)
        assert -3 <= dx <= 3
        assert -1 <= dy <= 1


# -------------------------
# Helpers
# -------------------------


def test_young_trunk_rises():
    assert young_trunk_rises(4, 5)
    assert not young_trunk_rises(3, 5)
    # multiplier 1 still gives a period of at least one step
    assert all(young_trunk_rises(age, 1) for age in range(5))


def test_clamp_unit():
    assert [clamp_unit(v) for v in (-3, -1, 0, 2)] == [-1, -1, 0, 1]
