"""Ordered spawn rules deciding which child, if any, a growth step creates.

The rules are evaluated top to bottom and the first one whose predicate
holds wins; later rules are not consulted. The order matters: a branch near
the end of its life always turns into leaves before it is considered for
further branching, which bounds how long any lineage can keep growing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .branch import Branch, BranchType
from .dice import Dice

_LOGGER = logging.getLogger(__name__)

DEAD_LIFE = 3
FORK_MIN_LIFE = 7


@dataclass(frozen=True)
class Spawn:
    """A child the growth step asks the engine to create.

    Attributes:
        branch_type (BranchType): Kind of the child.
        life (int): Starting life of the child.
    """

    branch_type: BranchType
    life: int


Predicate = Callable[[Branch, int, Dice], bool]
Action = Callable[[Branch, int, Dice], Optional[Spawn]]


@dataclass(frozen=True)
class SpawnRule:
    """One row of the spawn decision table."""

    name: str
    matches: Predicate
    fire: Action


def _near_dead(branch: Branch, multiplier: int, dice: Dice) -> bool:
    return branch.life < DEAD_LIFE


def _dying_trunk(branch: Branch, multiplier: int, dice: Dice) -> bool:
    return branch.branch_type is BranchType.TRUNK and branch.life < multiplier + 2


def _dying_shoot(branch: Branch, multiplier: int, dice: Dice) -> bool:
    return branch.branch_type.is_shoot and branch.life < multiplier + 2


def _may_branch(branch: Branch, multiplier: int, dice: Dice) -> bool:
    # the d3 is only rolled for trunks
    if branch.branch_type is BranchType.TRUNK and dice.roll_int(3) == 0:
        return True
    return multiplier > 0 and branch.life % multiplier == 0


def _leaves(branch_type: BranchType) -> Action:
    def fire(branch: Branch, multiplier: int, dice: Dice) -> Optional[Spawn]:
        return Spawn(branch_type, branch.life)

    return fire


def _branch(branch: Branch, multiplier: int, dice: Dice) -> Optional[Spawn]:
    if dice.roll_int(8) == 0 and branch.life > FORK_MIN_LIFE:
        branch.shoot_cooldown = multiplier * 2
        offset = dice.roll_int(5) - 2
        return Spawn(BranchType.TRUNK, max(branch.life + offset, 0))

    if branch.shoot_cooldown == 0:
        branch.shoot_cooldown = multiplier * 2
        side = BranchType.SHOOT_LEFT if dice.roll_int(2) == 0 else BranchType.SHOOT_RIGHT
        return Spawn(side, branch.life + multiplier)

    return None


SPAWN_RULES: Tuple[SpawnRule, ...] = (
    SpawnRule("dead", _near_dead, _leaves(BranchType.DEAD)),
    SpawnRule("dying-trunk", _dying_trunk, _leaves(BranchType.DYING)),
    SpawnRule("dying-shoot", _dying_shoot, _leaves(BranchType.DYING)),
    SpawnRule("branch", _may_branch, _branch),
)


def decide_spawn(
    branch: Branch,
    multiplier: int,
    dice: Dice,
    rules: Tuple[SpawnRule, ...] = SPAWN_RULES,
) -> Tuple[Optional[str], Optional[Spawn]]:
    """Evaluate `rules` in order and fire the first match.

    Args:
        branch: The branch being stepped; its life is already decremented.
            The branching rule may reset its shoot cooldown.
        multiplier: Branching multiplier from the options.
        dice: Random source for the probabilistic triggers.
        rules: Decision table, highest priority first.

    Returns:
        ``(rule_name, spawn)``. `rule_name` is None when no rule matched;
        `spawn` is None when the matched rule created nothing.
    """
    for rule in rules:
        if rule.matches(branch, multiplier, dice):
            spawn = rule.fire(branch, multiplier, dice)
            if spawn is not None:
                _LOGGER.debug(
                    "Rule %s: %s -> spawn %s life=%d",
                    rule.name,
                    branch,
                    spawn.branch_type.value,
                    spawn.life,
                )
            return rule.name, spawn
    return None, None
