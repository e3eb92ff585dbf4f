"""Module defining the Tree class, the bonsai growth engine.

The engine keeps every branch it ever created in an append-only list. The
worklist is the subset that still has life left. One tick advances each
branch of the worklist by a single step; children spawned during a tick are
appended and wait for the next one. A batch grow simply ticks until no
branch has life left, while live animation calls :meth:`Tree.step` once per
frame and renders the drawables it returns.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .branch import Branch, BranchType, Drawable
from .deltas import clamp_unit, set_deltas
from .dice import Dice
from .rules import decide_spawn
from .styles import choose_style
from .tree_parameters import TreeOptions

_LOGGER = logging.getLogger(__name__)

StopCallback = Callable[[], bool]


class AlreadySproutedError(RuntimeError):
    """Raised when :meth:`Tree.sprout` is called on a tree that has branches."""


class Tree:
    """Stochastic bonsai growth engine.

    Attributes:
        options (TreeOptions): Immutable configuration snapshot.
        dice (Dice): Random source owned by this tree; seeded once.
        seed (int): The seed actually used (time-based if none was given).
        branches (List[Branch]): Every branch created so far, in creation order.
        drawables (List[Drawable]): Every drawable emitted so far, in order.
        ticks (int): Number of growth ticks performed.
    """

    def __init__(self, options: TreeOptions) -> None:
        """Initialize the engine.

        Args:
            options: Growth settings; validated here.

        Raises:
            OptionsError: If the options are out of range.
        """
        self.options = options.validate()
        self.dice = Dice(options.seed)
        self.seed = self.dice.seed
        self.branches: List[Branch] = []
        self.drawables: List[Drawable] = []
        self.ticks = 0
        _LOGGER.info(
            "Tree: initialized (seed=%d, life=%d, multiplier=%d, bounds=%dx%d)",
            self.seed,
            options.life_start,
            options.multiplier,
            options.max_x,
            options.max_y,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def worklist(self) -> List[Branch]:
        """Branches that still have life to spend, in creation order."""
        return [b for b in self.branches if b.alive]

    @property
    def branch_count(self) -> int:
        """Number of branches created so far, the trunk included."""
        return len(self.branches)

    @property
    def sprouted(self) -> bool:
        """Return True once the trunk exists."""
        return bool(self.branches)

    @property
    def is_complete(self) -> bool:
        """Return True when the tree has sprouted and no branch has life left."""
        return self.sprouted and not any(b.alive for b in self.branches)

    def reset(self) -> None:
        """Drop every branch and reseed the dice from the original seed."""
        self.dice = Dice(self.seed)
        self.branches = []
        self.drawables = []
        self.ticks = 0
        _LOGGER.debug("Tree: reset (seed=%d)", self.seed)

    # ------------------------------------------------------------------
    # Growth
    # ------------------------------------------------------------------
    def _add_branch(self, x: int, y: int, life: int, branch_type: BranchType) -> Branch:
        branch = Branch(
            x=x,
            y=y,
            life=life,
            branch_type=branch_type,
            style=choose_style(self.dice, branch_type),
            shoot_cooldown=self.options.multiplier,
        )
        self.branches.append(branch)
        return branch

    def sprout(self) -> Branch:
        """Create the trunk at the bottom centre of the viewport.

        Returns:
            The trunk branch.

        Raises:
            AlreadySproutedError: If the tree already has branches.
        """
        if self.branches:
            raise AlreadySproutedError(
                f"sprout() called on a tree with {len(self.branches)} branches"
            )
        opts = self.options
        trunk = self._add_branch(
            opts.max_x // 2, opts.max_y, opts.life_start, BranchType.TRUNK
        )
        _LOGGER.info("Tree: sprouted trunk at (%d, %d)", trunk.x, trunk.y)
        return trunk

    def _step_branch(self, branch: Branch) -> Drawable:
        """Advance one branch by a single growth step."""
        opts = self.options

        branch.life = max(branch.life - 1, 0)
        age = branch.age(opts.life_start)

        dx, dy = set_deltas(
            self.dice, branch.branch_type, branch.life, age, opts.multiplier
        )

        # reduce dy if too close to the ground
        if dy > 0 and branch.y > opts.max_y - opts.ground_margin:
            dy -= 1

        if opts.clamp_deltas:
            dx, dy = clamp_unit(dx), clamp_unit(dy)

        branch.move(dx, dy, opts.max_x, opts.max_y)

        _, spawn = decide_spawn(branch, opts.multiplier, self.dice)
        branch.shoot_cooldown = max(branch.shoot_cooldown - 1, 0)

        if spawn is not None:
            self._add_branch(branch.x, branch.y, spawn.life, spawn.branch_type)

        drawable = branch.to_drawable(dx, dy)
        self.drawables.append(drawable)
        return drawable

    def _tick(self, should_stop: Optional[StopCallback] = None) -> List[Drawable]:
        # children appended during the tick wait for the next one
        frontier = self.worklist
        produced: List[Drawable] = []
        for branch in frontier:
            if should_stop is not None and should_stop():
                _LOGGER.info("Tree: growth interrupted during tick %d", self.ticks)
                break
            produced.append(self._step_branch(branch))
        self.ticks += 1
        _LOGGER.debug(
            "Tick %d: stepped=%d branches=%d alive=%d",
            self.ticks,
            len(produced),
            len(self.branches),
            len(self.worklist),
        )
        return produced

    def step(self) -> List[Drawable]:
        """Perform one growth tick, sprouting first if the tree is empty.

        Returns:
            The drawables produced by this tick, in processing order. Empty
            once the tree is complete.
        """
        if not self.branches:
            self.sprout()
        if self.is_complete:
            return []
        return self._tick()

    def grow(self, should_stop: Optional[StopCallback] = None) -> int:
        """Grow until every branch has exhausted its life.

        Args:
            should_stop: Optional callable checked before every branch step;
                returning True stops growth early, leaving the tree
                incomplete but consistent.

        Returns:
            The number of ticks performed by this call.
        """
        if not self.branches:
            self.sprout()
        start = self.ticks
        while not self.is_complete:
            if should_stop is not None and should_stop():
                break
            self._tick(should_stop)
        _LOGGER.info(
            "Tree: grow finished (ticks=%d, branches=%d, complete=%s)",
            self.ticks - start,
            len(self.branches),
            self.is_complete,
        )
        return self.ticks - start
