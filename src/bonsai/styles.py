"""Colour palettes for the tree and the pot.

Colours are 256-colour palette indices; the renderer maps them to curses
colour pairs or ANSI escapes.
"""

from __future__ import annotations

from .branch import BranchType, Style
from .dice import Dice

POT_STYLE = Style(color=8, bold=True)
GREEN_BOTTOM_STYLE = Style(color=2)
TREE_BASE_STYLE = Style(color=11)
MESSAGE_STYLE = Style(color=7)


def choose_style(dice: Dice, branch_type: BranchType) -> Style:
    """Pick the creation-time style of a branch of `branch_type`."""
    if branch_type is BranchType.TRUNK or branch_type.is_shoot:
        if dice.roll_int(2) == 0:
            return Style(color=11, bold=True)
        return Style(color=3)
    if branch_type is BranchType.DYING:
        return Style(color=2, bold=dice.roll_int(10) == 0)
    return Style(color=10, bold=dice.roll_int(3) == 0)
