"""The bonsai package grows procedurally generated bonsai trees in a terminal.

This package offers:
  - A deterministic random source built on NumPy's PCG64.
  - A stochastic growth engine expanding a trunk into shoots and leaves.
  - Glyph rendering onto a character canvas, a curses front-end and a CLI.

Submodules:
  - branch: Branch segment, kinds, styles and drawables.
  - config: Logging level control and environment defaults.
  - deltas: Kind-dependent direction tables.
  - dice: Deterministic random source.
  - rules: Ordered spawn decision table.
  - tree: Tree growth engine.
  - tree_parameters: TreeOptions configuration record.
  - render: Canvas, glyph selection, pot and message box.
  - app, cli, screen: Terminal application.

Classes:
  Branch, BranchType, Dice, Drawable, Style, Tree, TreeOptions
"""

from .config import set_log_level, bool_env, int_env, float_env

from bonsai.branch import Branch, BranchType, Drawable, Style
from bonsai.dice import Dice
from bonsai.tree import AlreadySproutedError, Tree
from bonsai.tree_parameters import OptionsError, TreeOptions

__all__ = [
    # Core classes
    "Branch",
    "BranchType",
    "Dice",
    "Drawable",
    "Style",
    "Tree",
    "TreeOptions",
    # Errors
    "AlreadySproutedError",
    "OptionsError",
    # Configuration
    "set_log_level",
    "bool_env",
    "int_env",
    "float_env",
]

__version__ = "0.1.0"
