"""The bonsai application: grows trees and shows them in the terminal.

Modes:
  - print: grow the whole tree and write it to stdout, no curses involved.
  - static (default): grow the whole tree, show it, wait for a key.
  - live: show every growth tick, pausing `time_step` seconds between them.
  - infinite: keep growing new trees, waiting `time_wait` seconds in between.
  - screensaver: live + infinite, any key quits.
"""

from __future__ import annotations

import curses
import logging
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, TextIO

from utils.checkpoint import (
    CheckpointFormatError,
    CheckpointNotFoundError,
    load_checkpoint,
    save_checkpoint,
)

from .dice import Dice
from .render import BaseType, Canvas, Painter, tree_bounds
from .screen import CTRL_C, CursesScreen
from .tree import Tree
from .tree_parameters import TreeOptions

_LOGGER = logging.getLogger(__name__)

MAX_SEED = 2**31 - 1


@dataclass
class AppSettings:
    """Everything the application needs besides the terminal.

    Attributes:
        options: Growth options; `max_x`/`max_y` are replaced per screen size.
        live: Render after every growth tick.
        infinite: Keep growing new trees.
        screensaver: Quit on any key instead of only Ctrl+C / q.
        print_tree: Print the finished tree to stdout instead of using curses.
        time_step: Seconds between live frames.
        time_wait: Seconds between trees in infinite mode.
        message: Text shown in a box next to the tree.
        base: Pot drawn under the tree.
        verbosity: 0 quiet; 2 or more draws a stats overlay.
        save_path: Where to save the checkpoint on exit, if anywhere.
        load_path: Where to load a checkpoint from at startup, if anywhere.
    """

    options: TreeOptions
    live: bool = False
    infinite: bool = False
    screensaver: bool = False
    print_tree: bool = False
    time_step: float = 0.03
    time_wait: float = 4.0
    message: Optional[str] = None
    base: BaseType = BaseType.LARGE
    verbosity: int = 0
    save_path: Optional[Path] = None
    load_path: Optional[Path] = None


class App:
    """Drives tree growth and presentation for one program run."""

    def __init__(self, settings: AppSettings) -> None:
        self.settings = settings
        self.target_branch_count = 0
        self.last_tree: Optional[Tree] = None
        self.should_quit = False
        self._seeds: Optional[Dice] = None
        self._load()

    # ------------------------------------------------------------------
    # Checkpoint
    # ------------------------------------------------------------------
    def _load(self) -> None:
        path = self.settings.load_path
        if path is None:
            return
        try:
            checkpoint = load_checkpoint(path)
        except CheckpointNotFoundError:
            _LOGGER.warning("No checkpoint at '%s'; starting a fresh tree.", path)
            return
        except CheckpointFormatError as err:
            _LOGGER.warning("Ignoring malformed checkpoint '%s': %s", path, err)
            return
        except OSError as err:
            _LOGGER.warning("Could not read checkpoint '%s': %s", path, err)
            return
        if checkpoint.seed == 0:
            _LOGGER.warning("Ignoring checkpoint '%s' with seed 0.", path)
            return
        self.settings.options = self.settings.options.with_seed(checkpoint.seed)
        self.target_branch_count = checkpoint.branch_count

    def save(self) -> None:
        """Save the last grown tree's seed and branch count, if requested."""
        path = self.settings.save_path
        if path is None or self.last_tree is None:
            return
        try:
            save_checkpoint(path, self.last_tree.seed, self.last_tree.branch_count)
        except OSError as err:
            _LOGGER.warning("Could not save checkpoint '%s': %s", path, err)

    # ------------------------------------------------------------------
    # Tree construction
    # ------------------------------------------------------------------
    def _next_seed(self, previous: int) -> int:
        if self._seeds is None:
            self._seeds = Dice(previous)
        return self._seeds.roll_int(MAX_SEED) + 1

    def new_tree(self, width: int, height: int) -> Tree:
        """Build a tree sized for a ``width`` x ``height`` terminal."""
        max_x, max_y = tree_bounds(width, height, self.settings.base)
        opts = self.settings.options
        if self.last_tree is not None:
            opts = opts.with_seed(self._next_seed(self.last_tree.seed))
        tree = Tree(
            TreeOptions(
                max_x=max_x,
                max_y=max_y,
                life_start=opts.life_start,
                multiplier=opts.multiplier,
                seed=opts.seed,
                ground_margin=opts.ground_margin,
                clamp_deltas=opts.clamp_deltas,
                leaves=opts.leaves,
            )
        )
        self.last_tree = tree
        return tree

    def scenery(self, width: int, height: int) -> Canvas:
        """Return a canvas with the pot and the message already drawn."""
        canvas = Canvas(width, height)
        canvas.draw_base(self.settings.base)
        if self.settings.message:
            canvas.draw_message(self.settings.message)
        return canvas

    def render(self, tree: Tree, width: int, height: int) -> Canvas:
        """Render a finished tree on fresh scenery."""
        canvas = self.scenery(width, height)
        Painter(tree.options.leaves, tree.seed).paint_all(canvas, tree.drawables)
        return canvas

    def draw_stats(self, canvas: Canvas, tree: Tree) -> None:
        """Overlay growth statistics in the top-left corner."""
        lines = [
            f"maxX: {tree.options.max_x}, maxY: {tree.options.max_y}",
            f"seed: {tree.seed}",
            f"tick: {tree.ticks}",
            f"branches: {tree.branch_count}",
            f"alive: {len(tree.worklist)}",
        ]
        if tree.drawables:
            last = tree.drawables[-1]
            lines.append(f"dx: {last.dx}  dy: {last.dy}")
            lines.append(f"type: {last.branch_type.value}")
        for row, line in enumerate(lines):
            canvas.put(5, 2 + row, line.ljust(30))

    # ------------------------------------------------------------------
    # Print mode
    # ------------------------------------------------------------------
    def run_print(
        self, out: Optional[TextIO] = None, color: Optional[bool] = None
    ) -> str:
        """Grow one tree and write it to `out`.

        Returns:
            The text written (without the final newline).
        """
        out = out if out is not None else sys.stdout
        size = shutil.get_terminal_size()
        width, height = size.columns, size.lines
        tree = self.new_tree(width, height)
        tree.grow()
        if color is None:
            color = out.isatty()
        text = self.render(tree, width, height).to_text(color=color)
        out.write(text + "\n")
        out.flush()
        return text

    # ------------------------------------------------------------------
    # curses modes
    # ------------------------------------------------------------------
    def _handle_key(self, key: Optional[int]) -> None:
        if key is None:
            return
        if self.settings.screensaver or key in (CTRL_C, ord("q"), ord("Q")):
            self.should_quit = True

    def _quit_requested(self, screen: CursesScreen) -> Callable[[], bool]:
        def check() -> bool:
            self._handle_key(screen.poll_key())
            return self.should_quit

        return check

    def _grow_live(self, screen: CursesScreen, tree: Tree, canvas: Canvas) -> None:
        painter = Painter(tree.options.leaves, tree.seed)
        check = self._quit_requested(screen)
        while not tree.is_complete and not check():
            painter.paint_all(canvas, tree.step())
            # fast-forward until the loaded checkpoint's branch count is reached
            if tree.branch_count < self.target_branch_count:
                continue
            if self.settings.verbosity >= 2:
                self.draw_stats(canvas, tree)
            screen.blit(canvas)
            screen.wait(self.settings.time_step)

    def _pause(self, screen: CursesScreen, seconds: Optional[float]) -> None:
        """Wait for `seconds`, or until quit when `seconds` is None."""
        waited = 0.0
        tick = 0.05
        check = self._quit_requested(screen)
        while not check():
            if seconds is not None and waited >= seconds:
                return
            screen.wait(tick)
            waited += tick

    def run_curses(self, stdscr: "curses.window") -> None:
        """Main loop for the interactive modes."""
        screen = CursesScreen(stdscr)
        live = self.settings.live or self.settings.screensaver
        infinite = self.settings.infinite or self.settings.screensaver

        while not self.should_quit:
            width, height = screen.size()
            tree = self.new_tree(width, height)
            canvas = self.scenery(width, height)
            if live:
                self._grow_live(screen, tree, canvas)
            else:
                tree.grow(should_stop=self._quit_requested(screen))
                canvas = self.render(tree, width, height)
            if self.settings.verbosity >= 2:
                self.draw_stats(canvas, tree)
            screen.blit(canvas)
            self.target_branch_count = 0

            self._pause(screen, self.settings.time_wait if infinite else None)

    def run(self) -> int:
        """Run the application and return the process exit status."""
        try:
            if self.settings.print_tree and not (
                self.settings.live or self.settings.infinite or self.settings.screensaver
            ):
                self.run_print()
            else:
                curses.wrapper(self.run_curses)
                if self.settings.print_tree and self.last_tree is not None:
                    size = shutil.get_terminal_size()
                    canvas = self.render(self.last_tree, size.columns, size.lines)
                    sys.stdout.write(canvas.to_text(color=sys.stdout.isatty()) + "\n")
        except KeyboardInterrupt:
            _LOGGER.info("Interrupted; exiting.")
        finally:
            self.save()
        return 0
