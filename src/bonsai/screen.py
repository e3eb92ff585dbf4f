"""curses front-end: blits a Canvas to the terminal and polls keys."""

from __future__ import annotations

import curses
import logging
from typing import Dict, Optional, Tuple

from .branch import Style
from .render import Canvas

_LOGGER = logging.getLogger(__name__)

CTRL_C = 3


class ColorMap:
    """Lazily allocates curses colour pairs for palette indices."""

    def __init__(self) -> None:
        self._pairs: Dict[int, int] = {}
        self.enabled = False

    def setup(self) -> None:
        if not curses.has_colors():
            _LOGGER.info("Terminal has no colour support; drawing monochrome.")
            return
        curses.start_color()
        curses.use_default_colors()
        self.enabled = True

    def attr(self, style: Optional[Style]) -> int:
        """Return the curses attribute for `style`."""
        if style is None:
            return curses.A_NORMAL
        attr = curses.A_BOLD if style.bold else curses.A_NORMAL
        if not self.enabled:
            return attr
        pair = self._pairs.get(style.color)
        if pair is None:
            pair = len(self._pairs) + 1
            if pair >= curses.COLOR_PAIRS:
                return attr
            curses.init_pair(pair, style.color % max(curses.COLORS, 1), -1)
            self._pairs[style.color] = pair
        return attr | curses.color_pair(pair)


class CursesScreen:
    """Thin wrapper around a curses window."""

    def __init__(self, stdscr: "curses.window") -> None:
        self.stdscr = stdscr
        self.colors = ColorMap()
        self.colors.setup()
        try:
            curses.curs_set(0)
        except curses.error:
            _LOGGER.debug("Terminal cannot hide the cursor.")
        stdscr.nodelay(True)
        stdscr.keypad(True)

    def size(self) -> Tuple[int, int]:
        """Return ``(width, height)`` of the window."""
        height, width = self.stdscr.getmaxyx()
        return width, height

    def blit(self, canvas: Canvas) -> None:
        """Copy `canvas` into the window and refresh it."""
        self.stdscr.erase()
        for y, row in enumerate(canvas.rows()):
            for x, (ch, style) in enumerate(row):
                if ch == " " and style is None:
                    continue
                try:
                    self.stdscr.addstr(y, x, ch, self.colors.attr(style))
                except curses.error:
                    # writing the bottom-right cell moves the cursor off-screen
                    pass
        self.stdscr.refresh()

    def poll_key(self) -> Optional[int]:
        """Return a pending key code, or None when no key is waiting."""
        key = self.stdscr.getch()
        if key == -1:
            return None
        if key == curses.KEY_RESIZE:
            _LOGGER.info("Terminal resized to %dx%d", *self.size())
            return None
        return key

    def wait(self, seconds: float) -> None:
        """Sleep for `seconds` without blocking on input."""
        curses.napms(max(int(seconds * 1000), 0))
