"""Rendering of a grown tree onto a character canvas.

The growth engine only knows geometry. This module turns its drawables into
glyphs: it selects a string per branch kind and direction, places it on a
:class:`Canvas` together with the pot and an optional message box, and can
export the canvas as plain or ANSI-coloured text.
"""

from __future__ import annotations

import enum
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .branch import BranchType, Drawable, Style
from .dice import Dice
from .styles import GREEN_BOTTOM_STYLE, MESSAGE_STYLE, POT_STYLE, TREE_BASE_STYLE

_LOGGER = logging.getLogger(__name__)

ESCAPE = "\u001b"
RESET = ESCAPE + "[0m"
FORMAT_STR = ESCAPE + "[{values}m"

MESSAGE_WRAP = 30

Segment = Tuple[str, Style]


class BaseType(enum.IntEnum):
    """Ascii-art pot drawn under the tree."""

    NONE = 0
    SMALL = 1
    LARGE = 2


def tree_bounds(width: int, height: int, base: BaseType) -> Tuple[int, int]:
    """Return ``(max_x, max_y)`` of the growth viewport above the pot.

    Both bounds are the last drawable column and row, so a segment clamped to
    them still lands on the canvas.
    """
    offset = {BaseType.NONE: 1, BaseType.SMALL: 4, BaseType.LARGE: 5}[base]
    return max(width - 1, 0), max(height - offset, 0)


def choose_string(
    branch_type: BranchType,
    life: int,
    dx: int,
    dy: int,
    leaves: Sequence[str],
    dice: Dice,
) -> str:
    """Return the glyph string for one drawn step.

    Branches about to die (life < 4) are drawn as leaves whatever their kind.
    """
    if life < 4:
        branch_type = BranchType.DYING

    if branch_type is BranchType.TRUNK:
        if dy == 0:
            return "/~"
        if dx < 0:
            return "\\|"
        if dx == 0:
            return "/|\\"
        return "|/"
    if branch_type is BranchType.SHOOT_LEFT:
        if dy > 0:
            return "\\"
        if dy == 0:
            return "\\_"
        if dx < 0:
            return "\\|"
        if dx == 0:
            return "/|"
        return "/"
    if branch_type is BranchType.SHOOT_RIGHT:
        if dy > 0:
            return "/"
        if dy == 0:
            return "_/"
        if dx < 0:
            return "\\|"
        if dx == 0:
            return "/|"
        return "/"
    return dice.choice(leaves)


def ansi_code(style: Style) -> str:
    """Return the escape sequence selecting `style`'s 256-colour foreground."""
    values = ["1" if style.bold else "0", f"38;5;{style.color}"]
    return FORMAT_STR.format(values=";".join(values))


class Canvas:
    """A fixed-size grid of characters, each with an optional style.

    Attributes:
        width (int): Number of columns.
        height (int): Number of rows.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"Canvas size must be non-negative; got {width}x{height}")
        self.width = width
        self.height = height
        self._chars: List[List[str]] = [[" "] * width for _ in range(height)]
        self._styles: List[List[Optional[Style]]] = [
            [None] * width for _ in range(height)
        ]

    def clear(self) -> None:
        """Blank every cell."""
        for row in range(self.height):
            self._chars[row] = [" "] * self.width
            self._styles[row] = [None] * self.width

    def put(self, x: int, y: int, text: str, style: Optional[Style] = None) -> int:
        """Write `text` starting at ``(x, y)``, clipping at the edges.

        Returns:
            The number of cells actually written.
        """
        if not 0 <= y < self.height:
            return 0
        written = 0
        for i, ch in enumerate(text):
            col = x + i
            if 0 <= col < self.width:
                self._chars[y][col] = ch
                self._styles[y][col] = style
                written += 1
        return written

    def put_segments(self, x: int, y: int, segments: Iterable[Segment]) -> None:
        """Write consecutive differently-styled strings on one row."""
        for text, style in segments:
            self.put(x, y, text, style)
            x += len(text)

    def char_at(self, x: int, y: int) -> str:
        """Return the character stored at ``(x, y)``."""
        return self._chars[y][x]

    def style_at(self, x: int, y: int) -> Optional[Style]:
        """Return the style stored at ``(x, y)``, or None for unstyled cells."""
        return self._styles[y][x]

    def rows(self) -> List[List[Tuple[str, Optional[Style]]]]:
        """Return the grid as rows of ``(char, style)`` cells."""
        return [
            list(zip(self._chars[row], self._styles[row])) for row in range(self.height)
        ]

    def to_text(self, color: bool = False, trim: bool = True) -> str:
        """Export the canvas as text.

        Args:
            color: Emit ANSI escapes for styled cells.
            trim: Drop leading blank rows and trailing spaces of each row.

        Returns:
            The canvas content, rows separated by newlines.
        """
        lines: List[str] = []
        for row in range(self.height):
            chars = self._chars[row]
            end = len("".join(chars).rstrip()) if trim else self.width
            if not color:
                lines.append("".join(chars[:end]))
                continue
            parts: List[str] = []
            current: Optional[Style] = None
            for col in range(end):
                style = self._styles[row][col]
                if style != current:
                    parts.append(RESET if style is None else ansi_code(style))
                    current = style
                parts.append(chars[col])
            if current is not None:
                parts.append(RESET)
            lines.append("".join(parts))

        if trim:
            while lines and not lines[0].strip():
                lines.pop(0)
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Scenery
    # ------------------------------------------------------------------
    def draw_base(self, base: BaseType) -> None:
        """Draw the pot and the soil line at the bottom centre."""
        if base is BaseType.SMALL:
            x_pos = max(self.width // 2 - 7, 0)
            y_pos = max(self.height - 2, 0)
            pot = (" (           ) ", "  (_________)  ")
            soil: Tuple[Segment, ...] = (
                ("(", POT_STYLE),
                ("---", GREEN_BOTTOM_STYLE),
                ("./~~~\\.", TREE_BASE_STYLE),
                ("---", GREEN_BOTTOM_STYLE),
                (")", POT_STYLE),
            )
            soil_x = x_pos
        elif base is BaseType.LARGE:
            x_pos = max(self.width // 2 - 16, 0)
            y_pos = max(self.height - 3, 0)
            pot = (
                "   \\                           /",
                "    \\_________________________/ ",
                "    (_)                     (_) ",
            )
            soil = (
                (":", POT_STYLE),
                ("___________", GREEN_BOTTOM_STYLE),
                ("./~~~\\.", TREE_BASE_STYLE),
                ("___________", GREEN_BOTTOM_STYLE),
                (":", POT_STYLE),
            )
            soil_x = x_pos + 2
        else:
            return

        for i, line in enumerate(pot):
            self.put(x_pos, y_pos + i, line, POT_STYLE)
        self.put_segments(soil_x, y_pos - 1, soil)

    def draw_message(self, message: str) -> None:
        """Draw `message` in a bordered box right of the tree, wrapped at 30."""
        if not message:
            return
        box_w = 34 if len(message) > MESSAGE_WRAP else len(message) + 5
        box_h = len(message) // MESSAGE_WRAP + 3
        mid_x = self.width // 2 + self.width // 4
        x_pos = max(mid_x - box_w // 4, 0)
        y_pos = self.height // 2

        horizontal = "+" + "-" * (box_w - 2) + "+"
        self.put(x_pos, y_pos, horizontal, MESSAGE_STYLE)
        for row in range(1, box_h - 1):
            self.put(x_pos, y_pos + row, "|", MESSAGE_STYLE)
            self.put(x_pos + box_w - 1, y_pos + row, "|", MESSAGE_STYLE)
        self.put(x_pos, y_pos + box_h - 1, horizontal, MESSAGE_STYLE)

        for row, start in enumerate(range(0, len(message), MESSAGE_WRAP)):
            chunk = message[start : start + MESSAGE_WRAP]
            self.put(x_pos + 2, y_pos + 1 + row, chunk, MESSAGE_STYLE)


class Painter:
    """Draws engine drawables onto a canvas.

    The painter owns its own dice, seeded from the tree seed, so leaf choices
    never consume draws from the growth engine's random source.
    """

    def __init__(self, leaves: Sequence[str], seed: Optional[int] = None) -> None:
        if not leaves:
            raise ValueError("Painter needs at least one leaf string")
        self.leaves = tuple(leaves)
        self.dice = Dice(seed)

    def glyph(self, drawable: Drawable) -> str:
        """Return the string drawn for `drawable`."""
        return choose_string(
            drawable.branch_type,
            drawable.life,
            drawable.dx,
            drawable.dy,
            self.leaves,
            self.dice,
        )

    def paint(self, canvas: Canvas, drawable: Drawable) -> str:
        """Draw one drawable and return the glyph used."""
        text = self.glyph(drawable)
        canvas.put(drawable.x, drawable.y, text, drawable.style)
        return text

    def paint_all(self, canvas: Canvas, drawables: Iterable[Drawable]) -> int:
        """Draw every drawable in order and return how many were drawn."""
        count = 0
        for drawable in drawables:
            self.paint(canvas, drawable)
            count += 1
        _LOGGER.debug("Painter: drew %d drawables", count)
        return count
