from typing import List, Optional, Tuple

from ..errors import LayoutOverflowError
from .core import Glyph

BLANK: Glyph = (" ", 1)
# second half of a double-width glyph
SPILL: Glyph = (" ", 0)


class Canvas:
    """Character buffer for one render; each cell holds a (char, width) glyph."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.rows: List[List[Glyph]] = [[BLANK] * width for _ in range(height)]
        self._bounds: Optional[Tuple[int, int, int, int]] = None

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _glyph_start(self, x: int, y: int) -> int:
        row = self.rows[y]
        while x > 0 and row[x][1] == 0:
            x -= 1
        return x

    def _erase(self, x: int, y: int) -> None:
        row = self.rows[y]
        start = self._glyph_start(x, y)
        span = max(row[start][1], 1)
        for xi in range(start, min(start + span, self.width)):
            row[xi] = BLANK

    def set(self, x: int, y: int, char: str, width: int = 1) -> None:
        width = max(width, 1)
        if not self.in_bounds(x, y) or not self.in_bounds(x + width - 1, y):
            raise LayoutOverflowError(
                f"Canvas write at ({x}, {y}) is outside the {self.width}x{self.height} canvas."
            )
        for xi in range(x, x + width):
            self._erase(xi, y)

        row = self.rows[y]
        row[x] = (char, width)
        for xi in range(x + 1, x + width):
            row[xi] = SPILL

        if char != " ":
            right = x + width - 1
            if self._bounds is None:
                self._bounds = (x, y, right, y)
            else:
                min_x, min_y, max_x, max_y = self._bounds
                self._bounds = (min(min_x, x), min(min_y, y), max(max_x, right), max(max_y, y))

    def get(self, x: int, y: int) -> str:
        if not self.in_bounds(x, y):
            return " "
        char, width = self.rows[y][x]
        return char if width else " "

    def is_blank(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.rows[y][x] == BLANK

    @property
    def origin(self) -> Optional[Tuple[int, int]]:
        if self._bounds is None:
            return None
        return self._bounds[0], self._bounds[1]

    def render(self, crop: bool = True) -> str:
        if not crop:
            return "\n".join(self._line(row, 0, self.width) for row in self.rows)
        if self._bounds is None:
            return ""
        min_x, min_y, max_x, max_y = self._bounds
        return "\n".join(
            self._line(row, min_x, max_x + 1).rstrip() for row in self.rows[min_y : max_y + 1]
        )

    @staticmethod
    def _line(row: List[Glyph], start: int, stop: int) -> str:
        return "".join(char for char, width in row[start:stop] if width)
