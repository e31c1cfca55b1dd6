from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from wcwidth import wcwidth

Point = Tuple[int, int]
Glyph = Tuple[str, int]


class Direction(Enum):

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def is_horizontal(self) -> bool:
        return self.dy == 0

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def step(self, point: Point) -> Point:
        return (point[0] + self.dx, point[1] + self.dy)

    @classmethod
    def from_step(cls, dx: int, dy: int) -> Optional["Direction"]:
        if dx > 0:
            return cls.RIGHT
        if dx < 0:
            return cls.LEFT
        if dy > 0:
            return cls.DOWN
        if dy < 0:
            return cls.UP
        return None

    @classmethod
    def between(cls, start: Point, end: Point) -> Optional["Direction"]:
        return cls.from_step(end[0] - start[0], end[1] - start[1])


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Side(Enum):

    BOTTOM = "bottom"
    RIGHT = "right"
    LEFT = "left"
    TOP = "top"

    @property
    def outward(self) -> Direction:
        return _OUTWARD[self]

    @property
    def is_vertical_border(self) -> bool:
        return self in (Side.LEFT, Side.RIGHT)

    @property
    def opposite(self) -> "Side":
        return _OPPOSITE_SIDES[self]


_OUTWARD = {
    Side.BOTTOM: Direction.DOWN,
    Side.TOP: Direction.UP,
    Side.LEFT: Direction.LEFT,
    Side.RIGHT: Direction.RIGHT,
}

_OPPOSITE_SIDES = {
    Side.BOTTOM: Side.TOP,
    Side.TOP: Side.BOTTOM,
    Side.LEFT: Side.RIGHT,
    Side.RIGHT: Side.LEFT,
}


def sides_for_offset(dc: int, dr: int) -> Tuple[Side, Side]:
    """Source and target border sides for an edge spanning ``dc`` columns and ``dr`` rows."""
    if abs(dc) >= abs(dr):
        if dc >= 0:
            return Side.RIGHT, Side.LEFT
        return Side.LEFT, Side.RIGHT
    if dr > 0:
        return Side.BOTTOM, Side.TOP
    return Side.TOP, Side.BOTTOM


@dataclass(frozen=True)
class BoxChars:

    top_left: str = "+"
    top_right: str = "+"
    bottom_left: str = "+"
    bottom_right: str = "+"

    horizontal: str = "-"
    vertical: str = "|"
    cross: str = "+"

    arrow_down: str = "v"
    arrow_right: str = ">"
    arrow_left: str = "<"
    arrow_up: str = "^"

    @classmethod
    def for_style(cls, style: str) -> "BoxChars":
        key = style.lower().strip()
        if key in {"ascii", "plain", "square"}:
            return cls()
        if key in {"rounded", "round"}:
            return cls(
                top_left=".",
                top_right=".",
                bottom_left="'",
                bottom_right="'",
            )
        raise ValueError(f"Unknown box style: {style}")


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width - 1

    @property
    def bottom(self) -> int:
        return self.y + self.height - 1

    @property
    def center_x(self) -> int:
        return self.x + self.width // 2

    @property
    def center_y(self) -> int:
        return self.y + self.height // 2

    def contains(self, point: Point) -> bool:
        x, y = point
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def cells(self) -> Iterator[Point]:
        for y in range(self.y, self.bottom + 1):
            for x in range(self.x, self.right + 1):
                yield (x, y)

    def touches(self, point: Point) -> bool:
        if self.contains(point):
            return False
        x, y = point
        return any(self.contains((x + dx, y + dy)) for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)))


def text_lines(text: str, ascii_only: bool = True) -> List[List[Glyph]]:
    lines: List[List[Glyph]] = []
    for raw_line in text.split("\n"):
        glyphs: List[Glyph] = []
        for char in raw_line:
            if ascii_only:
                if " " <= char <= "~":
                    glyphs.append((char, 1))
                continue
            width = wcwidth(char)
            if width > 0:
                glyphs.append((char, width))
        lines.append(glyphs)
    return lines


def line_width(glyphs: List[Glyph]) -> int:
    return sum(width for _, width in glyphs)
