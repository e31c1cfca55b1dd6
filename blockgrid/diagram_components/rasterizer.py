import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .canvas import Canvas
from .config import RenderConfig
from .core import BoxChars, Direction, Glyph, Point, line_width, text_lines
from .grid_layout import Layout, Placement
from .router import Path

logger = logging.getLogger(__name__)

_LINE = "line"
_ARROW = "arrow"


def glyph_table(chars: BoxChars) -> Dict[Tuple[Direction, Direction], str]:
    """Glyph for a path cell keyed by (incoming, outgoing) travel direction."""
    return {
        (Direction.RIGHT, Direction.RIGHT): chars.horizontal,
        (Direction.LEFT, Direction.LEFT): chars.horizontal,
        (Direction.UP, Direction.UP): chars.vertical,
        (Direction.DOWN, Direction.DOWN): chars.vertical,
        (Direction.RIGHT, Direction.DOWN): chars.top_right,
        (Direction.RIGHT, Direction.UP): chars.bottom_right,
        (Direction.LEFT, Direction.DOWN): chars.top_left,
        (Direction.LEFT, Direction.UP): chars.bottom_left,
        (Direction.DOWN, Direction.RIGHT): chars.bottom_left,
        (Direction.DOWN, Direction.LEFT): chars.bottom_right,
        (Direction.UP, Direction.RIGHT): chars.top_left,
        (Direction.UP, Direction.LEFT): chars.top_right,
    }


def arrow_table(chars: BoxChars) -> Dict[Direction, str]:
    return {
        Direction.UP: chars.arrow_up,
        Direction.DOWN: chars.arrow_down,
        Direction.LEFT: chars.arrow_left,
        Direction.RIGHT: chars.arrow_right,
    }


class Rasterizer:

    def __init__(self, layout: Layout, config: RenderConfig) -> None:
        self._layout = layout
        self._config = config
        self.chars = config.chars
        self._turns = glyph_table(self.chars)
        self._arrows = arrow_table(self.chars)
        self._edge_cells: Dict[Point, str] = {}

    def draw(self, paths: Sequence[Path]) -> Canvas:
        canvas = Canvas(self._layout.width, self._layout.height)
        for placement in self._layout.placements.values():
            self._draw_box(canvas, placement)
        for path in paths:
            self._draw_path(canvas, path)
        if self._config.draw_labels:
            label_occupied: Set[Point] = set()
            for path in paths:
                self._draw_edge_label(canvas, path, label_occupied)
        return canvas

    def _draw_box(self, canvas: Canvas, placement: Placement) -> None:
        rect = placement.rect
        chars = self.chars
        x, y = rect.x, rect.y
        right, bottom = rect.right, rect.bottom

        canvas.set(x, y, chars.top_left)
        canvas.set(x, bottom, chars.bottom_left)
        for i in range(x + 1, right):
            canvas.set(i, y, chars.horizontal)
            canvas.set(i, bottom, chars.horizontal)
        canvas.set(right, y, chars.top_right)
        canvas.set(right, bottom, chars.bottom_right)
        for j in range(y + 1, bottom):
            canvas.set(x, j, chars.vertical)
            canvas.set(right, j, chars.vertical)

        top = y + (rect.height - placement.text_height) // 2
        for index, line in enumerate(placement.lines):
            cursor = x + (rect.width - line_width(list(line))) // 2
            for char, width in line:
                canvas.set(cursor, top + index, char, width=width)
                cursor += width

    def _drawable(self, point: Point) -> bool:
        return self._layout.is_free(point)

    def _draw_path(self, canvas: Canvas, path: Path) -> None:
        cells = path.cells
        last = len(cells) - 1
        for index, point in enumerate(cells):
            if path.fallback and not self._drawable(point):
                continue
            x, y = point
            existing = self._edge_cells.get(point)

            if index == last:
                canvas.set(x, y, self._arrows[path.end_direction])
                self._edge_cells[point] = _ARROW
                continue

            outgoing = Direction.between(point, cells[index + 1])
            if index == 0:
                incoming = outgoing if path.fallback else path.start_direction
            else:
                incoming = Direction.between(cells[index - 1], point)

            if existing == _ARROW:
                continue
            glyph = self._turns[(incoming, outgoing)]
            if existing == _LINE:
                glyph = self.chars.cross
            canvas.set(x, y, glyph)
            self._edge_cells[point] = _LINE

    def _longest_segment(self, points: Sequence[Point]) -> Optional[Tuple[Point, Point, bool]]:
        best: Optional[Tuple[Point, Point, bool]] = None
        best_score = (-1, -1)
        for index in range(len(points) - 1):
            start, end = points[index], points[index + 1]
            if start == end:
                continue
            horizontal = start[1] == end[1]
            length = abs(end[0] - start[0]) if horizontal else abs(end[1] - start[1])
            score = (1 if horizontal else 0, length)
            if score > best_score:
                best_score = score
                best = (start, end, horizontal)
        return best

    def _draw_edge_label(self, canvas: Canvas, path: Path, occupied: Set[Point]) -> None:
        label = (path.edge.label or "").strip()
        if not label:
            return
        glyphs: List[Glyph] = []
        for line in text_lines(label, self._config.ascii_only):
            if glyphs and line:
                glyphs.append((" ", 1))
            glyphs.extend(line)
        if not glyphs:
            return
        glyphs = [(" ", 1)] + glyphs + [(" ", 1)]
        label_width = line_width(glyphs)

        points = path.points
        segment = self._longest_segment(points) if len(points) > 1 else None
        if segment is None:
            start = end = points[0]
            horizontal = path.end_direction.is_horizontal
        else:
            start, end, horizontal = segment

        def can_place(start_x: int, row: int) -> bool:
            for x in range(start_x, start_x + label_width):
                if not self._drawable((x, row)) or not canvas.is_blank(x, row):
                    return False
                if (x, row) in occupied:
                    return False
            return True

        def place(start_x: int, row: int) -> None:
            cursor = start_x
            for char, width in glyphs:
                canvas.set(cursor, row, char, width=width)
                cursor += width
            occupied.update((x, row) for x in range(start_x, start_x + label_width))

        if horizontal:
            low, high = sorted((start[0], end[0]))
            start_x = low + (high - low) // 2 - label_width // 2
            row = start[1]
            candidates = [(start_x, row - 1), (start_x, row + 1), (start_x, row - 2), (start_x, row + 2)]
        else:
            low, high = sorted((start[1], end[1]))
            row = low + (high - low) // 2
            column = start[0]
            candidates = [
                (column + 1, row),
                (column - label_width, row),
                (column + 2, row),
                (column - label_width - 1, row),
            ]

        for start_x, candidate_row in candidates:
            if can_place(start_x, candidate_row):
                place(start_x, candidate_row)
                return
        logger.debug("No room for label %r on edge %s -> %s", label, path.edge.source, path.edge.target)
