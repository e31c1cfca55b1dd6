from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Sequence, Tuple

from ..errors import LayoutOverflowError, PlacementConflictError
from .block import Block
from .config import RenderConfig
from .core import Glyph, Point, Rect, line_width, sides_for_offset, text_lines
from .edge import Edge


@dataclass(frozen=True)
class Placement:
    block: Block
    rect: Rect
    column_rank: int
    row_rank: int
    lines: Tuple[Tuple[Glyph, ...], ...]
    text_width: int

    @property
    def text_height(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class Layout:
    placements: Dict[str, Placement]
    column_offsets: Tuple[int, ...]
    column_widths: Tuple[int, ...]
    row_offsets: Tuple[int, ...]
    row_heights: Tuple[int, ...]
    width: int
    height: int
    blocked: FrozenSet[Point] = field(default_factory=frozenset)

    def rect(self, block_id: str) -> Rect:
        return self.placements[block_id].rect

    def in_bounds(self, point: Point) -> bool:
        x, y = point
        return 0 <= x < self.width and 0 <= y < self.height

    def is_free(self, point: Point) -> bool:
        return self.in_bounds(point) and point not in self.blocked


def _rank_table(values: Sequence[int], compact: bool) -> Tuple[Dict[int, int], int]:
    distinct = sorted(set(values))
    if compact:
        return {value: index for index, value in enumerate(distinct)}, len(distinct)
    low = distinct[0]
    return {value: value - low for value in distinct}, distinct[-1] - low + 1


class GridLayout:

    def __init__(
        self,
        blocks: Sequence[Block],
        config: RenderConfig,
        edges: Sequence[Edge] = (),
    ) -> None:
        self._blocks = list(blocks)
        self._edges = list(edges)
        self._config = config

    def apply(self) -> Layout:
        config = self._config
        if not self._blocks:
            return Layout({}, (), (), (), (), 0, 0)

        self._check_conflicts()

        column_ranks, column_count = _rank_table([b.column for b in self._blocks], config.compact)
        row_ranks, row_count = _rank_table([b.row for b in self._blocks], config.compact)
        self._check_span(column_count, row_count)

        measured: Dict[str, Tuple[List[List[Glyph]], int]] = {}
        column_widths = [0] * column_count
        row_heights = [0] * row_count
        for block in self._blocks:
            lines = text_lines(block.text, config.ascii_only)
            text_width = max(line_width(line) for line in lines)
            measured[block.id] = (lines, text_width)

            box_width = text_width + 2 + config.padding * 2
            box_height = len(lines) + 2 + config.padding * 2
            column = column_ranks[block.column]
            row = row_ranks[block.row]
            column_widths[column] = max(column_widths[column], box_width)
            row_heights[row] = max(row_heights[row], box_height)

        # a border side needs one cell per edge anchored on it
        for (block, side), demand in self._side_demand(column_ranks, row_ranks).items():
            if side.is_vertical_border:
                row = row_ranks[block.row]
                row_heights[row] = max(row_heights[row], demand)
            else:
                column = column_ranks[block.column]
                column_widths[column] = max(column_widths[column], demand)

        column_widths = [width or config.empty_rank_size for width in column_widths]
        row_heights = [height or config.empty_rank_size for height in row_heights]

        column_offsets, width = self._offsets(column_widths, config.hmargin)
        row_offsets, height = self._offsets(row_heights, config.vmargin)
        self._validate_bounds(width, height)

        placements: Dict[str, Placement] = {}
        blocked = set()
        for block in self._blocks:
            column = column_ranks[block.column]
            row = row_ranks[block.row]
            rect = Rect(
                column_offsets[column],
                row_offsets[row],
                column_widths[column],
                row_heights[row],
            )
            lines, text_width = measured[block.id]
            placements[block.id] = Placement(
                block=block,
                rect=rect,
                column_rank=column,
                row_rank=row,
                lines=tuple(tuple(line) for line in lines),
                text_width=text_width,
            )
            blocked.update(rect.cells())

        return Layout(
            placements=placements,
            column_offsets=tuple(column_offsets),
            column_widths=tuple(column_widths),
            row_offsets=tuple(row_offsets),
            row_heights=tuple(row_heights),
            width=width,
            height=height,
            blocked=frozenset(blocked),
        )

    def _check_conflicts(self) -> None:
        seen: Dict[Tuple[int, int], str] = {}
        for block in self._blocks:
            other = seen.get(block.position)
            if other is not None:
                raise PlacementConflictError(block.position, (other, block.id))
            seen[block.position] = block.id

    def _side_demand(self, column_ranks: Dict[int, int], row_ranks: Dict[int, int]) -> Counter:
        by_id = {block.id: block for block in self._blocks}
        demand: Counter = Counter()
        for edge in self._edges:
            source = by_id[edge.source]
            target = by_id[edge.target]
            dc = column_ranks[target.column] - column_ranks[source.column]
            dr = row_ranks[target.row] - row_ranks[source.row]
            source_side, target_side = sides_for_offset(dc, dr)
            demand[(source, source_side)] += 1
            demand[(target, target_side)] += 1
        return demand

    def _check_span(self, column_count: int, row_count: int) -> None:
        config = self._config
        if column_count > config.max_canvas_width:
            raise LayoutOverflowError(
                f"Diagram spans {column_count} columns, more than max_canvas_width "
                f"{config.max_canvas_width}."
            )
        if row_count > config.max_canvas_height:
            raise LayoutOverflowError(
                f"Diagram spans {row_count} rows, more than max_canvas_height "
                f"{config.max_canvas_height}."
            )
        min_width = column_count * config.empty_rank_size + (column_count + 1) * config.hmargin
        min_height = row_count * config.empty_rank_size + (row_count + 1) * config.vmargin
        self._validate_bounds(min_width, min_height)

    def _offsets(self, extents: List[int], margin: int) -> Tuple[List[int], int]:
        offsets: List[int] = []
        current = margin
        for extent in extents:
            offsets.append(current)
            current += extent + margin
        return offsets, current

    def _validate_bounds(self, required_width: int, required_height: int) -> None:
        if required_width > self._config.max_canvas_width:
            raise LayoutOverflowError(
                f"Diagram width {required_width} exceeds max_canvas_width "
                f"{self._config.max_canvas_width}."
            )
        if required_height > self._config.max_canvas_height:
            raise LayoutOverflowError(
                f"Diagram height {required_height} exceeds max_canvas_height "
                f"{self._config.max_canvas_height}."
            )
