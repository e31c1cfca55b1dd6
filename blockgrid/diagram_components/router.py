import heapq
import itertools
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..errors import RoutingWarning
from .config import RenderConfig
from .core import Direction, Point, Rect, Side, sides_for_offset
from .edge import Edge
from .grid_layout import Layout, Placement

logger = logging.getLogger(__name__)

TURN_PENALTY = 3
PROXIMITY_PENALTY = 1
CROSS_PENALTY = 8
OVERLAP_PENALTY = 40
ANCHOR_PENALTY = 100

MOVES = (Direction.RIGHT, Direction.LEFT, Direction.DOWN, Direction.UP)

_HORIZONTAL = "horizontal"
_VERTICAL = "vertical"
_CORNER = "corner"
_END = "end"


@dataclass(frozen=True)
class Anchor:
    block_id: str
    side: Side
    point: Point
    shared: bool = False


@dataclass(frozen=True)
class Path:
    edge: Edge
    cells: Tuple[Point, ...]
    start_direction: Direction
    end_direction: Direction
    fallback: bool = False

    @property
    def start(self) -> Point:
        return self.cells[0]

    @property
    def end(self) -> Point:
        return self.cells[-1]

    @property
    def points(self) -> Tuple[Point, ...]:
        return tuple(simplify_path(list(self.cells)))


def simplify_path(path: List[Point]) -> List[Point]:
    if len(path) <= 2:
        return path
    simplified: List[Point] = [path[0]]
    prev = path[0]
    prev_dir: Optional[Direction] = None
    for cur in path[1:]:
        direction = Direction.between(prev, cur)
        if direction is None:
            continue
        if prev_dir is not None and direction != prev_dir:
            simplified.append(prev)
        prev = cur
        prev_dir = direction
    simplified.append(path[-1])
    return simplified


def expand_points(points: Sequence[Point]) -> List[Point]:
    cells: List[Point] = [points[0]]
    for target in points[1:]:
        direction = Direction.between(cells[-1], target)
        while direction is not None:
            cells.append(direction.step(cells[-1]))
            direction = Direction.between(cells[-1], target)
    return cells


def anchor_sides(source: Placement, target: Placement) -> Tuple[Side, Side]:
    return sides_for_offset(
        target.column_rank - source.column_rank,
        target.row_rank - source.row_rank,
    )


def fan_order(center: int, low: int, high: int) -> List[int]:
    if low > high:
        return []
    order = [center]
    step = 1
    while len(order) < high - low + 1:
        for candidate in (center + step, center - step):
            if low <= candidate <= high:
                order.append(candidate)
        step += 1
    return order


def _spread(center: int, low: int, high: int) -> List[int]:
    """Interior positions center-outward, then the corner positions."""
    order = fan_order(center, low + 1, high - 1)
    for corner in (high, low):
        if corner not in order:
            order.append(corner)
    return order


def side_slots(rect: Rect, side: Side) -> List[Point]:
    if side.is_vertical_border:
        x = rect.x - 1 if side is Side.LEFT else rect.right + 1
        return [(x, y) for y in _spread(rect.center_y, rect.y, rect.bottom)]
    y = rect.y - 1 if side is Side.TOP else rect.bottom + 1
    return [(x, y) for x in _spread(rect.center_x, rect.x, rect.right)]


_NEAREST_FIRST = {
    Side.RIGHT: lambda point: -point[0],
    Side.LEFT: lambda point: point[0],
    Side.BOTTOM: lambda point: -point[1],
    Side.TOP: lambda point: point[1],
}


def candidate_slots(rect: Rect, side: Side, toward: int) -> List[Tuple[Side, Point]]:
    """Anchor cells around ``rect`` in preference order for an edge wanting ``side``.

    The wanted side comes first, then the two adjacent sides (the one facing
    ``toward`` first, cells nearest the wanted side first), then the opposite side.
    """
    if side.is_vertical_border:
        adjacent = (Side.BOTTOM, Side.TOP) if toward >= 0 else (Side.TOP, Side.BOTTOM)
    else:
        adjacent = (Side.RIGHT, Side.LEFT) if toward >= 0 else (Side.LEFT, Side.RIGHT)

    candidates = [(side, point) for point in side_slots(rect, side)]
    for other in adjacent:
        slots = sorted(side_slots(rect, other), key=_NEAREST_FIRST[side])
        candidates.extend((other, point) for point in slots)
    candidates.extend((side.opposite, point) for point in side_slots(rect, side.opposite))
    return candidates


class EdgeRouter:

    def __init__(self, layout: Layout, config: RenderConfig) -> None:
        self._layout = layout
        self._config = config
        self._marks: Dict[Point, Set[str]] = {}
        self._anchor_cells: Counter = Counter()

    def route(self, edges: Sequence[Edge]) -> Tuple[List[Path], List[RoutingWarning]]:
        anchors = self._assign_anchors(edges)
        self._anchor_cells = Counter()
        for start, end in anchors:
            self._anchor_cells[start.point] += 1
            self._anchor_cells[end.point] += 1

        paths: List[Path] = []
        warnings: List[RoutingWarning] = []
        for edge, (start, end) in zip(edges, anchors):
            path, warning = self._route_edge(edge, start, end)
            if warning is not None:
                warnings.append(warning)
            else:
                self._mark_path(path)
            paths.append(path)
        return paths, warnings

    def _assign_anchors(self, edges: Sequence[Edge]) -> List[Tuple[Anchor, Anchor]]:
        taken: Set[Point] = set()

        def take(placement: Placement, side: Side, toward: int) -> Anchor:
            block_id = placement.block.id
            for candidate_side, point in candidate_slots(placement.rect, side, toward):
                if point not in taken:
                    taken.add(point)
                    return Anchor(block_id, candidate_side, point)
            # every cell around the block is already an anchor
            return Anchor(block_id, side, side_slots(placement.rect, side)[0], shared=True)

        anchors: List[Tuple[Anchor, Anchor]] = []
        for edge in edges:
            source = self._layout.placements[edge.source]
            target = self._layout.placements[edge.target]
            source_side, target_side = anchor_sides(source, target)
            if source_side.is_vertical_border:
                toward = target.row_rank - source.row_rank
            else:
                toward = target.column_rank - source.column_rank
            anchors.append((take(source, source_side, toward), take(target, target_side, -toward)))
        return anchors

    def _route_edge(
        self,
        edge: Edge,
        start: Anchor,
        end: Anchor,
    ) -> Tuple[Path, Optional[RoutingWarning]]:
        exit_dir = start.side.outward
        entry_dir = end.side.outward.opposite

        reason: Optional[str] = None
        if start.shared or end.shared:
            shared = start if start.shared else end
            reason = f"no free anchor cell left around block '{shared.block_id}'"
        elif not self._layout.is_free(start.point):
            reason = f"source anchor {start.point} is outside the routing gutter"
        elif not self._layout.is_free(end.point):
            reason = f"target anchor {end.point} is outside the routing gutter"
        else:
            cells = self._search(start.point, end.point, exit_dir, entry_dir)
            if cells is not None:
                logger.debug(
                    "Routed %s -> %s through %d cells", edge.source, edge.target, len(cells)
                )
                return Path(edge, tuple(cells), exit_dir, entry_dir), None
            reason = "no gutter-only path exists"

        logger.debug("Falling back to a straight path for %s -> %s: %s", edge.source, edge.target, reason)
        cells = self._fallback_path(start.point, end.point, start.side.is_vertical_border)
        path = Path(edge, tuple(cells), exit_dir, entry_dir, fallback=True)
        return path, RoutingWarning(edge, reason, anchor=start.point)

    def _fallback_path(self, start: Point, end: Point, prefer_horizontal: bool) -> List[Point]:
        sx, sy = start
        ex, ey = end
        if prefer_horizontal:
            mid_x = (sx + ex) // 2
            points = [start, (mid_x, sy), (mid_x, ey), end]
        else:
            mid_y = (sy + ey) // 2
            points = [start, (sx, mid_y), (ex, mid_y), end]
        return expand_points(points)

    def _proximity(self, point: Point) -> int:
        x, y = point
        blocked = self._layout.blocked
        return sum(1 for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)) if (x + dx, y + dy) in blocked)

    def _cell_penalty(self, point: Point, move: Direction, own: Tuple[Point, Point]) -> int:
        penalty = PROXIMITY_PENALTY * self._proximity(point)
        marks = self._marks.get(point)
        if marks:
            axis = _HORIZONTAL if move.is_horizontal else _VERTICAL
            if axis in marks or _CORNER in marks or _END in marks:
                penalty += OVERLAP_PENALTY
            else:
                penalty += CROSS_PENALTY
        if point not in own and self._anchor_cells.get(point):
            penalty += ANCHOR_PENALTY
        return penalty

    def _search(
        self,
        start: Point,
        end: Point,
        exit_dir: Direction,
        entry_dir: Direction,
    ) -> Optional[List[Point]]:
        if start == end:
            return [start]

        own = (start, end)
        layout = self._layout

        def heuristic(point: Point) -> int:
            return abs(point[0] - end[0]) + abs(point[1] - end[1])

        counter = itertools.count()
        State = Tuple[Point, Direction]
        start_state: State = (start, exit_dir)
        open_heap: List[Tuple[int, int, int, Point, Direction]] = []
        heapq.heappush(open_heap, (heuristic(start), 0, next(counter), start, exit_dir))

        came: Dict[State, State] = {}
        best_cost: Dict[State, int] = {start_state: 0}
        goal_state: Optional[State] = None

        while open_heap:
            _, g_cost, _, point, direction = heapq.heappop(open_heap)
            current_state = (point, direction)
            if g_cost > best_cost.get(current_state, g_cost):
                continue
            if point == end:
                goal_state = current_state
                break

            for move in MOVES:
                if move is direction.opposite:
                    continue
                nxt = move.step(point)
                if not layout.is_free(nxt):
                    continue

                step_cost = 1 + self._cell_penalty(nxt, move, own)
                if move is not direction:
                    step_cost += TURN_PENALTY
                if nxt == end and move is not entry_dir:
                    step_cost += TURN_PENALTY

                next_cost = g_cost + step_cost
                next_state = (nxt, move)
                if next_cost >= best_cost.get(next_state, float("inf")):
                    continue

                best_cost[next_state] = next_cost
                came[next_state] = current_state
                heapq.heappush(
                    open_heap,
                    (next_cost + heuristic(nxt), next_cost, next(counter), nxt, move),
                )

        if goal_state is None:
            return None

        path: List[Point] = []
        state: Optional[State] = goal_state
        while state is not None:
            path.append(state[0])
            state = came.get(state)
        path.reverse()
        return path

    def _mark_path(self, path: Path) -> None:
        cells = path.cells
        last = len(cells) - 1
        for index, point in enumerate(cells):
            marks = self._marks.setdefault(point, set())
            if index == last:
                marks.add(_END)
                continue
            incoming = path.start_direction if index == 0 else Direction.between(cells[index - 1], point)
            outgoing = Direction.between(point, cells[index + 1])
            if incoming is not outgoing:
                marks.add(_CORNER)
            elif outgoing.is_horizontal:
                marks.add(_HORIZONTAL)
            else:
                marks.add(_VERTICAL)
