from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, TYPE_CHECKING

from ..errors import MalformedDiagramError, RoutingWarning
from .block import Block
from .config import RenderConfig
from .edge import Edge
from .grid_layout import GridLayout, Layout
from .rasterizer import Rasterizer
from .router import EdgeRouter, Path

if TYPE_CHECKING:
    from .diagram import Diagram


@dataclass(frozen=True)
class RenderResult:
    text: str
    warnings: Tuple[RoutingWarning, ...] = ()
    paths: Tuple[Path, ...] = ()
    layout: Optional[Layout] = None
    origin: Tuple[int, int] = (0, 0)

    def __str__(self) -> str:
        return self.text


def _check_references(blocks: Sequence[Block], edges: Sequence[Edge]) -> None:
    known = set()
    for block in blocks:
        if block.id in known:
            raise MalformedDiagramError(f"Duplicate block id '{block.id}'.")
        known.add(block.id)
    for edge in edges:
        for endpoint in (edge.source, edge.target):
            if endpoint not in known:
                raise MalformedDiagramError(
                    f"Edge '{edge.source}' -> '{edge.target}' references unknown block '{endpoint}'."
                )


def render(diagram: "Diagram", config: Optional[RenderConfig] = None, **options: object) -> RenderResult:
    """Render a diagram to text.

    Pure function: the diagram is only read, and every intermediate structure
    (layout, routes, canvas) belongs to this call. Routing problems do not
    abort the render; they come back as ``RenderResult.warnings``.
    """
    config = RenderConfig.resolve(config, **options)
    blocks = tuple(diagram.blocks)
    edges = tuple(diagram.edges)
    _check_references(blocks, edges)

    layout = GridLayout(blocks, config, edges).apply()
    if not blocks:
        return RenderResult("", layout=layout)

    paths, warnings = EdgeRouter(layout, config).route(edges)
    canvas = Rasterizer(layout, config).draw(paths)
    return RenderResult(
        text=canvas.render(crop=True),
        warnings=tuple(warnings),
        paths=tuple(paths),
        layout=layout,
        origin=canvas.origin or (0, 0),
    )
