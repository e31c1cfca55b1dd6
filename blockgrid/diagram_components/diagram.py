import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..errors import MalformedDiagramError
from .block import Block
from .config import RenderConfig
from .edge import Edge
from .renderer import RenderResult, render

logger = logging.getLogger(__name__)

BlockRef = Union[Block, str]


class Diagram:

    def __init__(self, blocks: Iterable[Block] = (), edges: Iterable[Edge] = ()):
        self._blocks: Dict[str, Block] = {}
        self._edges: List[Edge] = []
        for block in blocks:
            self._register(block)
        for edge in edges:
            self._append_edge(edge)

    def _register(self, block: Block) -> Block:
        if not isinstance(block, Block):
            raise MalformedDiagramError("Diagram blocks must be Block instances.")
        if block.id in self._blocks:
            raise MalformedDiagramError(f"Duplicate block id '{block.id}'.")
        self._blocks[block.id] = block
        return block

    def _append_edge(self, edge: Edge) -> Edge:
        if not isinstance(edge, Edge):
            raise MalformedDiagramError("Diagram edges must be Edge instances.")
        for endpoint in (edge.source, edge.target):
            if endpoint not in self._blocks:
                raise MalformedDiagramError(
                    f"Edge '{edge.source}' -> '{edge.target}' references unknown block '{endpoint}'."
                )
        if edge.label is not None and not isinstance(edge.label, str):
            raise MalformedDiagramError("Edge label must be a string when provided.")
        self._edges.append(edge)
        return edge

    def _resolve_id(self, ref: BlockRef) -> str:
        if isinstance(ref, Block):
            if self._blocks.get(ref.id) is not ref:
                raise MalformedDiagramError(f"Block '{ref.id}' does not belong to this diagram.")
            return ref.id
        if isinstance(ref, str):
            return ref
        raise MalformedDiagramError("source and target must be Block instances or block ids.")

    def add(self, text: str, column: int, row: int, *, id: Optional[str] = None) -> Block:
        return self._register(Block.create(text, column, row, id=id))

    def connect(
        self,
        source: BlockRef,
        target: BlockRef,
        *,
        label: Optional[str] = None,
    ) -> Edge:
        edge = Edge(source=self._resolve_id(source), target=self._resolve_id(target), label=label)
        return self._append_edge(edge)

    def block(self, block_id: str) -> Block:
        try:
            return self._blocks[block_id]
        except KeyError:
            raise MalformedDiagramError(f"Unknown block id '{block_id}'.") from None

    @property
    def blocks(self) -> Tuple[Block, ...]:
        return tuple(self._blocks.values())

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return tuple(self._edges)

    def render_result(self, config: Optional[RenderConfig] = None, **options: object) -> RenderResult:
        return render(self, config, **options)

    def render(self, config: Optional[RenderConfig] = None, **options: object) -> str:
        result = render(self, config, **options)
        for warning in result.warnings:
            logger.warning("%s", warning)
        return result.text

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Diagram(blocks={len(self._blocks)}, edges={len(self._edges)})"
