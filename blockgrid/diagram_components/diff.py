from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .block import Block
from .diagram import Diagram

Position = Tuple[int, int]


@dataclass
class DiffResult:
    added_blocks: List[str]
    removed_blocks: List[str]
    changed_blocks: List[Tuple[str, str, str]]
    moved_blocks: List[Tuple[str, Position, Position]]
    added_edges: List[Tuple[str, str]]
    removed_edges: List[Tuple[str, str]]

    def has_changes(self) -> bool:
        return any(
            [
                self.added_blocks,
                self.removed_blocks,
                self.changed_blocks,
                self.moved_blocks,
                self.added_edges,
                self.removed_edges,
            ]
        )


def _index_blocks(diagram: Diagram) -> Dict[str, Block]:
    return {block.id: block for block in diagram.blocks}


def diff(diagram_a: Diagram, diagram_b: Diagram) -> DiffResult:
    blocks_a = _index_blocks(diagram_a)
    blocks_b = _index_blocks(diagram_b)

    added_blocks = [block_id for block_id in blocks_b if block_id not in blocks_a]
    removed_blocks = [block_id for block_id in blocks_a if block_id not in blocks_b]
    changed_blocks: List[Tuple[str, str, str]] = []
    moved_blocks: List[Tuple[str, Position, Position]] = []

    for block_id, block_a in blocks_a.items():
        block_b = blocks_b.get(block_id)
        if block_b is None:
            continue
        if block_a.text != block_b.text:
            changed_blocks.append((block_id, block_a.text, block_b.text))
        if block_a.position != block_b.position:
            moved_blocks.append((block_id, block_a.position, block_b.position))

    edges_a = {(edge.source, edge.target) for edge in diagram_a.edges}
    edges_b = {(edge.source, edge.target) for edge in diagram_b.edges}

    return DiffResult(
        added_blocks=added_blocks,
        removed_blocks=removed_blocks,
        changed_blocks=changed_blocks,
        moved_blocks=moved_blocks,
        added_edges=sorted(edges_b - edges_a),
        removed_edges=sorted(edges_a - edges_b),
    )
