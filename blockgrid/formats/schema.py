from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence

from ..diagram_components.block import Block
from ..diagram_components.diagram import Diagram
from ..diagram_components.edge import Edge
from ..errors import SchemaError


def _optional_str(payload: Mapping[str, object], key: str, owner: str) -> Optional[str]:
    value = payload.get(key)
    if value is not None and not isinstance(value, str):
        raise SchemaError(f"{owner} '{key}' must be a string.")
    return value


def _required_int(payload: Mapping[str, object], key: str) -> int:
    if key not in payload:
        raise SchemaError(f"Block position must include '{key}'.")
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError(f"Block position '{key}' must be an integer, got {value!r}.")
    return value


def _entries(payload: Mapping[str, object], key: str, required: bool) -> Sequence[object]:
    value = payload.get(key)
    if value is None:
        if required:
            raise SchemaError(f"Diagram must include a '{key}' list.")
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise SchemaError(f"Diagram '{key}' must be a list.")
    return value


@dataclass
class BlockEntry:
    text: str
    column: int
    row: int
    block_id: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: object) -> "BlockEntry":
        if not isinstance(payload, Mapping):
            raise SchemaError("Each block must be an object.")
        text = payload.get("text")
        if not isinstance(text, str):
            raise SchemaError("Block must include a string 'text'.")
        position = payload.get("position")
        if not isinstance(position, Mapping):
            raise SchemaError(f"Block '{text}' must include a 'position' object.")
        return cls(
            text=text,
            column=_required_int(position, "column"),
            row=_required_int(position, "row"),
            block_id=_optional_str(payload, "id", "Block"),
        )

    def to_block(self) -> Block:
        return Block.create(self.text, self.column, self.row, id=self.block_id)


@dataclass
class EdgeEntry:
    source_id: str
    target_id: str
    label: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: object) -> "EdgeEntry":
        if not isinstance(payload, Mapping):
            raise SchemaError("Each edge must be an object.")
        source = payload.get("from")
        target = payload.get("to")
        if not isinstance(source, str) or not isinstance(target, str):
            raise SchemaError("Edge must include string 'from' and 'to'.")
        return cls(
            source_id=source,
            target_id=target,
            label=_optional_str(payload, "label", "Edge"),
        )

    def to_edge(self) -> Edge:
        return Edge(source=self.source_id, target=self.target_id, label=self.label)


@dataclass
class DiagramDocument:
    blocks: List[BlockEntry] = field(default_factory=list)
    edges: List[EdgeEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: object) -> "DiagramDocument":
        if not isinstance(payload, Mapping):
            raise SchemaError("Diagram document must be an object.")
        blocks = [BlockEntry.from_dict(entry) for entry in _entries(payload, "blocks", True)]
        edges = [EdgeEntry.from_dict(entry) for entry in _entries(payload, "edges", False)]
        return cls(blocks=blocks, edges=edges)

    def to_diagram(self) -> Diagram:
        return Diagram(
            blocks=[entry.to_block() for entry in self.blocks],
            edges=[entry.to_edge() for entry in self.edges],
        )
