from typing import Optional, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .diagram_components.edge import Edge


class DiagramError(Exception):
    pass


class ConfigurationError(DiagramError):
    pass


class LayoutOverflowError(DiagramError):
    pass


class MalformedDiagramError(DiagramError):
    pass


class SchemaError(DiagramError):
    pass


class PlacementConflictError(DiagramError):
    def __init__(self, position: Tuple[int, int], block_ids: Sequence[str]) -> None:
        self.position = position
        self.block_ids = tuple(block_ids)
        column, row = position
        names = " and ".join(f"'{block_id}'" for block_id in self.block_ids)
        super().__init__(f"Blocks {names} both occupy column {column}, row {row}.")


class RoutingWarning(UserWarning):
    def __init__(self, edge: "Edge", reason: str, *, anchor: Optional[Tuple[int, int]] = None) -> None:
        self.edge = edge
        self.reason = reason
        self.anchor = anchor
        super().__init__(f"Edge '{edge.source}' -> '{edge.target}': {reason}")


__all__ = [
    "DiagramError",
    "ConfigurationError",
    "LayoutOverflowError",
    "MalformedDiagramError",
    "SchemaError",
    "PlacementConflictError",
    "RoutingWarning",
]
