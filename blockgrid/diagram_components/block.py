from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import MalformedDiagramError


def _require_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedDiagramError(f"Block {name} must be an integer, got {value!r}.")
    return value


@dataclass(frozen=True)
class Block:
    id: str
    text: str
    column: int
    row: int

    @classmethod
    def create(
        cls,
        text: str,
        column: int,
        row: int,
        *,
        id: Optional[str] = None,
    ) -> "Block":
        if not isinstance(text, str):
            raise MalformedDiagramError("Block text must be a string.")
        block_id = text if id is None else id
        if not isinstance(block_id, str) or not block_id:
            raise MalformedDiagramError(f"Block id must be a non-empty string, got {block_id!r}.")
        return cls(
            id=block_id,
            text=text,
            column=_require_int("column", column),
            row=_require_int("row", row),
        )

    @property
    def position(self) -> Tuple[int, int]:
        return (self.column, self.row)
