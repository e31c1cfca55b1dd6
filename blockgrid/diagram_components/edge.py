from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    label: Optional[str] = None
