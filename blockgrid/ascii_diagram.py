from .diagram_components import (
    Block,
    BoxChars,
    Canvas,
    Diagram,
    Edge,
    RenderConfig,
    RenderResult,
    Side,
    render,
)
from .formats import load, loads_json, loads_toml

__all__ = [
    "Diagram",
    "Block",
    "Edge",
    "Side",
    "BoxChars",
    "Canvas",
    "RenderConfig",
    "RenderResult",
    "render",
    "load",
    "loads_json",
    "loads_toml",
]
