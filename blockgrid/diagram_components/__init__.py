from .core import BoxChars, Direction, Rect, Side
from .block import Block
from .edge import Edge
from .config import RenderConfig
from .grid_layout import GridLayout, Layout, Placement
from .router import EdgeRouter, Path
from .canvas import Canvas
from .rasterizer import Rasterizer, glyph_table
from .renderer import RenderResult, render
from .diagram import Diagram
from .diff import diff, DiffResult

__all__ = [
    "BoxChars",
    "Direction",
    "Rect",
    "Side",
    "Block",
    "Edge",
    "RenderConfig",
    "GridLayout",
    "Layout",
    "Placement",
    "EdgeRouter",
    "Path",
    "Canvas",
    "Rasterizer",
    "glyph_table",
    "RenderResult",
    "render",
    "Diagram",
    "diff",
    "DiffResult",
]
