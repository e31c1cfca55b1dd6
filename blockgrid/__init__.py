from .ascii_diagram import *
from .errors import *

__version__ = "0.1.0"
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
    "DiagramError",
    "ConfigurationError",
    "LayoutOverflowError",
    "MalformedDiagramError",
    "PlacementConflictError",
    "SchemaError",
    "RoutingWarning",
]
