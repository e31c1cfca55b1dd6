from .decoders import DECODERS, from_dict, guess_format, load, loads, loads_json, loads_toml
from .schema import BlockEntry, DiagramDocument, EdgeEntry

__all__ = [
    "DECODERS",
    "from_dict",
    "guess_format",
    "load",
    "loads",
    "loads_json",
    "loads_toml",
    "BlockEntry",
    "DiagramDocument",
    "EdgeEntry",
]
