import json
import tomllib
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from ..diagram_components.diagram import Diagram
from ..errors import SchemaError
from .schema import DiagramDocument


def from_dict(payload: object) -> Diagram:
    return DiagramDocument.from_dict(payload).to_diagram()


def loads_json(content: str) -> Diagram:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Diagram is not valid JSON: {exc}") from exc
    return from_dict(data)


def loads_toml(content: str) -> Diagram:
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        raise SchemaError(f"Diagram is not valid TOML: {exc}") from exc
    return from_dict(data)


DECODERS: Dict[str, Callable[[str], Diagram]] = {
    "json": loads_json,
    "toml": loads_toml,
}


def guess_format(path: Union[str, Path]) -> str:
    suffix = Path(path).suffix.lower().lstrip(".")
    if suffix not in DECODERS:
        raise SchemaError(f"Cannot infer diagram format from '{path}'; use one of: {', '.join(DECODERS)}.")
    return suffix


def loads(content: str, fmt: str) -> Diagram:
    try:
        decoder = DECODERS[fmt.lower()]
    except KeyError:
        raise SchemaError(f"Unknown diagram format '{fmt}'.") from None
    return decoder(content)


def load(path: Union[str, Path], fmt: Optional[str] = None) -> Diagram:
    fmt = fmt or guess_format(path)
    content = Path(path).read_text(encoding="utf-8")
    return loads(content, fmt)
