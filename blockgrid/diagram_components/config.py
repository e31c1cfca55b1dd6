from dataclasses import dataclass, fields, replace
from typing import Optional, Union

from ..errors import ConfigurationError
from .core import BoxChars


@dataclass(frozen=True)
class RenderConfig:
    hmargin: int = 5
    vmargin: int = 3
    padding: int = 0
    compact: bool = True
    empty_rank_size: int = 1
    ascii_only: bool = True
    box_style: Union[str, BoxChars] = "ascii"
    draw_labels: bool = True
    max_canvas_width: int = 4096
    max_canvas_height: int = 4096

    def __post_init__(self) -> None:
        for name in ("hmargin", "vmargin", "padding", "empty_rank_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer.")
            if value < 0:
                raise ConfigurationError(f"{name} must not be negative.")

        for name in ("max_canvas_width", "max_canvas_height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer.")
            if value < 1:
                raise ConfigurationError(f"{name} must be at least 1.")

        for name in ("compact", "ascii_only", "draw_labels"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be a boolean value.")

        if isinstance(self.box_style, str):
            try:
                BoxChars.for_style(self.box_style)
            except ValueError as exc:
                raise ConfigurationError(str(exc)) from exc
        elif not isinstance(self.box_style, BoxChars):
            raise ConfigurationError("box_style must be a string or BoxChars instance.")

    @property
    def chars(self) -> BoxChars:
        if isinstance(self.box_style, BoxChars):
            return self.box_style
        return BoxChars.for_style(self.box_style)

    @classmethod
    def resolve(cls, config: Optional["RenderConfig"] = None, **overrides: object) -> "RenderConfig":
        if config is not None and not isinstance(config, RenderConfig):
            raise ConfigurationError("config must be a RenderConfig instance.")
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(f"Unknown render option(s): {', '.join(unknown)}")
        base = config or cls()
        if not overrides:
            return base
        return replace(base, **overrides)
