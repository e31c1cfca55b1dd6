from typing import Callable, Tuple

import pytest

from blockgrid import Diagram, RenderResult

WORKED_EXAMPLE_JSON = """
{
  "blocks": [
    {"text": "zero", "position": {"column": -1, "row": -1}},
    {"text": "one", "position": {"column": 0, "row": -1}},
    {"text": "two", "position": {"column": 1, "row": -1}},
    {"text": "0000", "position": {"column": -1, "row": 0}},
    {"text": "four", "position": {"column": 1, "row": 0}},
    {"text": "oooo", "position": {"column": -1, "row": 1}}
  ],
  "edges": [
    {"from": "one", "to": "four"},
    {"from": "one", "to": "0000"},
    {"from": "two", "to": "zero"},
    {"from": "oooo", "to": "zero"}
  ]
}
"""

WORKED_EXAMPLE_TOML = """
[[blocks]]
text = "zero"
position = { column = -1, row = -1 }

[[blocks]]
text = "one"
position = { column = 0, row = -1 }

[[blocks]]
text = "two"
position = { column = 1, row = -1 }

[[blocks]]
text = "0000"
position = { column = -1, row = 0 }

[[blocks]]
text = "four"
position = { column = 1, row = 0 }

[[blocks]]
text = "oooo"
position = { column = -1, row = 1 }

[[edges]]
from = "one"
to = "four"

[[edges]]
from = "one"
to = "0000"

[[edges]]
from = "two"
to = "zero"

[[edges]]
from = "oooo"
to = "zero"
"""


@pytest.fixture
def worked_example() -> Diagram:
    diagram = Diagram()
    diagram.add("zero", -1, -1)
    diagram.add("one", 0, -1)
    diagram.add("two", 1, -1)
    diagram.add("0000", -1, 0)
    diagram.add("four", 1, 0)
    diagram.add("oooo", -1, 1)
    diagram.connect("one", "four")
    diagram.connect("one", "0000")
    diagram.connect("two", "zero")
    diagram.connect("oooo", "zero")
    return diagram


@pytest.fixture
def pair() -> Callable[..., Diagram]:
    """Two blocks ``a`` and ``b`` joined by one edge."""

    def build(
        source: Tuple[int, int] = (0, 0),
        target: Tuple[int, int] = (1, 0),
        label=None,
        reverse: bool = False,
    ) -> Diagram:
        diagram = Diagram()
        diagram.add("a", *source)
        diagram.add("b", *target)
        if reverse:
            diagram.connect("b", "a", label=label)
        else:
            diagram.connect("a", "b", label=label)
        return diagram

    return build


def glyph_at(result: RenderResult, point: Tuple[int, int]) -> str:
    """Character drawn at an absolute canvas cell, read back from the cropped text."""
    x, y = point
    origin_x, origin_y = result.origin
    lines = result.text.split("\n")
    row = y - origin_y
    column = x - origin_x
    if not 0 <= row < len(lines) or not 0 <= column < len(lines[row]):
        return " "
    return lines[row][column]
