import logging

import pytest

from blockgrid import Block, Diagram, Edge, MalformedDiagramError


def test_block_id_defaults_to_text():
    block = Block.create("api", 2, -1)
    assert block.id == "api"
    assert block.position == (2, -1)


def test_block_explicit_id_is_kept():
    block = Block.create("API gateway", 0, 0, id="gw")
    assert block.id == "gw"
    assert block.text == "API gateway"


@pytest.mark.parametrize("column", [1.5, "1", True, None])
def test_block_rejects_non_integer_column(column):
    with pytest.raises(MalformedDiagramError):
        Block.create("a", column, 0)


def test_block_rejects_empty_id():
    with pytest.raises(MalformedDiagramError):
        Block.create("", 0, 0)


def test_block_is_frozen():
    block = Block.create("a", 0, 0)
    with pytest.raises(AttributeError):
        block.column = 3


def test_diagram_builder_keeps_order():
    diagram = Diagram()
    first = diagram.add("first", 1, 0)
    second = diagram.add("second", 0, 0)
    edge = diagram.connect(first, "second", label="next")

    assert [block.id for block in diagram.blocks] == ["first", "second"]
    assert diagram.edges == (Edge("first", "second", "next"),)
    assert edge.label == "next"
    assert diagram.block("second") is second
    assert repr(diagram) == "Diagram(blocks=2, edges=1)"


def test_diagram_rejects_duplicate_ids():
    diagram = Diagram()
    diagram.add("a", 0, 0)
    with pytest.raises(MalformedDiagramError, match="Duplicate block id 'a'"):
        diagram.add("a", 1, 0)


def test_connect_unknown_block_fails():
    diagram = Diagram()
    diagram.add("a", 0, 0)
    with pytest.raises(MalformedDiagramError, match="unknown block 'ghost'"):
        diagram.connect("a", "ghost")
    assert diagram.edges == ()


def test_connect_rejects_block_from_other_diagram():
    other = Diagram()
    foreign = other.add("a", 0, 0)
    diagram = Diagram()
    diagram.add("a", 5, 5)
    with pytest.raises(MalformedDiagramError):
        diagram.connect(foreign, "a")


def test_constructor_validates_edges():
    blocks = [Block.create("a", 0, 0)]
    with pytest.raises(MalformedDiagramError):
        Diagram(blocks, [Edge("a", "b")])


def test_lookup_of_missing_block():
    with pytest.raises(MalformedDiagramError, match="Unknown block id"):
        Diagram().block("nope")


def test_render_logs_routing_warnings(pair, caplog):
    diagram = pair()
    with caplog.at_level(logging.WARNING):
        text = diagram.render(hmargin=0)
    assert text == "+-++-+\n|a||b|\n+-++-+"
    assert any("Edge 'a' -> 'b'" in record.getMessage() for record in caplog.records)


def test_str_renders_diagram():
    diagram = Diagram()
    diagram.add("solo", 0, 0)
    assert str(diagram) == "+----+\n|solo|\n+----+"
