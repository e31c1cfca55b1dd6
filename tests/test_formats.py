import json

import pytest

from blockgrid import MalformedDiagramError, SchemaError, render
from blockgrid.formats import from_dict, guess_format, load, loads, loads_json, loads_toml
from conftest import WORKED_EXAMPLE_JSON, WORKED_EXAMPLE_TOML


def test_json_and_toml_render_identically():
    from_json = loads_json(WORKED_EXAMPLE_JSON)
    from_toml = loads_toml(WORKED_EXAMPLE_TOML)

    assert from_json.blocks == from_toml.blocks
    assert from_json.edges == from_toml.edges
    assert render(from_json).text == render(from_toml).text


def test_decoded_model_matches_builder(worked_example):
    decoded = loads_json(WORKED_EXAMPLE_JSON)
    assert decoded.blocks == worked_example.blocks
    assert decoded.edges == worked_example.edges


def test_explicit_ids_and_labels():
    diagram = from_dict(
        {
            "blocks": [
                {"id": "db", "text": "Postgres", "position": {"column": 0, "row": 0}},
                {"id": "api", "text": "API", "position": {"column": -1, "row": 0}},
            ],
            "edges": [{"from": "api", "to": "db", "label": "sql"}],
        }
    )
    assert [block.id for block in diagram.blocks] == ["db", "api"]
    assert diagram.block("db").text == "Postgres"
    assert diagram.edges[0].label == "sql"


def test_edges_are_optional():
    diagram = from_dict({"blocks": [{"text": "alone", "position": {"column": 0, "row": 0}}]})
    assert diagram.edges == ()


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {},
        {"blocks": "nope"},
        {"blocks": [{"position": {"column": 0, "row": 0}}]},
        {"blocks": [{"text": "a"}]},
        {"blocks": [{"text": "a", "position": {"column": 0}}]},
        {"blocks": [{"text": "a", "position": {"column": "0", "row": 0}}]},
        {"blocks": [{"text": "a", "position": {"column": True, "row": 0}}]},
        {"blocks": [{"text": "a", "position": {"column": 0, "row": 0}, "id": 3}]},
        {"blocks": [], "edges": [{"from": "a"}]},
        {"blocks": [], "edges": ["a->b"]},
    ],
)
def test_schema_violations(payload):
    with pytest.raises(SchemaError):
        from_dict(payload)


def test_dangling_reference_is_malformed():
    payload = {
        "blocks": [{"text": "a", "position": {"column": 0, "row": 0}}],
        "edges": [{"from": "a", "to": "b"}],
    }
    with pytest.raises(MalformedDiagramError):
        loads_json(json.dumps(payload))


def test_duplicate_ids_are_malformed():
    payload = {
        "blocks": [
            {"text": "a", "position": {"column": 0, "row": 0}},
            {"text": "a", "position": {"column": 1, "row": 0}},
        ]
    }
    with pytest.raises(MalformedDiagramError):
        from_dict(payload)


def test_invalid_json_is_wrapped():
    with pytest.raises(SchemaError, match="not valid JSON") as excinfo:
        loads_json("{blocks: ")
    assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)


def test_invalid_toml_is_wrapped():
    with pytest.raises(SchemaError, match="not valid TOML"):
        loads_toml("[[blocks]\ntext = ")


def test_guess_format():
    assert guess_format("diagram.json") == "json"
    assert guess_format("DIAGRAM.TOML") == "toml"
    with pytest.raises(SchemaError):
        guess_format("diagram.yaml")


def test_loads_unknown_format():
    with pytest.raises(SchemaError, match="Unknown diagram format"):
        loads("{}", "xml")


def test_load_from_path(tmp_path):
    path = tmp_path / "example.toml"
    path.write_text(WORKED_EXAMPLE_TOML, encoding="utf-8")
    assert len(load(path).blocks) == 6

    other = tmp_path / "example.txt"
    other.write_text(WORKED_EXAMPLE_JSON, encoding="utf-8")
    assert len(load(other, fmt="json").edges) == 4
