"""Tests for YAML expression documents."""

import pytest

from qwexpr.config import RenderConfig
from qwexpr.document import (
    ExpressionNode,
    build_expression,
    load_document,
    parse_document,
)
from qwexpr.exceptions import DocumentError


SELECT = """type: select
items:
  - SELECT
  - items: [id, name]
    wrap_item: "`"
    join: ", "
  - FROM
  - "{table}"
context:
  table: users
"""


INSERT = """type: insert
items:
  - INSERT INTO users
  - {items: [id, name], join: ", ", wrap: ["(", ")"]}
  - VALUES
  - {items: [1, "'John'"], join: ", ", wrap: ["(", ")"]}
"""


def test_parse_nested_nodes():
    node = parse_document(SELECT)

    assert node.type == "select"
    assert node.items[0] == "SELECT"
    assert isinstance(node.items[1], ExpressionNode)
    assert node.items[1].items == ["id", "name"]
    assert node.context == {"table": "users"}


def test_build_select():
    expression = build_expression(parse_document(SELECT))
    assert str(expression) == "SELECT `id`, `name` FROM users"
    assert expression.get_debug_string() == "{SELECT:SELECT `id`, `name` FROM users}"


def test_build_insert():
    expression = build_expression(parse_document(INSERT))
    assert str(expression) == "INSERT INTO users (id, name) VALUES (1, 'John')"


def test_decoration_keys_apply_in_pipeline_order():
    doc = """wrap: ["[", "]"]
join: "|"
wrap_item: "'"
items: [a, b]
"""
    assert str(build_expression(parse_document(doc))) == "['a'|'b']"


def test_null_and_empty_items_are_skipped():
    doc = """items: [a, ~, "", {items: []}, b]"""
    expression = build_expression(parse_document(doc))
    assert expression.get_items() == ["a", "b"]


def test_config_passed_to_every_node():
    doc = """items: [a, {items: [b, c]}]"""
    expression = build_expression(parse_document(doc), RenderConfig(separator="/"))
    assert str(expression) == "a/b/c"


def test_unknown_keys_rejected():
    with pytest.raises(DocumentError):
        parse_document("items: [a]\nseparator: ','\n")


def test_wrap_with_too_many_delimiters_rejected():
    with pytest.raises(DocumentError):
        parse_document('items: [a]\nwrap: ["(", ")", "!"]\n')


def test_malformed_yaml_rejected():
    with pytest.raises(DocumentError):
        parse_document("items: [a, b\n")


def test_non_string_input_rejected():
    with pytest.raises(TypeError):
        parse_document(None)


def test_load_document(tmp_path):
    path = tmp_path / "query.yaml"
    path.write_text(SELECT)
    assert str(build_expression(load_document(path))) == (
        "SELECT `id`, `name` FROM users"
    )


def test_load_missing_document(tmp_path):
    with pytest.raises(DocumentError):
        load_document(tmp_path / "missing.yaml")
