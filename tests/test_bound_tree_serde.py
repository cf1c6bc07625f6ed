from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson
import pytest
from pydantic import ValidationError

from bound.nodes import (
    LITERAL_TYPES,
    FunctionNode,
    MethodNode,
    NameExpressionNode,
    NodeKind,
    PropertyAccessNode,
)
from bound.serde import load_bound_tree, read_bound_tree
from bound.symbols import ExternalStaticConstant, Function, Parameter, StaticVariable
from bound.types import INT, ClassType
from bound.validation import validate_tree
from completion.provider import CompletionProvider
from errors import TreeFormatError

FIXTURE = Path(__file__).parent / "fixtures" / "trees" / "sample.json"


def _raw() -> dict[str, Any]:
    return orjson.loads(FIXTURE.read_bytes())


def test_fixture_decodes_into_a_valid_tree() -> None:
    tree = read_bound_tree(FIXTURE)

    validate_tree(tree.unit)
    assert tree.unit.kind is NodeKind.COMPILATION_UNIT
    assert [c.kind for c in tree.unit.children()] == [
        NodeKind.STATIC_VARIABLES_LIST,
        NodeKind.FUNCTIONS_LIST,
        NodeKind.STATEMENTS_LIST,
    ]
    assert [c.name for c in tree.constants] == ["api"]
    assert isinstance(tree.constants[0], ExternalStaticConstant)


def test_declared_types_are_resolved_by_name() -> None:
    tree = read_bound_tree(FIXTURE)
    api_type = tree.constants[0].type

    assert isinstance(api_type, ClassType)
    assert api_type.qualified_name == "host.Api"
    assert [p.name for p in api_type.instance_properties()] == ["size"]
    assert [m.signature() for m in api_type.instance_methods()] == [
        "int length()",
        "int indexOf(string value)",
    ]


def test_symbols_default_from_their_declaration_site() -> None:
    tree = read_bound_tree(FIXTURE)

    static = tree.unit.variables.variables[0]
    assert isinstance(static.symbol, StaticVariable)
    assert static.symbol.type is INT

    function = tree.unit.functions.functions[0]
    assert isinstance(function, FunctionNode)
    assert isinstance(function.symbol, Function)
    assert str(function.symbol.type) == "fn<int(int)>"

    parameter = function.parameters.parameters[0]
    assert isinstance(parameter.name.symbol, Parameter)
    assert parameter.name.symbol.by_ref is False


def test_members_are_looked_up_on_the_callee_type() -> None:
    tree = read_bound_tree(FIXTURE)
    resolved, partial, call = tree.unit.statements.statements

    access = resolved.children()[0]
    assert isinstance(access, PropertyAccessNode)
    assert access.member is not None
    assert access.type is INT

    incomplete = partial.children()[0]
    assert isinstance(incomplete, PropertyAccessNode)
    assert incomplete.member is None

    callee, method, arguments = call.children()[0].children()
    assert isinstance(callee, NameExpressionNode)
    assert isinstance(method, MethodNode)
    assert method.method.name == "length"
    assert arguments.kind is NodeKind.ARGUMENTS_LIST


def test_loaded_tree_answers_completion_queries() -> None:
    tree = read_bound_tree(FIXTURE)
    provider = CompletionProvider()

    in_body = [s.label for s in provider.get(tree, 2, 2)]
    after_dot = [s.label for s in provider.get(tree, 5, 7)]

    assert in_body == ["api", "count", "twice", "n", "for", "foreach", "if", "return", "while"]
    assert after_dot == ["length"]


def test_unknown_node_kind_rejected() -> None:
    raw = _raw()
    raw["unit"]["statements"]["statements"][0]["kind"] = "goto_statement"

    with pytest.raises(TreeFormatError, match="goto_statement"):
        load_bound_tree(raw)


def test_missing_required_field_rejected() -> None:
    raw = _raw()
    del raw["unit"]["functions"]["functions"][0]["body"]

    with pytest.raises(TreeFormatError, match=r"functions\.0\.body\s+Field required"):
        load_bound_tree(raw)


@pytest.mark.parametrize("bad_range", [[0, 0, 1], "0,0,1,1", [0, "a", 1, 1], [2, 0, 1, 0]])
def test_bad_range_rejected(bad_range: object) -> None:
    raw = _raw()
    raw["unit"]["range"] = bad_range

    with pytest.raises(TreeFormatError):
        load_bound_tree(raw)


def test_unknown_type_reference_rejected() -> None:
    raw = _raw()
    raw["constants"][0]["type"] = "Missing"

    with pytest.raises(TreeFormatError, match="Missing"):
        load_bound_tree(raw)


def test_unknown_method_rejected() -> None:
    raw = _raw()
    call = raw["unit"]["statements"]["statements"][2]["children"][0]
    call["children"][1]["method"] = "reverse"

    with pytest.raises(TreeFormatError, match="reverse"):
        load_bound_tree(raw)


def test_non_object_document_rejected() -> None:
    with pytest.raises(TreeFormatError):
        load_bound_tree([])  # type: ignore[arg-type]


def test_invalid_json_file_rejected(tmp_path: Path) -> None:
    path = tmp_path / "tree.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(TreeFormatError, match="Invalid JSON"):
        read_bound_tree(path)


def test_node_of_the_wrong_kind_in_a_typed_slot_rejected() -> None:
    raw = _raw()
    raw["unit"]["functions"]["functions"][0]["body"]["kind"] = "if_statement"

    with pytest.raises(TreeFormatError, match="body.kind") as excinfo:
        load_bound_tree(raw)
    assert isinstance(excinfo.value.__cause__, ValidationError)


def test_literals_take_their_type_from_their_kind() -> None:
    tree = read_bound_tree(FIXTURE)
    initializer = tree.unit.variables.variables[0].initializer

    assert initializer is not None
    assert initializer.kind is NodeKind.INTEGER_LITERAL
    assert initializer.type is LITERAL_TYPES[NodeKind.INTEGER_LITERAL] is INT
