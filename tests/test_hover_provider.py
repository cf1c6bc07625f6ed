from __future__ import annotations

from bound.nodes import (
    BinaryOperation,
    BinaryOperatorNode,
    CompositeNode,
    ExpressionNode,
    MethodNode,
    NameExpressionNode,
    NodeKind,
    PredefinedTypeNode,
)
from bound.symbols import (
    ExternalStaticConstant,
    Function,
    LocalVariable,
    Parameter,
    StaticVariable,
)
from bound.types import (
    BOOLEAN,
    FLOAT,
    INT,
    STRING,
    ClassType,
    MethodInfo,
    MethodParameter,
    make_function_type,
)
from builders import rng
from hover.provider import HoverProvider, escape_html
from settings.config import ThemeConfig

KEYWORD = "569CD6"
TYPE = "4EC9B0"
METHOD = "DCDCAA"
PARAMETER = "9CDCFE"
TEXT = "D4D4D4"


def _span(color: str, text: str) -> str:
    return f'<span style="color:#{color};">{text}</span>'


def _name(symbol: object, name: str = "v") -> NameExpressionNode:
    return NameExpressionNode(range=rng(0, 0, 0, len(name)), name=name, symbol=symbol)


def test_literal_shows_its_predefined_type() -> None:
    literal = ExpressionNode(kind=NodeKind.FLOAT_LITERAL, range=rng(1, 4, 1, 8), type=FLOAT)

    response = HoverProvider().get(literal)

    assert response is not None
    assert response.content == [
        _span(KEYWORD, "float"),
        _span(TEXT, "Double-precision floating-point number"),
    ]
    assert response.range == rng(1, 4, 1, 8)


def test_predefined_type_keyword() -> None:
    node = PredefinedTypeNode(range=rng(0, 0, 0, 7), type=BOOLEAN)

    response = HoverProvider().get(node)

    assert response is not None
    assert response.content[0] == _span(KEYWORD, "boolean")


def test_external_type_reference_has_no_hover() -> None:
    node = PredefinedTypeNode(range=rng(0, 0, 0, 3), type=ClassType("Api"))

    assert HoverProvider().get(node) is None


def test_parameter_by_value_and_by_reference() -> None:
    provider = HoverProvider()

    by_value = provider.get(_name(Parameter("p", INT), "p"))
    by_ref = provider.get(_name(Parameter("p", INT, by_ref=True), "p"))

    assert by_value is not None
    assert by_value.content == [
        f"{_span(TEXT, '(parameter)')} {_span(KEYWORD, 'int')} {_span(TEXT, 'p')}"
    ]
    assert by_ref is not None
    assert by_ref.content == [
        f"{_span(TEXT, '(parameter)')} {_span(KEYWORD, 'ref')} "
        f"{_span(KEYWORD, 'int')} {_span(TEXT, 'p')}"
    ]


def test_variable_labels_by_symbol_kind() -> None:
    provider = HoverProvider()
    api = ClassType("Api", qualified_name="host.Api")

    lines = [
        provider.get(_name(symbol)).content[0]  # type: ignore[union-attr]
        for symbol in (
            LocalVariable("v", STRING),
            StaticVariable("v", INT),
            ExternalStaticConstant("v", api),
        )
    ]

    assert lines == [
        f"{_span(TEXT, '(local variable)')} {_span(KEYWORD, 'string')} {_span(TEXT, 'v')}",
        f"{_span(TEXT, '(static variable)')} {_span(KEYWORD, 'int')} {_span(TEXT, 'v')}",
        f"{_span(TEXT, '(external static constant)')} {_span(TYPE, 'host.Api')} "
        f"{_span(TEXT, 'v')}",
    ]


def test_function_signature() -> None:
    signature = make_function_type(
        INT, (MethodParameter("a", INT), MethodParameter("b", STRING))
    )

    response = HoverProvider().get(_name(Function("twice", signature), "twice"))

    assert response is not None
    assert response.content == [
        f"{_span(KEYWORD, 'int')} {_span(METHOD, 'twice')}"
        f"{_span(TEXT, '(')}{_span(KEYWORD, 'int')} {_span(PARAMETER, 'a')}"
        f"{_span(TEXT, ', ')}{_span(KEYWORD, 'string')} {_span(PARAMETER, 'b')}"
        f"{_span(TEXT, ')')}"
    ]


def test_method_signature_names_its_owner() -> None:
    api = ClassType("Api", qualified_name="host.Api")
    method = MethodInfo("length", INT)

    response = HoverProvider().get(
        MethodNode(range=rng(0, 4, 0, 10), owner=api, method=method)
    )

    assert response is not None
    assert response.content == [
        f"{_span(KEYWORD, 'int')} {_span(TYPE, 'host.Api')}{_span(TEXT, '.')}"
        f"{_span(METHOD, 'length')}{_span(TEXT, '(')}{_span(TEXT, ')')}"
    ]


def test_binary_operator_signature() -> None:
    left = ExpressionNode(kind=NodeKind.INTEGER_LITERAL, range=rng(0, 0, 0, 1), type=INT)
    right = ExpressionNode(kind=NodeKind.INTEGER_LITERAL, range=rng(0, 4, 0, 5), type=INT)
    node = BinaryOperatorNode(
        range=rng(0, 0, 0, 5),
        left=left,
        right=right,
        operation=BinaryOperation(operator="<", left=INT, right=INT, result=BOOLEAN),
        type=BOOLEAN,
    )

    response = HoverProvider().get(node)

    assert response is not None
    assert response.content == [
        f"{_span(KEYWORD, 'boolean')} {_span(TEXT, '&#60;')}{_span(TEXT, '(')}"
        f"{_span(KEYWORD, 'int')} {_span(PARAMETER, 'left')}{_span(TEXT, ',')} "
        f"{_span(KEYWORD, 'int')} {_span(PARAMETER, 'right')}{_span(TEXT, ')')}"
    ]


def test_theme_colours_are_applied() -> None:
    theme = ThemeConfig(predefined_type="#000000", description="ffffff")
    literal = ExpressionNode(kind=NodeKind.INTEGER_LITERAL, range=rng(0, 0, 0, 1), type=INT)

    response = HoverProvider(theme).get(literal)

    assert response is not None
    assert response.content == [
        _span("000000", "int"),
        _span("FFFFFF", "32-bit signed integer"),
    ]


def test_nodes_without_hover() -> None:
    provider = HoverProvider()
    statement = CompositeNode(kind=NodeKind.EXPRESSION_STATEMENT, range=rng(0, 0, 0, 1))

    assert provider.get(None) is None
    assert provider.get(statement) is None
    assert provider.get(_name(None)) is None


def test_escape_html() -> None:
    assert escape_html("a<b>&\"c'") == "a&#60;b&#62;&#38;&#34;c&#39;"
    assert escape_html("naïve") == "na&#239;ve"
    assert escape_html("plain text") == "plain text"


def test_response_serializes_range_as_list() -> None:
    literal = ExpressionNode(kind=NodeKind.STRING_LITERAL, range=rng(2, 1, 2, 6), type=STRING)

    response = HoverProvider().get(literal)

    assert response is not None
    assert response.to_dict()["range"] == [2, 1, 2, 6]
