"""Hover text for the node under the cursor.

Hover content is HTML: every fragment is a ``<span>`` coloured from the
configured theme, with its text escaped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bound.nodes import (
    LITERAL_TYPES,
    BinaryOperatorNode,
    MethodNode,
    NameExpressionNode,
    PredefinedTypeNode,
)
from bound.symbols import (
    ExternalStaticConstant,
    Function,
    LocalVariable,
    Parameter,
    StaticVariable,
)
from bound.types import ClassType, PredefinedType
from settings.config import ThemeConfig

if TYPE_CHECKING:
    from bound.nodes import BoundNode
    from bound.ranges import TextRange
    from bound.types import MethodParameter, ScriptType


def escape_html(text: str) -> str:
    """Replace markup characters and anything outside ASCII with entities."""
    return "".join(
        f"&#{ord(c)};" if ord(c) > 127 or c in "\"'<>&" else c for c in text
    )


@dataclass(frozen=True)
class HoverResponse:
    content: list[str]
    range: TextRange

    def to_dict(self) -> dict[str, object]:
        return {"content": self.content, "range": self.range.to_list()}


class HoverProvider:
    def __init__(self, theme: ThemeConfig | None = None) -> None:
        self.theme = theme or ThemeConfig()

    def get(self, node: BoundNode | None) -> HoverResponse | None:
        if node is None:
            return None

        if node.kind in LITERAL_TYPES:
            return self._predefined(LITERAL_TYPES[node.kind], node.range)
        if isinstance(node, PredefinedTypeNode):
            if isinstance(node.type, PredefinedType):
                return self._predefined(node.type, node.range)
            return None
        if isinstance(node, NameExpressionNode):
            line = self._name_line(node)
            return HoverResponse([line], node.range) if line is not None else None
        if isinstance(node, MethodNode):
            method = node.method
            line = (
                f"{self._type(method.return_type)} {self._type(node.owner)}"
                f"{self._description('.')}{self._span(self.theme.method, method.name)}"
                f"{self._parameters(method.parameters)}"
            )
            return HoverResponse([line], node.range)
        if isinstance(node, BinaryOperatorNode):
            op = node.operation
            line = (
                f"{self._type(op.result)} {self._description(op.operator)}"
                f"{self._description('(')}{self._type(op.left)} "
                f"{self._parameter('left')}{self._description(',')} "
                f"{self._type(op.right)} {self._parameter('right')}"
                f"{self._description(')')}"
            )
            return HoverResponse([line], node.range)
        return None

    def _name_line(self, node: NameExpressionNode) -> str | None:
        symbol = node.symbol
        if isinstance(symbol, Parameter):
            prefix = self._description("(parameter)")
            if symbol.by_ref:
                prefix += " " + self._predefined_type("ref")
            return f"{prefix} {self._type(symbol.type)} {self._description(symbol.name)}"
        if isinstance(symbol, LocalVariable):
            label = "(local variable)"
        elif isinstance(symbol, ExternalStaticConstant):
            label = "(external static constant)"
        elif isinstance(symbol, StaticVariable):
            label = "(static variable)"
        elif isinstance(symbol, Function):
            function_type = symbol.type
            return (
                f"{self._type(function_type.return_type)} "
                f"{self._span(self.theme.method, symbol.name)}"
                f"{self._parameters(function_type.parameters)}"
            )
        else:
            return None
        return (
            f"{self._description(label)} {self._type(symbol.type)} "
            f"{self._description(symbol.name)}"
        )

    def _predefined(self, script_type: PredefinedType, text_range: TextRange) -> HoverResponse:
        return HoverResponse(
            [
                self._predefined_type(script_type.name),
                self._description(script_type.description),
            ],
            text_range,
        )

    def _parameters(self, parameters: tuple[MethodParameter, ...]) -> str:
        rendered = self._description(", ").join(
            f"{self._type(p.type)} {self._parameter(p.name)}" for p in parameters
        )
        return f"{self._description('(')}{rendered}{self._description(')')}"

    def _type(self, script_type: ScriptType | None) -> str:
        if isinstance(script_type, PredefinedType):
            return self._predefined_type(script_type.name)
        if isinstance(script_type, ClassType):
            return self._span(self.theme.type, script_type.qualified_name or script_type.name)
        if script_type is None:
            return self._description("?")
        return self._span(self.theme.type, script_type.name)

    def _predefined_type(self, text: str) -> str:
        return self._span(self.theme.predefined_type, text)

    def _description(self, text: str) -> str:
        return self._span(self.theme.description, text)

    def _parameter(self, text: str) -> str:
        return self._span(self.theme.parameter, text)

    @staticmethod
    def _span(color: str, text: str) -> str:
        return f'<span style="color:#{color};">{escape_html(text)}</span>'


__all__ = ["HoverProvider", "HoverResponse", "escape_html"]
