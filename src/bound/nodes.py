"""Bound syntax tree nodes.

The binder produces one immutable tree per compilation. Every node reports a
kind from the closed ``NodeKind`` enumeration, a text range and its children
in source order; children never overlap and never leave the parent range.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from bound.types import BOOLEAN, CHAR, FLOAT, INT, STRING

if TYPE_CHECKING:
    from bound.ranges import TextRange
    from bound.symbols import Symbol
    from bound.types import MethodInfo, PredefinedType, PropertyInfo, ScriptType


class NodeKind(str, Enum):
    """Every kind of node the binder can produce."""

    COMPILATION_UNIT = "compilation_unit"
    STATIC_VARIABLES_LIST = "static_variables_list"
    FUNCTIONS_LIST = "functions_list"
    STATEMENTS_LIST = "statements_list"
    FUNCTION = "function"
    PARAMETER_LIST = "parameter_list"
    PARAMETER = "parameter"
    VARIABLE_DECLARATION = "variable_declaration"
    EXPRESSION_STATEMENT = "expression_statement"
    ASSIGNMENT_STATEMENT = "assignment_statement"
    IF_STATEMENT = "if_statement"
    WHILE_LOOP = "while_loop"
    FOR_LOOP = "for_loop"
    FOREACH_LOOP = "foreach_loop"
    RETURN_STATEMENT = "return_statement"
    NAME_EXPRESSION = "name_expression"
    PROPERTY_ACCESS_EXPRESSION = "property_access_expression"
    METHOD_CALL = "method_call"
    METHOD = "method"
    ARGUMENTS_LIST = "arguments_list"
    BINARY_OPERATOR = "binary_operator"
    UNARY_OPERATOR = "unary_operator"
    PREDEFINED_TYPE = "predefined_type"
    BOOLEAN_LITERAL = "boolean_literal"
    INTEGER_LITERAL = "integer_literal"
    CHAR_LITERAL = "char_literal"
    FLOAT_LITERAL = "float_literal"
    STRING_LITERAL = "string_literal"


# A literal's type is fixed by its kind.
LITERAL_TYPES: dict[NodeKind, PredefinedType] = {
    NodeKind.BOOLEAN_LITERAL: BOOLEAN,
    NodeKind.INTEGER_LITERAL: INT,
    NodeKind.CHAR_LITERAL: CHAR,
    NodeKind.FLOAT_LITERAL: FLOAT,
    NodeKind.STRING_LITERAL: STRING,
}


def _present(*nodes: BoundNode | None) -> tuple[BoundNode, ...]:
    return tuple(node for node in nodes if node is not None)


@dataclass(frozen=True, kw_only=True, eq=False)
class BoundNode:
    kind: NodeKind
    range: TextRange

    def children(self) -> tuple[BoundNode, ...]:
        return ()


@dataclass(frozen=True, kw_only=True, eq=False)
class CompositeNode(BoundNode):
    """A node whose only payload is its children (statements, argument lists)."""

    nodes: tuple[BoundNode, ...] = ()

    def children(self) -> tuple[BoundNode, ...]:
        return self.nodes


@dataclass(frozen=True, kw_only=True, eq=False)
class ExpressionNode(CompositeNode):
    type: ScriptType | None = None


@dataclass(frozen=True, kw_only=True, eq=False)
class NameExpressionNode(ExpressionNode):
    kind: NodeKind = field(default=NodeKind.NAME_EXPRESSION, init=False)
    name: str
    symbol: Symbol | None = None


@dataclass(frozen=True, kw_only=True, eq=False)
class PropertyAccessNode(ExpressionNode):
    """``callee.name``; ``member`` is None when the name did not resolve."""

    kind: NodeKind = field(default=NodeKind.PROPERTY_ACCESS_EXPRESSION, init=False)
    callee: ExpressionNode
    name: str
    member: PropertyInfo | None = None

    def children(self) -> tuple[BoundNode, ...]:
        return (self.callee,)


@dataclass(frozen=True, kw_only=True, eq=False)
class MethodNode(BoundNode):
    """The method name inside a method call, resolved to its owner type."""

    kind: NodeKind = field(default=NodeKind.METHOD, init=False)
    owner: ScriptType
    method: MethodInfo


@dataclass(frozen=True)
class BinaryOperation:
    operator: str
    left: ScriptType
    right: ScriptType
    result: ScriptType


@dataclass(frozen=True, kw_only=True, eq=False)
class BinaryOperatorNode(ExpressionNode):
    kind: NodeKind = field(default=NodeKind.BINARY_OPERATOR, init=False)
    left: ExpressionNode
    right: ExpressionNode
    operation: BinaryOperation

    def children(self) -> tuple[BoundNode, ...]:
        return (self.left, self.right)


@dataclass(frozen=True, kw_only=True, eq=False)
class PredefinedTypeNode(BoundNode):
    kind: NodeKind = field(default=NodeKind.PREDEFINED_TYPE, init=False)
    type: ScriptType


@dataclass(frozen=True, kw_only=True, eq=False)
class VariableDeclarationNode(BoundNode):
    kind: NodeKind = field(default=NodeKind.VARIABLE_DECLARATION, init=False)
    type_node: BoundNode | None
    name: NameExpressionNode
    initializer: ExpressionNode | None = None

    @property
    def symbol(self) -> Symbol | None:
        return self.name.symbol

    def children(self) -> tuple[BoundNode, ...]:
        return _present(self.type_node, self.name, self.initializer)


@dataclass(frozen=True, kw_only=True, eq=False)
class ParameterNode(BoundNode):
    kind: NodeKind = field(default=NodeKind.PARAMETER, init=False)
    type_node: BoundNode
    name: NameExpressionNode

    def children(self) -> tuple[BoundNode, ...]:
        return (self.type_node, self.name)


@dataclass(frozen=True, kw_only=True, eq=False)
class ParameterListNode(BoundNode):
    kind: NodeKind = field(default=NodeKind.PARAMETER_LIST, init=False)
    parameters: tuple[ParameterNode, ...] = ()

    def children(self) -> tuple[BoundNode, ...]:
        return self.parameters


@dataclass(frozen=True, kw_only=True, eq=False)
class StatementsListNode(BoundNode):
    """A statement sequence: the top-level section or any ``{ }`` block."""

    kind: NodeKind = field(default=NodeKind.STATEMENTS_LIST, init=False)
    statements: tuple[BoundNode, ...] = ()

    def children(self) -> tuple[BoundNode, ...]:
        return self.statements


@dataclass(frozen=True, kw_only=True, eq=False)
class FunctionNode(BoundNode):
    kind: NodeKind = field(default=NodeKind.FUNCTION, init=False)
    return_type_node: BoundNode
    name: NameExpressionNode
    parameters: ParameterListNode
    body: StatementsListNode

    @property
    def symbol(self) -> Symbol | None:
        return self.name.symbol

    def children(self) -> tuple[BoundNode, ...]:
        return (self.return_type_node, self.name, self.parameters, self.body)


@dataclass(frozen=True, kw_only=True, eq=False)
class ForLoopNode(BoundNode):
    kind: NodeKind = field(default=NodeKind.FOR_LOOP, init=False)
    init: BoundNode | None = None
    condition: ExpressionNode | None = None
    update: BoundNode | None = None
    body: BoundNode

    def children(self) -> tuple[BoundNode, ...]:
        return _present(self.init, self.condition, self.update, self.body)


@dataclass(frozen=True, kw_only=True, eq=False)
class ForeachLoopNode(BoundNode):
    kind: NodeKind = field(default=NodeKind.FOREACH_LOOP, init=False)
    type_node: BoundNode
    name: NameExpressionNode
    iterable: ExpressionNode
    body: BoundNode

    def children(self) -> tuple[BoundNode, ...]:
        return (self.type_node, self.name, self.iterable, self.body)


@dataclass(frozen=True, kw_only=True, eq=False)
class StaticVariablesListNode(BoundNode):
    kind: NodeKind = field(default=NodeKind.STATIC_VARIABLES_LIST, init=False)
    variables: tuple[VariableDeclarationNode, ...] = ()

    def children(self) -> tuple[BoundNode, ...]:
        return self.variables


@dataclass(frozen=True, kw_only=True, eq=False)
class FunctionsListNode(BoundNode):
    kind: NodeKind = field(default=NodeKind.FUNCTIONS_LIST, init=False)
    functions: tuple[FunctionNode, ...] = ()

    def children(self) -> tuple[BoundNode, ...]:
        return self.functions


@dataclass(frozen=True, kw_only=True, eq=False)
class CompilationUnitNode(BoundNode):
    """Root of a bound file: static variables, then functions, then statements.

    Only non-empty sections are reported as children so that an empty
    section never claims a position.
    """

    kind: NodeKind = field(default=NodeKind.COMPILATION_UNIT, init=False)
    variables: StaticVariablesListNode
    functions: FunctionsListNode
    statements: StatementsListNode

    @property
    def is_empty(self) -> bool:
        return not self.children()

    def children(self) -> tuple[BoundNode, ...]:
        sections: tuple[BoundNode, ...] = (
            self.variables,
            self.functions,
            self.statements,
        )
        return tuple(section for section in sections if section.children())


@dataclass(frozen=True)
class BoundTree:
    """Binder output consumed by the editor providers."""

    unit: CompilationUnitNode
    constants: tuple[Symbol, ...] = ()


__all__ = [
    "LITERAL_TYPES",
    "BinaryOperation",
    "BinaryOperatorNode",
    "BoundNode",
    "BoundTree",
    "CompilationUnitNode",
    "CompositeNode",
    "ExpressionNode",
    "ForLoopNode",
    "ForeachLoopNode",
    "FunctionNode",
    "FunctionsListNode",
    "MethodNode",
    "NameExpressionNode",
    "NodeKind",
    "ParameterListNode",
    "ParameterNode",
    "PredefinedTypeNode",
    "PropertyAccessNode",
    "StatementsListNode",
    "StaticVariablesListNode",
    "VariableDeclarationNode",
]
