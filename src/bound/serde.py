"""Build bound trees from the binder's JSON dump.

The document shape is validated by the models in ``bound.schema``; this module
resolves type names and symbols and produces the frozen node classes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import orjson
from pydantic import ValidationError

from bound.nodes import (
    LITERAL_TYPES,
    BinaryOperation,
    BinaryOperatorNode,
    BoundNode,
    BoundTree,
    CompilationUnitNode,
    CompositeNode,
    ExpressionNode,
    ForeachLoopNode,
    ForLoopNode,
    FunctionNode,
    FunctionsListNode,
    MethodNode,
    NameExpressionNode,
    NodeKind,
    ParameterListNode,
    ParameterNode,
    PredefinedTypeNode,
    PropertyAccessNode,
    StatementsListNode,
    StaticVariablesListNode,
    VariableDeclarationNode,
)
from bound.ranges import TextRange
from bound.schema import (
    BinaryOperatorDump,
    BoundTreeDump,
    CompilationUnitDump,
    CompositeDump,
    ExpressionDump,
    ForeachLoopDump,
    ForLoopDump,
    FunctionDump,
    FunctionsListDump,
    LiteralDump,
    MethodDump,
    NameDump,
    ParameterDump,
    ParameterListDump,
    PredefinedTypeDump,
    PropertyAccessDump,
    StatementsListDump,
    StaticVariablesListDump,
    SymbolDump,
    TypeDump,
    VariableDeclarationDump,
)
from bound.symbols import (
    ExternalStaticConstant,
    Function,
    LocalVariable,
    Parameter,
    StaticVariable,
    Symbol,
)
from bound.types import (
    PREDEFINED_BY_NAME,
    ClassType,
    MethodInfo,
    MethodParameter,
    PropertyInfo,
    ScriptType,
    make_function_type,
)
from errors import TreeFormatError

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from pydantic import BaseModel

_SYMBOL_CLASSES: dict[str, type[Symbol]] = {
    "constant": ExternalStaticConstant,
    "static": StaticVariable,
    "local": LocalVariable,
}


def _range(dump: Any) -> TextRange:
    return TextRange(*dump.range)


class _TreeBuilder:
    """Converts one validated dump; holds the type table built from ``types``."""

    def __init__(self) -> None:
        self.types: dict[str, ScriptType] = dict(PREDEFINED_BY_NAME)
        self._handlers: dict[type[BaseModel], Callable[[Any], BoundNode]] = {
            LiteralDump: self._literal,
            CompositeDump: self._composite,
            ExpressionDump: self._expression,
            NameDump: self._name,
            PropertyAccessDump: self._property_access,
            MethodDump: self._method,
            BinaryOperatorDump: self._binary_operator,
            PredefinedTypeDump: self._predefined_type,
            VariableDeclarationDump: self._local_declaration,
            ParameterDump: self._parameter,
            ParameterListDump: self._parameter_list,
            StatementsListDump: self._statements,
            FunctionDump: self._function,
            ForLoopDump: self._for_loop,
            ForeachLoopDump: self._foreach_loop,
            StaticVariablesListDump: self._static_variables,
            FunctionsListDump: self._functions,
            CompilationUnitDump: self.unit,
        }

    # -- types -------------------------------------------------------------

    def type_ref(self, name: str) -> ScriptType:
        try:
            return self.types[name]
        except KeyError:
            msg = f"Unknown type reference {name!r}"
            raise TreeFormatError(msg) from None

    def optional_type(self, name: str | None) -> ScriptType | None:
        return None if name is None else self.type_ref(name)

    def declare_type(self, dump: TypeDump) -> None:
        self.types[dump.name] = ClassType(
            dump.name,
            properties=tuple(
                PropertyInfo(p.name, self.type_ref(p.type)) for p in dump.properties
            ),
            methods=tuple(
                MethodInfo(
                    name=m.name,
                    return_type=self.type_ref(m.return_type),
                    parameters=tuple(
                        MethodParameter(p.name, self.type_ref(p.type))
                        for p in m.parameters
                    ),
                )
                for m in dump.methods
            ),
            qualified_name=dump.qualified_name or dump.name,
        )

    # -- nodes -------------------------------------------------------------

    def node(self, dump: BaseModel) -> BoundNode:
        return self._handlers[type(dump)](dump)

    def optional_node(self, dump: BaseModel | None) -> BoundNode | None:
        return None if dump is None else self.node(dump)

    def expression(self, dump: BaseModel, role: str) -> ExpressionNode:
        node = self.node(dump)
        if not isinstance(node, ExpressionNode):
            msg = f"{role} must be an expression, got {node.kind.value}"
            raise TreeFormatError(msg)
        return node

    def symbol(self, dump: SymbolDump, default_type: ScriptType | None) -> Symbol:
        symbol_type = self.type_ref(dump.type) if dump.type else default_type
        if symbol_type is None:
            msg = f"Symbol '{dump.name}' has no type"
            raise TreeFormatError(msg)
        if dump.kind == "parameter":
            return Parameter(dump.name, symbol_type, by_ref=dump.by_ref)
        return _SYMBOL_CLASSES[dump.kind](dump.name, symbol_type)

    def _literal(self, dump: LiteralDump) -> ExpressionNode:
        kind = NodeKind(dump.kind)
        return ExpressionNode(kind=kind, range=_range(dump), type=LITERAL_TYPES[kind])

    def _composite(self, dump: CompositeDump) -> CompositeNode:
        return CompositeNode(
            kind=NodeKind(dump.kind),
            range=_range(dump),
            nodes=tuple(self.node(child) for child in dump.children),
        )

    def _expression(self, dump: ExpressionDump) -> ExpressionNode:
        return ExpressionNode(
            kind=NodeKind(dump.kind),
            range=_range(dump),
            nodes=tuple(self.node(child) for child in dump.children),
            type=self.optional_type(dump.type),
        )

    def _name(
        self,
        dump: NameDump,
        *,
        default_symbol: Callable[[str], Symbol] | None = None,
    ) -> NameExpressionNode:
        node_type = self.optional_type(dump.type)
        symbol: Symbol | None = None
        if dump.symbol is not None:
            symbol = self.symbol(dump.symbol, node_type)
        elif default_symbol is not None:
            symbol = default_symbol(dump.name)
        return NameExpressionNode(
            range=_range(dump),
            name=dump.name,
            symbol=symbol,
            type=node_type if node_type is not None else getattr(symbol, "type", None),
        )

    def _declaration(
        self, dump: VariableDeclarationDump, symbol_class: type[Symbol]
    ) -> VariableDeclarationNode:
        type_node = self.optional_node(dump.type_node)
        initializer = (
            None
            if dump.initializer is None
            else self.expression(dump.initializer, f"Initializer of '{dump.name.name}'")
        )
        declared = getattr(type_node, "type", None) or getattr(initializer, "type", None)

        def make_symbol(name: str) -> Symbol:
            if declared is None:
                msg = f"Cannot infer the type of variable '{name}'"
                raise TreeFormatError(msg)
            return symbol_class(name, declared)

        return VariableDeclarationNode(
            range=_range(dump),
            type_node=type_node,
            name=self._name(dump.name, default_symbol=make_symbol),
            initializer=initializer,
        )

    def _local_declaration(self, dump: VariableDeclarationDump) -> VariableDeclarationNode:
        return self._declaration(dump, LocalVariable)

    def unit(self, dump: CompilationUnitDump) -> CompilationUnitNode:
        return CompilationUnitNode(
            range=_range(dump),
            variables=self._static_variables(dump.variables),
            functions=self._functions(dump.functions),
            statements=self._statements(dump.statements),
        )

    def _static_variables(self, dump: StaticVariablesListDump) -> StaticVariablesListNode:
        return StaticVariablesListNode(
            range=_range(dump),
            variables=tuple(self._declaration(v, StaticVariable) for v in dump.variables),
        )

    def _functions(self, dump: FunctionsListDump) -> FunctionsListNode:
        return FunctionsListNode(
            range=_range(dump),
            functions=tuple(self._function(f) for f in dump.functions),
        )

    def _statements(self, dump: StatementsListDump) -> StatementsListNode:
        return StatementsListNode(
            range=_range(dump),
            statements=tuple(self.node(s) for s in dump.statements),
        )

    def _type_node(self, dump: BaseModel, role: str) -> BoundNode:
        node = self.node(dump)
        if getattr(node, "type", None) is None:
            msg = f"{role} must be a type node, got {node.kind.value}"
            raise TreeFormatError(msg)
        return node

    def _function(self, dump: FunctionDump) -> FunctionNode:
        return_type_node = self._type_node(dump.return_type, "Function return type")
        parameters = self._parameter_list(dump.parameters)
        signature = make_function_type(
            return_type_node.type,  # type: ignore[attr-defined]
            tuple(
                MethodParameter(p.name.name, p.name.symbol.type)
                for p in parameters.parameters
                if p.name.symbol is not None
            ),
        )
        return FunctionNode(
            range=_range(dump),
            return_type_node=return_type_node,
            name=self._name(dump.name, default_symbol=lambda n: Function(n, signature)),
            parameters=parameters,
            body=self._statements(dump.body),
        )

    def _parameter_list(self, dump: ParameterListDump) -> ParameterListNode:
        return ParameterListNode(
            range=_range(dump),
            parameters=tuple(self._parameter(p) for p in dump.parameters),
        )

    def _parameter(self, dump: ParameterDump) -> ParameterNode:
        type_node = self._type_node(dump.type_node, "Parameter type")
        declared = type_node.type  # type: ignore[attr-defined]
        return ParameterNode(
            range=_range(dump),
            type_node=type_node,
            name=self._name(
                dump.name,
                default_symbol=lambda n: Parameter(n, declared, by_ref=dump.by_ref),
            ),
        )

    def _for_loop(self, dump: ForLoopDump) -> ForLoopNode:
        return ForLoopNode(
            range=_range(dump),
            init=self.optional_node(dump.init),
            condition=(
                None
                if dump.condition is None
                else self.expression(dump.condition, "For-loop condition")
            ),
            update=self.optional_node(dump.update),
            body=self.node(dump.body),
        )

    def _foreach_loop(self, dump: ForeachLoopDump) -> ForeachLoopNode:
        type_node = self._type_node(dump.type_node, "Foreach variable type")
        declared = type_node.type  # type: ignore[attr-defined]
        return ForeachLoopNode(
            range=_range(dump),
            type_node=type_node,
            name=self._name(
                dump.name, default_symbol=lambda n: LocalVariable(n, declared)
            ),
            iterable=self.expression(dump.iterable, "Foreach iterable"),
            body=self.node(dump.body),
        )

    def _property_access(self, dump: PropertyAccessDump) -> PropertyAccessNode:
        callee = self.expression(dump.callee, "Property access callee")
        member = None
        if dump.member is not None and callee.type is not None:
            member = next(
                (p for p in callee.type.instance_properties() if p.name == dump.member),
                None,
            )
            if member is None:
                msg = f"Type {callee.type} has no property {dump.member!r}"
                raise TreeFormatError(msg)
        return PropertyAccessNode(
            range=_range(dump),
            callee=callee,
            name=dump.name,
            member=member,
            type=member.type if member is not None else self.optional_type(dump.type),
        )

    def _method(self, dump: MethodDump) -> MethodNode:
        owner = self.type_ref(dump.owner)
        method = next((m for m in owner.instance_methods() if m.name == dump.method), None)
        if method is None:
            msg = f"Type {owner} has no method {dump.method!r}"
            raise TreeFormatError(msg)
        return MethodNode(range=_range(dump), owner=owner, method=method)

    def _binary_operator(self, dump: BinaryOperatorDump) -> BinaryOperatorNode:
        left = self.expression(dump.left, "Binary operand")
        right = self.expression(dump.right, "Binary operand")
        if left.type is None or right.type is None:
            msg = "Binary operator operands must carry types"
            raise TreeFormatError(msg)
        result = self.type_ref(dump.type)
        return BinaryOperatorNode(
            range=_range(dump),
            left=left,
            right=right,
            operation=BinaryOperation(
                operator=dump.operator, left=left.type, right=right.type, result=result
            ),
            type=result,
        )

    def _predefined_type(self, dump: PredefinedTypeDump) -> PredefinedTypeNode:
        return PredefinedTypeNode(range=_range(dump), type=self.type_ref(dump.type))


def load_bound_tree(data: object) -> BoundTree:
    """Build a ``BoundTree`` from a decoded JSON dump.

    Raises:
        TreeFormatError: if the dump does not describe a well-formed tree.
    """
    try:
        dump = BoundTreeDump.model_validate(data)
    except ValidationError as exc:
        msg = f"Schema validation failed: {exc}"
        raise TreeFormatError(msg) from exc

    builder = _TreeBuilder()
    for type_dump in dump.types:
        builder.declare_type(type_dump)
    constants = tuple(
        ExternalStaticConstant(c.name, builder.type_ref(c.type)) for c in dump.constants
    )
    return BoundTree(unit=builder.unit(dump.unit), constants=constants)


def read_bound_tree(path: Path) -> BoundTree:
    """Read and decode a bound-tree dump from disk."""
    try:
        raw = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise TreeFormatError(msg) from exc
    return load_bound_tree(raw)


__all__ = ["load_bound_tree", "read_bound_tree"]
