"""Collect the symbols visible at a completion cursor.

Visibility follows declaration order: static variables and functions are
file-wide once their section has started, locals only after their
declaration statement and only inside the enclosing block chain, parameters
throughout their function body.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bound.nodes import (
    ForeachLoopNode,
    ForLoopNode,
    FunctionNode,
    NodeKind,
    VariableDeclarationNode,
)
from completion.context import ContextRule, ContextType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bound.nodes import BoundNode, BoundTree, CompilationUnitNode
    from bound.symbols import Symbol
    from completion.context import CompletionContext
    from completion.resolver import ResolutionEntry


def _declared(nodes: Iterable[BoundNode]) -> list[Symbol]:
    symbols: list[Symbol] = []
    for node in nodes:
        if isinstance(node, VariableDeclarationNode) and node.symbol is not None:
            symbols.append(node.symbol)
    return symbols


def static_variables(unit: CompilationUnitNode) -> list[Symbol]:
    return _declared(unit.variables.variables)


def functions(unit: CompilationUnitNode) -> list[Symbol]:
    return [f.symbol for f in unit.functions.functions if f.symbol is not None]


def statements_prior_to(
    statements: Iterable[BoundNode], line: int, column: int
) -> list[BoundNode]:
    """Return the statements that end strictly before the cursor."""
    return [node for node in statements if node.range.is_before(line, column)]


def _scope_locals(node: BoundNode, line: int, column: int) -> list[Symbol]:
    """Locals a single enclosing node contributes at the cursor."""
    if node.kind is NodeKind.STATEMENTS_LIST:
        return _declared(statements_prior_to(node.children(), line, column))

    if isinstance(node, FunctionNode):
        if not node.body.range.contains(line, column):
            return []
        return [
            p.name.symbol
            for p in node.parameters.parameters
            if p.name.symbol is not None
        ]

    if isinstance(node, ForLoopNode):
        if node.init is not None and node.init.range.is_before(line, column):
            return _declared([node.init])
        return []

    if isinstance(node, ForeachLoopNode):
        if node.body.range.contains(line, column) and node.name.symbol is not None:
            return [node.name.symbol]
        return []

    return []


def local_variables(origin: ResolutionEntry, line: int, column: int) -> list[Symbol]:
    """Walk from the innermost node outward collecting visible locals.

    The result lists outer scopes first, each in declaration order.
    """
    scopes = [_scope_locals(entry.node, line, column) for entry in origin.chain()]
    symbols: list[Symbol] = []
    for scope in reversed(scopes):
        symbols.extend(scope)
    return symbols


def _nearest_statements_list(
    origin: ResolutionEntry | None,
) -> ResolutionEntry | None:
    if origin is None:
        return None
    return next(
        (e for e in origin.chain() if e.node.kind is NodeKind.STATEMENTS_LIST),
        None,
    )


def collect_symbols(
    tree: BoundTree, context: CompletionContext, line: int, column: int
) -> list[Symbol]:
    """Return constants, statics, functions and locals visible at the cursor."""
    unit = tree.unit
    symbols: list[Symbol] = list(tree.constants)

    if context.type is ContextType.AFTER_LAST:
        symbols.extend(static_variables(unit))
        symbols.extend(functions(unit))
        symbols.extend(_declared(unit.statements.statements))
        return symbols

    if context.type is not ContextType.WITHIN:
        return symbols

    if context.rule is ContextRule.UNIT:
        prev_kind = context.prev.kind if context.prev is not None else None
        if prev_kind is NodeKind.STATIC_VARIABLES_LIST:
            symbols.extend(static_variables(unit))
        elif prev_kind in (NodeKind.FUNCTIONS_LIST, NodeKind.STATEMENTS_LIST):
            symbols.extend(static_variables(unit))
            symbols.extend(functions(unit))
            if prev_kind is NodeKind.STATEMENTS_LIST:
                symbols.extend(_declared(unit.statements.statements))
        return symbols

    if context.rule is ContextRule.STATIC_SECTION:
        # Only statics declared above the cursor, never the one being written.
        symbols.extend(
            _declared(statements_prior_to(unit.variables.variables, line, column))
        )
        return symbols

    if context.rule is ContextRule.FUNCTION_SECTION:
        symbols.extend(static_variables(unit))
        symbols.extend(functions(unit))
        return symbols

    origin = context.origin or context.entry
    if context.rule is not ContextRule.STATEMENTS:
        # Defer to the nearest enclosing block, if any.
        if _nearest_statements_list(origin) is None:
            return symbols

    symbols.extend(static_variables(unit))
    symbols.extend(functions(unit))
    if origin is not None:
        symbols.extend(local_variables(origin, line, column))
    return symbols


__all__ = [
    "collect_symbols",
    "functions",
    "local_variables",
    "statements_prior_to",
    "static_variables",
]
