"""Classify the grammatical position of a completion cursor.

The classifier answers which categories of suggestions are admissible at the
cursor: the ``static`` and ``void`` keywords, predefined types, statement
keywords and symbols, or members of a property access. It works purely from
tree shape: the innermost node containing the cursor, and that node's
children immediately before and after the cursor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from bound.nodes import NodeKind, PropertyAccessNode, VariableDeclarationNode
from completion.resolver import ResolutionEntry, resolve
from errors import InternalConsistencyError

if TYPE_CHECKING:
    from bound.nodes import BoundNode, CompilationUnitNode

logger = logging.getLogger(__name__)


class ContextType(str, Enum):
    NO_CODE = "no_code"
    BEFORE_FIRST = "before_first"
    AFTER_LAST = "after_last"
    WITHIN = "within"


class ContextRule(str, Enum):
    """How a containing node kind shapes completion."""

    UNIT = "unit"
    # Gaps between static declarations and inside their initializers.
    STATIC_SECTION = "static_section"
    FUNCTION_SECTION = "function_section"
    STATEMENTS = "statements"
    MEMBER_ACCESS = "member_access"
    # Nothing is offered (inside literals, function headers, ...).
    EMPTY = "empty"
    # The nearest ancestor with another rule decides.
    DEFER = "defer"


CONTEXT_RULES: dict[NodeKind, ContextRule] = {
    NodeKind.COMPILATION_UNIT: ContextRule.UNIT,
    NodeKind.STATIC_VARIABLES_LIST: ContextRule.STATIC_SECTION,
    NodeKind.FUNCTIONS_LIST: ContextRule.FUNCTION_SECTION,
    NodeKind.STATEMENTS_LIST: ContextRule.STATEMENTS,
    NodeKind.FUNCTION: ContextRule.EMPTY,
    NodeKind.PARAMETER_LIST: ContextRule.EMPTY,
    NodeKind.PARAMETER: ContextRule.EMPTY,
    NodeKind.VARIABLE_DECLARATION: ContextRule.DEFER,
    NodeKind.EXPRESSION_STATEMENT: ContextRule.DEFER,
    NodeKind.ASSIGNMENT_STATEMENT: ContextRule.DEFER,
    NodeKind.IF_STATEMENT: ContextRule.DEFER,
    NodeKind.WHILE_LOOP: ContextRule.DEFER,
    NodeKind.FOR_LOOP: ContextRule.DEFER,
    NodeKind.FOREACH_LOOP: ContextRule.DEFER,
    NodeKind.RETURN_STATEMENT: ContextRule.DEFER,
    NodeKind.NAME_EXPRESSION: ContextRule.DEFER,
    NodeKind.PROPERTY_ACCESS_EXPRESSION: ContextRule.MEMBER_ACCESS,
    NodeKind.METHOD_CALL: ContextRule.DEFER,
    NodeKind.METHOD: ContextRule.DEFER,
    NodeKind.ARGUMENTS_LIST: ContextRule.DEFER,
    NodeKind.BINARY_OPERATOR: ContextRule.DEFER,
    NodeKind.UNARY_OPERATOR: ContextRule.DEFER,
    NodeKind.PREDEFINED_TYPE: ContextRule.DEFER,
    NodeKind.BOOLEAN_LITERAL: ContextRule.EMPTY,
    NodeKind.INTEGER_LITERAL: ContextRule.EMPTY,
    NodeKind.CHAR_LITERAL: ContextRule.EMPTY,
    NodeKind.FLOAT_LITERAL: ContextRule.EMPTY,
    NodeKind.STRING_LITERAL: ContextRule.EMPTY,
}


def rule_for(kind: NodeKind) -> ContextRule:
    """Look up the completion rule for a node kind.

    Raises:
        InternalConsistencyError: if the kind has no rule.
    """
    try:
        return CONTEXT_RULES[kind]
    except KeyError:
        msg = f"No completion rule for node kind {kind!r}"
        raise InternalConsistencyError(msg) from None


@dataclass(frozen=True)
class CompletionContext:
    """Where the cursor sits relative to the bound tree.

    For ``WITHIN`` contexts ``entry`` is the node whose rule applies, ``prev``
    its last child entirely before the cursor and ``next`` its first child
    entirely after it. ``origin`` is the innermost node containing the cursor,
    which may sit below ``entry`` when its kind deferred upward. ``position`` is
    the cursor the context was computed for.
    """

    type: ContextType
    entry: ResolutionEntry | None = None
    prev: BoundNode | None = None
    next: BoundNode | None = None
    rule: ContextRule | None = None
    origin: ResolutionEntry | None = None
    position: tuple[int, int] | None = None

    @property
    def node(self) -> BoundNode | None:
        return self.entry.node if self.entry is not None else None


@dataclass(frozen=True)
class Classification:
    context: CompletionContext
    can_static: bool = False
    can_void: bool = False
    can_type: bool = False
    can_statement: bool = False
    can_symbol: bool = False
    member_access: PropertyAccessNode | None = None


def _neighbours(
    node: BoundNode, line: int, column: int
) -> tuple[BoundNode | None, BoundNode | None]:
    prev: BoundNode | None = None
    following: BoundNode | None = None
    for child in node.children():
        if child.range.is_before(line, column):
            prev = child
        elif child.range.is_after(line, column):
            following = child
            break
    return prev, following


def get_completion_context(
    unit: CompilationUnitNode, line: int, column: int
) -> CompletionContext:
    """Resolve the cursor and pick the node whose rule governs completion."""
    if unit.is_empty:
        return CompletionContext(ContextType.NO_CODE)

    entry = resolve(unit, line, column)
    if entry is None:
        if unit.range.is_after(line, column):
            return CompletionContext(ContextType.BEFORE_FIRST)
        if unit.range.is_before(line, column):
            return CompletionContext(ContextType.AFTER_LAST)
        msg = f"Cursor ({line}, {column}) is neither inside nor outside the unit"
        raise InternalConsistencyError(msg)

    for candidate in entry.chain():
        rule = rule_for(candidate.node.kind)
        if rule is ContextRule.DEFER:
            continue
        if rule is ContextRule.MEMBER_ACCESS and candidate is not entry:
            # The cursor is inside the callee, not after the dot.
            continue
        prev, following = _neighbours(candidate.node, line, column)
        return CompletionContext(
            ContextType.WITHIN,
            candidate,
            prev,
            following,
            rule,
            origin=entry,
            position=(line, column),
        )

    msg = f"No node on the path to ({line}, {column}) has a completion rule"
    raise InternalConsistencyError(msg)


def _classify_unit_gap(context: CompletionContext) -> Classification:
    prev_kind = context.prev.kind if context.prev is not None else None
    statements_may_start = (
        context.next is None or context.next.kind is NodeKind.STATEMENTS_LIST
    )

    if prev_kind is None or prev_kind is NodeKind.STATIC_VARIABLES_LIST:
        return Classification(
            context,
            can_static=True,
            can_void=True,
            can_type=True,
            can_statement=statements_may_start,
        )
    if prev_kind is NodeKind.FUNCTIONS_LIST:
        return Classification(
            context, can_void=True, can_type=True, can_statement=True
        )
    if prev_kind is NodeKind.STATEMENTS_LIST:
        return Classification(context, can_statement=True)

    msg = f"Unexpected compilation unit section {prev_kind!r}"
    raise InternalConsistencyError(msg)


def _section_item(context: CompletionContext) -> BoundNode | None:
    """Return the child of the governing section that holds the cursor."""
    if context.origin is None:
        return None
    for entry in context.origin.chain():
        if entry.parent is context.entry:
            return entry.node
    return None


def _classify_static_section(
    context: CompletionContext, has_functions: bool
) -> Classification:
    item = _section_item(context)
    if item is None:
        # Between two declarations.
        return Classification(
            context,
            can_static=True,
            can_void=not has_functions,
            can_type=not has_functions,
        )
    if (
        isinstance(item, VariableDeclarationNode)
        and context.position is not None
        and item.name.range.is_before(*context.position)
    ):
        # Initializer: an expression, so no keywords.
        return Classification(context, can_symbol=True)
    return Classification(context)


def classify_context(
    unit: CompilationUnitNode, context: CompletionContext
) -> Classification:
    has_variables = bool(unit.variables.variables)
    has_functions = bool(unit.functions.functions)
    has_statements = bool(unit.statements.statements)

    if context.type is ContextType.NO_CODE:
        return Classification(
            context, can_static=True, can_void=True, can_type=True, can_statement=True
        )

    if context.type is ContextType.BEFORE_FIRST:
        # Anything inserted here precedes existing sections.
        return Classification(
            context,
            can_static=True,
            can_void=not has_variables,
            can_type=not has_variables,
            can_statement=not has_variables and not has_functions,
        )

    if context.type is ContextType.AFTER_LAST:
        return Classification(
            context,
            can_static=not has_functions and not has_statements,
            can_void=not has_statements,
            can_type=not has_statements,
            can_statement=True,
        )

    if context.rule is ContextRule.UNIT:
        return _classify_unit_gap(context)

    if context.rule is ContextRule.STATIC_SECTION:
        return _classify_static_section(context, has_functions)

    if context.rule is ContextRule.FUNCTION_SECTION:
        return Classification(context, can_void=True, can_type=True)

    if context.rule is ContextRule.STATEMENTS:
        return Classification(context, can_statement=True, can_symbol=True)

    if context.rule is ContextRule.MEMBER_ACCESS:
        node = context.node
        if not isinstance(node, PropertyAccessNode):
            msg = f"Member access rule applied to {node!r}"
            raise InternalConsistencyError(msg)
        if node.member is None:
            return Classification(context, member_access=node)
        return Classification(context)

    if context.rule is ContextRule.EMPTY:
        return Classification(context)

    msg = f"Unhandled completion context {context.type!r} / {context.rule!r}"
    raise InternalConsistencyError(msg)


def classify(unit: CompilationUnitNode, line: int, column: int) -> Classification:
    """Classify the cursor position in a bound compilation unit."""
    context = get_completion_context(unit, line, column)
    classification = classify_context(unit, context)
    logger.debug(
        "Classified (%d, %d) as %s/%s",
        line,
        column,
        context.type.value,
        context.rule.value if context.rule is not None else "-",
    )
    return classification


__all__ = [
    "CONTEXT_RULES",
    "Classification",
    "CompletionContext",
    "ContextRule",
    "ContextType",
    "classify",
    "classify_context",
    "get_completion_context",
    "rule_for",
]
