"""Completion entry point: cursor in, ordered suggestions out."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bound.types import PREDEFINED_TYPES
from bound.validation import validate_position, validate_tree
from completion.context import classify
from completion.members import filter_members
from completion.scope import collect_symbols
from errors import MalformedRequestError
from suggest.documentation import DocumentationProvider

if TYPE_CHECKING:
    from bound.nodes import BoundTree
    from suggest.models import Suggestion

logger = logging.getLogger(__name__)


class CompletionProvider:
    """Answers completion queries against a bound tree.

    Queries are pure functions of the tree and the cursor; the provider
    keeps no per-query state and can be shared.
    """

    def __init__(
        self,
        documentation_provider: DocumentationProvider | None = None,
        *,
        position_base: int = 0,
    ) -> None:
        self.documentation_provider = documentation_provider or DocumentationProvider()
        self.position_base = position_base

    def get(self, tree: BoundTree, line: int, column: int) -> list[Suggestion]:
        """Return suggestions for the cursor, in display order.

        Raises:
            MalformedRequestError: if the cursor or the tree breaks the
                binder contract.
            InternalConsistencyError: if the cursor lands in a node kind
                without a completion rule.
        """
        try:
            validate_position(line, column, self.position_base)
            validate_tree(tree.unit)
        except MalformedRequestError as exc:
            logger.warning("Rejected completion request at (%d, %d): %s", line, column, exc)
            raise

        docs = self.documentation_provider
        classification = classify(tree.unit, line, column)
        suggestions: list[Suggestion] = []

        if classification.member_access is not None:
            node = classification.member_access
            properties, methods = filter_members(node.callee.type, node.name)
            suggestions.extend(docs.get_property_suggestion(p) for p in properties)
            suggestions.extend(docs.get_method_suggestion(m) for m in methods)

        if classification.can_static:
            suggestions.append(docs.get_static_keyword_suggestion())
        if classification.can_void:
            suggestions.append(docs.get_void_keyword_suggestion())
        if classification.can_type:
            suggestions.extend(docs.get_type_suggestion(t) for t in PREDEFINED_TYPES)
        if classification.can_symbol or classification.can_statement:
            symbols = collect_symbols(tree, classification.context, line, column)
            suggestions.extend(docs.get_symbol_suggestion(s) for s in symbols)
        if classification.can_statement:
            suggestions.extend(docs.get_statement_start_suggestions())

        logger.debug(
            "Completion at (%d, %d): %d suggestions", line, column, len(suggestions)
        )
        return suggestions


__all__ = ["CompletionProvider"]
