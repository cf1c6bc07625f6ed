"""Completion context resolution and scoped symbol collection."""

from completion.context import (
    Classification,
    CompletionContext,
    ContextRule,
    ContextType,
    classify,
    get_completion_context,
)
from completion.members import filter_members
from completion.provider import CompletionProvider
from completion.resolver import ResolutionEntry, find_node, resolve
from completion.scope import collect_symbols

__all__ = [
    "Classification",
    "CompletionContext",
    "CompletionProvider",
    "ContextRule",
    "ContextType",
    "ResolutionEntry",
    "classify",
    "collect_symbols",
    "filter_members",
    "find_node",
    "get_completion_context",
    "resolve",
]
