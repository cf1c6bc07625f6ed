"""Suggestion records and their synthesis."""

from suggest.documentation import STATEMENT_KEYWORDS, DocumentationProvider
from suggest.models import CompletionItemKind, Suggestion

__all__ = [
    "STATEMENT_KEYWORDS",
    "CompletionItemKind",
    "DocumentationProvider",
    "Suggestion",
]
