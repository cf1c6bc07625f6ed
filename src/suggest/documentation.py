"""Build suggestion records for keywords, types, symbols and members."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bound.types import PredefinedType
from suggest.models import CompletionItemKind, Suggestion

if TYPE_CHECKING:
    from bound.symbols import Symbol
    from bound.types import MethodInfo, PropertyInfo, ScriptType

# break/continue are not offered yet.
STATEMENT_KEYWORDS: tuple[str, ...] = ("for", "foreach", "if", "return", "while")


def _keyword(word: str) -> Suggestion:
    return Suggestion(label=word, insert_text=word, kind=CompletionItemKind.KEYWORD)


class DocumentationProvider:
    """Turns admissible categories and symbols into ``Suggestion`` records."""

    def get_type_docs(self, script_type: ScriptType) -> str | None:
        if isinstance(script_type, PredefinedType):
            return script_type.description or None
        return None

    def get_type_suggestion(self, script_type: ScriptType) -> Suggestion:
        return Suggestion(
            label=script_type.name,
            documentation=self.get_type_docs(script_type),
            insert_text=script_type.name,
            kind=CompletionItemKind.CLASS,
        )

    def get_static_keyword_suggestion(self) -> Suggestion:
        return _keyword("static")

    def get_void_keyword_suggestion(self) -> Suggestion:
        return _keyword("void")

    def get_statement_start_suggestions(self) -> list[Suggestion]:
        return [_keyword(word) for word in STATEMENT_KEYWORDS]

    def get_symbol_suggestion(self, symbol: Symbol) -> Suggestion:
        """Suggestion for a constant, static, local, parameter or function."""
        kind = (
            CompletionItemKind.FUNCTION
            if symbol.kind == "function"
            else CompletionItemKind.VARIABLE
        )
        return Suggestion(
            label=symbol.name,
            detail=str(symbol.type),
            insert_text=symbol.name,
            kind=kind,
        )

    def get_property_suggestion(self, prop: PropertyInfo) -> Suggestion:
        return Suggestion(
            label=prop.name,
            detail=str(prop.type),
            insert_text=prop.name,
            kind=CompletionItemKind.PROPERTY,
        )

    def get_method_suggestion(self, method: MethodInfo) -> Suggestion:
        return Suggestion(
            label=method.name,
            detail=method.signature(),
            insert_text=method.name,
            kind=CompletionItemKind.METHOD,
        )


__all__ = ["STATEMENT_KEYWORDS", "DocumentationProvider"]
