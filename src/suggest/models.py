"""Suggestion records handed to the editor."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CompletionItemKind(str, Enum):
    """Kinds the editor knows how to render; values are its display names."""

    METHOD = "Method"
    PROPERTY = "Property"
    VARIABLE = "Variable"
    KEYWORD = "Keyword"
    FUNCTION = "Function"
    STRUCT = "Struct"
    CLASS = "Class"


class Suggestion(BaseModel):
    """A single completion item."""

    model_config = ConfigDict(frozen=True)

    label: str
    detail: str | None = Field(default=None, description="Type or signature")
    documentation: str | None = Field(default=None, description="Free-form docs")
    insert_text: str
    kind: CompletionItemKind


__all__ = ["CompletionItemKind", "Suggestion"]
