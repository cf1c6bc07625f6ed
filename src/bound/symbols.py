"""Symbols attached to name expressions by the binder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Literal

if TYPE_CHECKING:
    from bound.types import FunctionType, ScriptType

SymbolKind = Literal["constant", "static", "function", "local", "parameter"]


@dataclass(frozen=True, eq=False)
class Symbol:
    """Base for every symbol variant; only the subclasses are instantiated."""

    kind: ClassVar[SymbolKind]

    name: str
    type: ScriptType


@dataclass(frozen=True, eq=False)
class ExternalStaticConstant(Symbol):
    """A library-provided static field; in scope everywhere."""

    kind: ClassVar[SymbolKind] = "constant"


@dataclass(frozen=True, eq=False)
class StaticVariable(Symbol):
    """A file-scoped variable declared in the static section."""

    kind: ClassVar[SymbolKind] = "static"


@dataclass(frozen=True, eq=False)
class Function(Symbol):
    kind: ClassVar[SymbolKind] = "function"

    type: FunctionType


@dataclass(frozen=True, eq=False)
class LocalVariable(Symbol):
    """A block-scoped variable; visible only after its declaration."""

    kind: ClassVar[SymbolKind] = "local"


@dataclass(frozen=True, eq=False)
class Parameter(LocalVariable):
    kind: ClassVar[SymbolKind] = "parameter"

    by_ref: bool = False


__all__ = [
    "ExternalStaticConstant",
    "Function",
    "LocalVariable",
    "Parameter",
    "StaticVariable",
    "Symbol",
    "SymbolKind",
]
