"""Static types of the scripting language as seen by the editor layer.

Only the surface needed for completion and hover is modelled: a display name,
instance properties and instance methods. Predefined types are singletons.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MethodParameter:
    name: str
    type: ScriptType


@dataclass(frozen=True)
class PropertyInfo:
    """An instance property exposed by a type."""

    name: str
    type: ScriptType


@dataclass(frozen=True)
class MethodInfo:
    """An instance method exposed by a type."""

    name: str
    return_type: ScriptType
    parameters: tuple[MethodParameter, ...] = ()

    def signature(self) -> str:
        params = ", ".join(f"{p.type} {p.name}" for p in self.parameters)
        return f"{self.return_type} {self.name}({params})"


@dataclass(frozen=True, eq=False)
class ScriptType:
    """A named type with ordered instance members.

    Types compare by identity; the binder hands out one instance per type.
    """

    name: str
    properties: tuple[PropertyInfo, ...] = field(default=(), repr=False)
    methods: tuple[MethodInfo, ...] = field(default=(), repr=False)

    def instance_properties(self) -> tuple[PropertyInfo, ...]:
        return self.properties

    def instance_methods(self) -> tuple[MethodInfo, ...]:
        return self.methods

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, eq=False)
class PredefinedType(ScriptType):
    """A built-in type with a fixed keyword and a one-line description."""

    description: str = ""


@dataclass(frozen=True, eq=False)
class ClassType(ScriptType):
    """An external (host-provided) type."""

    qualified_name: str = ""


@dataclass(frozen=True, eq=False)
class FunctionType(ScriptType):
    """Signature of a script-level function."""

    return_type: ScriptType | None = None
    parameters: tuple[MethodParameter, ...] = ()


BOOLEAN = PredefinedType("boolean", description="true or false value")
INT = PredefinedType("int", description="32-bit signed integer")
CHAR = PredefinedType("char", description="Single character")
FLOAT = PredefinedType("float", description="Double-precision floating-point number")
STRING = PredefinedType("string", description="Text as sequence of characters")
VOID = PredefinedType("void", description="No value")

# Order matters: completion offers them in this order.
PREDEFINED_TYPES: tuple[PredefinedType, ...] = (BOOLEAN, INT, CHAR, FLOAT, STRING)

PREDEFINED_BY_NAME: dict[str, PredefinedType] = {
    t.name: t for t in (*PREDEFINED_TYPES, VOID)
}


def make_function_type(
    return_type: ScriptType, parameters: tuple[MethodParameter, ...]
) -> FunctionType:
    name = f"fn<{return_type}({', '.join(str(p.type) for p in parameters)})>"
    return FunctionType(name, return_type=return_type, parameters=parameters)


__all__ = [
    "BOOLEAN",
    "CHAR",
    "FLOAT",
    "INT",
    "PREDEFINED_BY_NAME",
    "PREDEFINED_TYPES",
    "STRING",
    "VOID",
    "ClassType",
    "FunctionType",
    "MethodInfo",
    "MethodParameter",
    "PredefinedType",
    "PropertyInfo",
    "ScriptType",
    "make_function_type",
]
