"""Member completion for property-access expressions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bound.types import MethodInfo, PropertyInfo, ScriptType


def _matches(name: str, partial: str) -> bool:
    return name.lower().startswith(partial.lower())


def filter_members(
    script_type: ScriptType | None, partial: str
) -> tuple[list[PropertyInfo], list[MethodInfo]]:
    """Return instance properties and methods whose names start with ``partial``.

    Matching is case-insensitive; an empty ``partial`` matches every member.
    """
    if script_type is None:
        return [], []
    properties = [p for p in script_type.instance_properties() if _matches(p.name, partial)]
    methods = [m for m in script_type.instance_methods() if _matches(m.name, partial)]
    return properties, methods


__all__ = ["filter_members"]
