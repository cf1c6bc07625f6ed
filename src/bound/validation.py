"""Structural checks on bound trees received from the binder."""

from __future__ import annotations

from typing import TYPE_CHECKING

from errors import MalformedRequestError

if TYPE_CHECKING:
    from bound.nodes import BoundNode


def validate_tree(root: BoundNode) -> None:
    """Reject trees whose children are not position-increasing.

    Every child must lie within its parent's range, and consecutive children
    may touch but never overlap.

    Raises:
        MalformedRequestError: on the first offending node.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        previous: BoundNode | None = None
        for child in node.children():
            if child.range.start < node.range.start or child.range.end > node.range.end:
                msg = (
                    f"{child.kind.value} at {child.range.to_list()} lies outside "
                    f"its parent {node.kind.value} at {node.range.to_list()}"
                )
                raise MalformedRequestError(msg)
            if previous is not None and previous.range.end > child.range.start:
                msg = (
                    f"{child.kind.value} at {child.range.to_list()} overlaps or "
                    f"precedes its sibling {previous.kind.value} at "
                    f"{previous.range.to_list()}"
                )
                raise MalformedRequestError(msg)
            previous = child
            stack.append(child)


def validate_position(line: int, column: int, base: int = 0) -> None:
    """Reject cursors that cannot denote a document position."""
    if line < base or column < base:
        msg = f"Cursor ({line}, {column}) is before the first position ({base}, {base})"
        raise MalformedRequestError(msg)


__all__ = ["validate_position", "validate_tree"]
