"""Locate the innermost bound node under a cursor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from bound.nodes import BoundNode


@dataclass(frozen=True)
class ResolutionEntry:
    """A node on the path from the root to the cursor.

    ``parent`` links form a chain from the innermost node back to the root;
    it exists only for the duration of a query.
    """

    parent: ResolutionEntry | None
    node: BoundNode

    def chain(self) -> Iterator[ResolutionEntry]:
        """Yield this entry and then every ancestor, innermost first."""
        entry: ResolutionEntry | None = self
        while entry is not None:
            yield entry
            entry = entry.parent


def resolve(root: BoundNode, line: int, column: int) -> ResolutionEntry | None:
    """Return the innermost node containing the position, with its ancestors.

    Returns None when the root itself does not contain the position. A
    position in a gap between children resolves to their parent.
    """
    if not root.range.contains(line, column):
        return None

    entry = ResolutionEntry(None, root)
    while True:
        # Children are ordered and disjoint, so the first match is the only one.
        child = next(
            (c for c in entry.node.children() if c.range.contains(line, column)),
            None,
        )
        if child is None:
            return entry
        entry = ResolutionEntry(entry, child)


def find_node(root: BoundNode, line: int, column: int) -> BoundNode | None:
    entry = resolve(root, line, column)
    return entry.node if entry is not None else None


__all__ = ["ResolutionEntry", "find_node", "resolve"]
