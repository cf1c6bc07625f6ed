"""Exception hierarchy for script-assist."""

from __future__ import annotations


class ScriptAssistError(Exception):
    """Base class for every error raised by script-assist."""


class MalformedRequestError(ScriptAssistError):
    """Raised when a query violates the upstream contract.

    Either the cursor is not a representable document position or the bound
    tree has children that are out of order, overlapping or outside their
    parent.
    """


class InternalConsistencyError(ScriptAssistError):
    """Raised when a node kind reaches code that has no rule for it."""


class TreeFormatError(ScriptAssistError):
    """Raised when a bound-tree JSON dump cannot be decoded."""
