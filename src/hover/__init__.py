"""Hover text for bound nodes."""

from hover.provider import HoverProvider, HoverResponse, escape_html

__all__ = ["HoverProvider", "HoverResponse", "escape_html"]
