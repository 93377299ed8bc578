from __future__ import annotations


class LayoutError(ValueError):
    """Raised when an element tree is composed from inconsistent parts."""
