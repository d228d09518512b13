# -*- coding: utf-8 -*-
"""
Enrollment Repository Layer
"""

# Lazy imports to avoid circular dependencies
__all__ = [
    "DraftStorage",
    "SQLiteDraftStorage",
    "InMemoryDraftStorage",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name in __all__:
        from . import draft_repository
        return getattr(draft_repository, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
