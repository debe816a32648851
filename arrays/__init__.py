"""
arrays/
-------
Host-side data layer.  Public API:

    from arrays import ArrayStore
"""

from arrays.store import ArrayStore

__all__ = [
    "ArrayStore",
]
