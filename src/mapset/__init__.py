from __future__ import annotations

from .containers import contains, from_indexed, from_keys, from_values, index
from .map_set import MapSet

__all__ = [
    "MapSet",
    # from .containers
    "contains",
    "index",
    "from_keys",
    "from_values",
    "from_indexed",
]
