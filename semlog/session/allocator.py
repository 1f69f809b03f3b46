"""
Identifier Allocator
====================

Per-kind monotonic counters producing ids like `database_query_3`.

INVARIANTS:
- One counter per kind, starting at 1
- Shared by opens, events and closes of the same kind
- Never reused within a session; reset only with the session
"""

from __future__ import annotations
from typing import Dict


class IdAllocator:
    """Session-scoped, deterministic operation id source."""

    def __init__(self):
        self._counts: Dict[str, int] = {}

    def allocate(self, kind: str) -> str:
        count = self._counts.get(kind, 0) + 1
        self._counts[kind] = count
        return f"{kind}_{count}"

    def reset(self):
        self._counts = {}
