"""
Tree Reconstruction
===================

Pure functions folding the flat closing-order ledgers into nested trees.

Both ledgers are ordered by CLOSING time: innermost operation first,
outermost last. The output trees are ordered by NESTING: the outermost
operation is the root and each level's child is the next-inner one.

INVARIANT: for n balanced nested operations both trees have depth n,
with node order reversed relative to the raw ledger.
No node is mutated; every level is a new entry.
"""

from __future__ import annotations
from typing import List, Sequence

from ..contracts.entries import EventEntry, OpenEntry


def build_nested_open(completed: Sequence[OpenEntry]) -> OpenEntry:
    """
    Nest the open-side ledger.

    Reversed, the ledger runs outermost-opened to innermost. The innermost
    becomes the tentative root, then each next-outer entry wraps the
    current result as its child.
    """
    if not completed:
        raise ValueError("Cannot build open tree from an empty ledger")

    operations: List[OpenEntry] = list(reversed(completed))
    result = operations.pop()

    while operations:
        parent = operations.pop()
        result = parent.with_child(result)

    return result


def build_nested_close(closes: Sequence[EventEntry]) -> EventEntry:
    """
    Nest the close-side sequence so it mirrors the open tree.

    The last close recorded belongs to the outermost operation and becomes
    the top-level close; every earlier close is embedded one level deeper.
    """
    if not closes:
        raise ValueError("Cannot build close tree from an empty sequence")

    entries: List[EventEntry] = list(reversed(closes))
    result = entries.pop()

    while entries:
        parent = entries.pop()
        result = parent.with_child(result)

    return result
