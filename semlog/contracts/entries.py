"""
Log Entry Contracts
===================

Immutable records produced by the session controller.

INVARIANTS:
- Entries are never mutated; nesting is expressed by building new entries
- A child is attached only during tree reconstruction at flush time
- Serialisation OMITS structurally absent fields (no nulls, no empty lists)
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple
import copy
import json

from .base import Relation


def _data_copy(data: Mapping[str, Any]) -> Dict[str, Any]:
    return copy.deepcopy(dict(data))


@dataclass(frozen=True)
class OpenEntry:
    """
    One declared intent.

    `child` is the next-inner operation; serialised under the `open` key.
    """
    id: str
    kind: str
    schema_ref: str
    data: Mapping[str, Any]
    child: Optional[OpenEntry] = None

    def with_child(self, child: OpenEntry) -> OpenEntry:
        """Return a copy of this entry nesting `child` (immutable)."""
        return replace(self, child=child)

    def chain(self) -> Iterator[OpenEntry]:
        """Walk this entry and its descendants, outermost first."""
        node: Optional[OpenEntry] = self
        while node is not None:
            yield node
            node = node.child

    @property
    def depth(self) -> int:
        return sum(1 for _ in self.chain())

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "id": self.id,
            "kind": self.kind,
            "schemaRef": self.schema_ref,
            "data": _data_copy(self.data),
        }
        if self.child is not None:
            result["open"] = self.child.to_dict()
        return result


@dataclass(frozen=True)
class EventEntry:
    """
    One occurrence, or the close-side record of an operation.

    `correlation_id` names the enclosing open operation.
    `child` is only set on the close side; serialised under the `close` key.
    """
    id: str
    kind: str
    schema_ref: str
    data: Mapping[str, Any]
    correlation_id: Optional[str] = None
    child: Optional[EventEntry] = None

    def with_child(self, child: EventEntry) -> EventEntry:
        """Return a copy of this entry nesting `child` (immutable)."""
        return replace(self, child=child)

    def chain(self) -> Iterator[EventEntry]:
        """Walk this entry and its descendants, outermost first."""
        node: Optional[EventEntry] = self
        while node is not None:
            yield node
            node = node.child

    @property
    def depth(self) -> int:
        return sum(1 for _ in self.chain())

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "id": self.id,
            "kind": self.kind,
            "schemaRef": self.schema_ref,
            "data": _data_copy(self.data),
        }
        if self.correlation_id is not None:
            result["correlationId"] = self.correlation_id
        if self.child is not None:
            result["close"] = self.child.to_dict()
        return result


@dataclass(frozen=True)
class LogDocument:
    """
    The single correlated document produced by one session.

    Produced once by `SemanticLogger.flush()`; never modified afterwards.
    """
    schema_ref: str
    open: OpenEntry
    close: EventEntry
    events: Tuple[EventEntry, ...] = field(default_factory=tuple)
    relations: Tuple[Relation, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "schemaRef": self.schema_ref,
            "open": self.open.to_dict(),
        }
        if self.events:
            result["events"] = [event.to_dict() for event in self.events]
        result["close"] = self.close.to_dict()
        if self.relations:
            result["relations"] = [relation.to_dict() for relation in self.relations]
        return result

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
