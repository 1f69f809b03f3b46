"""
Session Controller
==================

The open / event / close / flush state machine.

INVARIANTS:
- The operation stack is strict LIFO: close must name the current top
- An event is correlated with whatever is on top of the stack when recorded
- Completed ledger and close sequence grow in closing order
- flush requires an empty stack and at least one opened operation
- flush consumes: state is reset after every successful flush

EXPLICIT FAILURE STATES:
- NO_LOG_SESSION: nothing was ever opened
- UNCLOSED_OPERATIONS: flush with operations still open (state untouched)
- INVALID_OPERATION_ORDER / NO_OPEN_OPERATIONS: close out of order

CONCURRENCY:
A SemanticLogger is mutable and NOT thread-safe. Use one instance per
logical thread of control (e.g. per request) or serialise access.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union
import copy
import logging

from ..config import SEMANTIC_LOG_SCHEMA
from ..contracts.base import Relation, SemanticContext
from ..contracts.entries import EventEntry, LogDocument, OpenEntry
from ..contracts.errors import (
    InvalidOperationOrderError,
    NoLogSessionError,
    NoOpenOperationsError,
    UnclosedOperationsError,
)
from .allocator import IdAllocator
from .reconstruction import build_nested_close, build_nested_open

logger = logging.getLogger(__name__)

RelationLike = Union[Relation, Mapping[str, Any]]


class SemanticLogger:
    """
    Hierarchical, schema-annotated session logger.

    Usage:
        log = SemanticLogger()
        op_id = log.open(HttpRequestContext(...))
        log.event(CacheOperationContext(...))
        log.close(HttpResponseContext(...), op_id)
        document = log.flush()
    """

    def __init__(self, schema_ref: str = SEMANTIC_LOG_SCHEMA):
        self._schema_ref = schema_ref
        self._ids = IdAllocator()
        self._open_stack: List[OpenEntry] = []
        self._events: List[EventEntry] = []
        self._completed: List[OpenEntry] = []
        self._closes: List[EventEntry] = []

    # =========================================================================
    # STATE (read-only)
    # =========================================================================

    @property
    def schema_ref(self) -> str:
        return self._schema_ref

    @property
    def depth(self) -> int:
        """Number of operations currently open."""
        return len(self._open_stack)

    @property
    def has_session(self) -> bool:
        """True once any operation has been opened since the last flush."""
        return bool(self._completed) or bool(self._open_stack)

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def open(self, context: SemanticContext) -> str:
        """
        Declare an intent. Returns the operation id required by close().
        """
        kind, schema_ref, data = _read_context(context)
        operation_id = self._ids.allocate(kind)

        self._open_stack.append(OpenEntry(
            id=operation_id,
            kind=kind,
            schema_ref=schema_ref,
            data=data,
        ))

        logger.debug("open %s (depth=%d)", operation_id, len(self._open_stack))
        return operation_id

    def event(self, context: SemanticContext) -> None:
        """Record an occurrence inside the innermost open operation."""
        kind, schema_ref, data = _read_context(context)
        event_id = self._ids.allocate(kind)
        current_open_id = self._open_stack[-1].id if self._open_stack else None

        self._events.append(EventEntry(
            id=event_id,
            kind=kind,
            schema_ref=schema_ref,
            data=data,
            correlation_id=current_open_id,
        ))

        logger.debug("event %s -> %s", event_id, current_open_id)

    def close(self, context: SemanticContext, open_id: str) -> None:
        """
        Record the actual outcome of the operation `open_id`.

        `open_id` must be the most recently opened, still-open operation.
        """
        if not self._open_stack:
            logger.warning("close %s rejected: no open operations", open_id)
            raise NoOpenOperationsError(open_id)

        last_open = self._open_stack[-1]
        if last_open.id != open_id:
            logger.warning("close %s rejected: expected %s", open_id, last_open.id)
            raise InvalidOperationOrderError(open_id, last_open.id)

        # context is read before any mutation
        kind, schema_ref, data = _read_context(context)

        self._completed.append(self._open_stack.pop())
        close_id = self._ids.allocate(kind)
        self._closes.append(EventEntry(
            id=close_id,
            kind=kind,
            schema_ref=schema_ref,
            data=data,
            correlation_id=open_id,
        ))

        logger.debug("close %s as %s (depth=%d)", open_id, close_id, len(self._open_stack))

    def flush(self, relations: Iterable[RelationLike] = ()) -> LogDocument:
        """
        Return the session document and reset all state.

        Raises NoLogSessionError or UnclosedOperationsError; on failure the
        session is left unmodified.
        """
        relation_tuple = _coerce_relations(relations)
        document = self._build_document(relation_tuple)

        self._reset()
        logger.debug(
            "flush: depth=%d events=%d relations=%d",
            document.open.depth, len(document.events), len(document.relations),
        )
        return document

    def to_dict(self) -> Dict[str, Any]:
        """Non-consuming read of the current document."""
        return self._build_document(()).to_dict()

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _build_document(self, relations: Tuple[Relation, ...]) -> LogDocument:
        if not self.has_session:
            logger.warning("document requested with no open entry")
            raise NoLogSessionError("no open entry")

        if self._open_stack:
            last_open = self._open_stack[-1]
            logger.warning(
                "document requested with %d unclosed operations (last: %s)",
                len(self._open_stack), last_open.id,
            )
            raise UnclosedOperationsError(
                len(self._open_stack),
                last_open.kind,
                last_open.schema_ref,
            )

        return LogDocument(
            schema_ref=self._schema_ref,
            open=build_nested_open(self._completed),
            close=build_nested_close(self._closes),
            events=tuple(self._events),
            relations=relations,
        )

    def _reset(self):
        self._ids.reset()
        self._open_stack = []
        self._events = []
        self._completed = []
        self._closes = []


def _read_context(context: SemanticContext) -> Tuple[str, str, Dict[str, Any]]:
    """Read a context exactly once, copying its data."""
    return context.kind, context.schema_ref, copy.deepcopy(dict(context.data))


def _coerce_relations(relations: Iterable[RelationLike]) -> Tuple[Relation, ...]:
    result = []
    for relation in relations:
        if isinstance(relation, Relation):
            result.append(relation)
        else:
            result.append(Relation.from_dict(relation))
    return tuple(result)
