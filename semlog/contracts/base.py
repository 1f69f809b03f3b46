"""
Base Contracts and Shared Types

Foundational types used by every layer of the semantic logger.
All value types here are IMMUTABLE and represent pure data.

BOUNDARY ENFORCEMENT:
=====================
- A Context is read exactly once per logger call, then discarded
- The logger never holds a reference to the caller's Context object
- Kind dispatch is a closed capability (kind, schema_ref, data),
  not an inheritance hierarchy the logger inspects
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, is_dataclass, asdict
from enum import Enum, auto
from typing import Any, ClassVar, Dict, Mapping, Optional, Protocol, runtime_checkable


# =============================================================================
# ERROR CODES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """
    Explicit error codes for deterministic error handling.
    Every failure the logger can raise is enumerated here.
    """
    # Session state machine
    NO_LOG_SESSION = auto()
    UNCLOSED_OPERATIONS = auto()
    INVALID_OPERATION_ORDER = auto()
    NO_OPEN_OPERATIONS = auto()

    # Viewer / reader
    INVALID_LOG_DATA = auto()
    LOG_FILE_NOT_FOUND = auto()


# =============================================================================
# CONTEXT CAPABILITY
# =============================================================================

@runtime_checkable
class SemanticContext(Protocol):
    """
    Anything exposing a kind tag, a schema reference and keyed data.

    The logger depends only on this shape.
    """

    @property
    def kind(self) -> str: ...

    @property
    def schema_ref(self) -> str: ...

    @property
    def data(self) -> Mapping[str, Any]: ...


def _to_plain(value: Any) -> Any:
    """Nested dataclasses become dicts and tuples become lists, at any depth."""
    if is_dataclass(value) and not isinstance(value, type):
        return _to_plain(asdict(value))
    if isinstance(value, Mapping):
        return {k: _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class AbstractContext:
    """
    Base for declarative contexts.

    Subclasses are frozen dataclasses declaring KIND and SCHEMA_REF:

        @dataclass(frozen=True)
        class DatabaseQueryContext(AbstractContext):
            KIND: ClassVar[str] = "database_query"
            SCHEMA_REF: ClassVar[str] = "schemas/database_query.json"

            query: str
            table: str

    The dataclass fields, in declaration order, become the entry data.
    """
    KIND: ClassVar[Optional[str]] = None
    SCHEMA_REF: ClassVar[Optional[str]] = None

    @property
    def kind(self) -> str:
        if not self.KIND:
            raise TypeError(f"{type(self).__name__} does not declare KIND")
        return self.KIND

    @property
    def schema_ref(self) -> str:
        if not self.SCHEMA_REF:
            raise TypeError(f"{type(self).__name__} does not declare SCHEMA_REF")
        return self.SCHEMA_REF

    @property
    def data(self) -> Dict[str, Any]:
        return {f.name: _to_plain(getattr(self, f.name)) for f in fields(self)}


@dataclass(frozen=True)
class GenericContext:
    """Tagged context for callers that do not want a dedicated class."""
    kind: str
    schema_ref: str
    data: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.kind or not isinstance(self.kind, str):
            raise ValueError("GenericContext kind must be a non-empty string")
        if not self.schema_ref or not isinstance(self.schema_ref, str):
            raise ValueError("GenericContext schema_ref must be a non-empty string")


# =============================================================================
# RELATIONS (RFC 8288 style links)
# =============================================================================

@dataclass(frozen=True)
class Relation:
    """Immutable link from a session document to a related resource."""
    rel: str
    href: str
    title: Optional[str] = None
    type: Optional[str] = None

    def __post_init__(self):
        if not self.rel or not isinstance(self.rel, str):
            raise ValueError("Relation rel must be a non-empty string")
        if not self.href or not isinstance(self.href, str):
            raise ValueError("Relation href must be a non-empty string")

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> Relation:
        return Relation(
            rel=data.get("rel", ""),
            href=data.get("href", ""),
            title=data.get("title"),
            type=data.get("type"),
        )

    def to_dict(self) -> Dict[str, str]:
        result = {"rel": self.rel, "href": self.href}
        if self.title is not None:
            result["title"] = self.title
        if self.type is not None:
            result["type"] = self.type
        return result
