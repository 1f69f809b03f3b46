"""
Semantic Logger

Hierarchical, schema-annotated structured logging: declare an intent
(open), record occurrences (event), record the actual outcome (close),
and flush one correlated, nested document per session.

Exports:
    - SemanticLogger: the session controller
    - AbstractContext / GenericContext / SemanticContext: context shapes
    - OpenEntry / EventEntry / LogDocument / Relation: output contracts
    - SemanticLogError and subclasses: the error taxonomy
"""

from .config import SEMANTIC_LOG_SCHEMA, LoggerConfig
from .contracts import (
    ErrorCode,
    SemanticContext,
    AbstractContext,
    GenericContext,
    Relation,
    OpenEntry,
    EventEntry,
    LogDocument,
    SemanticLogError,
    NoLogSessionError,
    UnclosedOperationsError,
    InvalidOperationOrderError,
    NoOpenOperationsError,
    LogDataError,
    LogFileNotFoundError,
)
from .session import SemanticLogger

__version__ = "0.1.0"

__all__ = [
    "SEMANTIC_LOG_SCHEMA",
    "LoggerConfig",
    "SemanticLogger",
    "ErrorCode",
    "SemanticContext",
    "AbstractContext",
    "GenericContext",
    "Relation",
    "OpenEntry",
    "EventEntry",
    "LogDocument",
    "SemanticLogError",
    "NoLogSessionError",
    "UnclosedOperationsError",
    "InvalidOperationOrderError",
    "NoOpenOperationsError",
    "LogDataError",
    "LogFileNotFoundError",
]
