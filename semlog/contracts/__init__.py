"""
Contracts: immutable value types and the error taxonomy shared by all layers.
"""

from .base import (
    ErrorCode,
    SemanticContext,
    AbstractContext,
    GenericContext,
    Relation,
)
from .entries import OpenEntry, EventEntry, LogDocument
from .errors import (
    SemanticLogError,
    NoLogSessionError,
    UnclosedOperationsError,
    InvalidOperationOrderError,
    NoOpenOperationsError,
    LogDataError,
    LogFileNotFoundError,
)

__all__ = [
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
