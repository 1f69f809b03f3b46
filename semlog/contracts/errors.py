"""
Error Taxonomy

Every failure carries an ErrorCode plus the structured diagnostic data
callers and tests branch on. Messages are for humans only.
"""

from __future__ import annotations
from typing import Optional

from .base import ErrorCode


class SemanticLogError(Exception):
    """Base class for all semantic logger failures."""
    code: ErrorCode

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code


class NoLogSessionError(SemanticLogError):
    """The document was requested but no operation was ever opened."""

    def __init__(self, reason: str = "no open entry"):
        super().__init__(ErrorCode.NO_LOG_SESSION, f"Cannot create log session: {reason}")
        self.reason = reason


class UnclosedOperationsError(SemanticLogError):
    """
    Flush attempted while operations are still open.

    Reports the remaining depth and the innermost unclosed operation.
    The session is left untouched.
    """

    def __init__(self, open_stack_depth: int, last_operation_kind: str, last_operation_schema: str):
        super().__init__(
            ErrorCode.UNCLOSED_OPERATIONS,
            f"Unclosed operations detected. {open_stack_depth} operations remain open. "
            f"Last operation: {last_operation_kind} ({last_operation_schema})",
        )
        self.open_stack_depth = open_stack_depth
        self.last_operation_kind = last_operation_kind
        self.last_operation_schema = last_operation_schema


class InvalidOperationOrderError(SemanticLogError):
    """Close named an id that is not on top of the operation stack."""

    def __init__(self, provided_id: str, expected_id: Optional[str], code: ErrorCode = ErrorCode.INVALID_OPERATION_ORDER):
        if expected_id is None:
            message = f"Cannot close operation '{provided_id}': no open operations"
        else:
            message = f"Cannot close operation '{provided_id}': expected '{expected_id}' (LIFO order required)"
        super().__init__(code, message)
        self.provided_id = provided_id
        self.expected_id = expected_id


class NoOpenOperationsError(InvalidOperationOrderError):
    """Close attempted with nothing open."""

    def __init__(self, provided_id: str):
        super().__init__(provided_id, None, code=ErrorCode.NO_OPEN_OPERATIONS)


class LogDataError(SemanticLogError):
    """A document handed to a reader does not have the document shape."""

    def __init__(self, message: str):
        super().__init__(ErrorCode.INVALID_LOG_DATA, f"Invalid log data: {message}")


class LogFileNotFoundError(SemanticLogError):
    """A requested log file does not exist or is not readable."""

    def __init__(self, path: str):
        super().__init__(ErrorCode.LOG_FILE_NOT_FOUND, f"Log file not found: {path}")
        self.path = path
