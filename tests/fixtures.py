"""
Test Fixtures

Explicit contexts and documents for deterministic testing.
"""

from dataclasses import dataclass
from typing import ClassVar

from semlog.contracts.base import AbstractContext, GenericContext


@dataclass(frozen=True)
class AContext(AbstractContext):
    KIND: ClassVar[str] = "a"
    SCHEMA_REF: ClassVar[str] = "schemas/a.json"

    value: str = "a"


@dataclass(frozen=True)
class BContext(AbstractContext):
    KIND: ClassVar[str] = "b"
    SCHEMA_REF: ClassVar[str] = "schemas/b.json"

    value: str = "b"


@dataclass(frozen=True)
class EContext(AbstractContext):
    KIND: ClassVar[str] = "e"
    SCHEMA_REF: ClassVar[str] = "schemas/e.json"

    message: str = "happened"


def ctx(kind: str, **data) -> GenericContext:
    """Ad hoc context with schema `schemas/{kind}.json`."""
    return GenericContext(kind=kind, schema_ref=f"schemas/{kind}.json", data=data)


# =============================================================================
# SERIALISED DOCUMENTS (viewer input)
# =============================================================================

NESTED_DOCUMENT = {
    "schemaRef": "https://example.com/semantic-log.json",
    "open": {
        "id": "http_request_1",
        "kind": "http_request",
        "schemaRef": "schemas/http_request.json",
        "data": {"method": "GET", "uri": "/api/users"},
        "open": {
            "id": "database_query_1",
            "kind": "database_query",
            "schemaRef": "schemas/database_query.json",
            "data": {"queryType": "SELECT", "table": "users", "executionTime": 0.025},
        },
    },
    "events": [
        {
            "id": "cache_operation_1",
            "kind": "cache_operation",
            "schemaRef": "schemas/cache_operation.json",
            "data": {"operation": "get", "key": "user:1", "hit": True, "duration": 0.002},
            "correlationId": "database_query_1",
        },
        {
            "id": "error_1",
            "kind": "error",
            "schemaRef": "schemas/error.json",
            "data": {"errorType": "Warning", "message": "slow upstream"},
        },
    ],
    "close": {
        "id": "http_response_1",
        "kind": "http_response",
        "schemaRef": "schemas/http_response.json",
        "data": {"statusCode": 200, "responseTime": 0.15},
        "correlationId": "http_request_1",
        "close": {
            "id": "query_result_1",
            "kind": "query_result",
            "schemaRef": "schemas/query_result.json",
            "data": {"rowCount": 1},
            "correlationId": "database_query_1",
        },
    },
}
