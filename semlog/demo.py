"""
E-Commerce Demo Scenario
========================

A deterministic order-processing request logged with nested
open/event/close calls. Used by `semlog demo` and the test-suite.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional, Tuple

from .contracts.base import AbstractContext, Relation
from .contracts.entries import LogDocument
from .session.logger import SemanticLogger


# =============================================================================
# CONTEXTS
# =============================================================================

@dataclass(frozen=True)
class HttpRequestContext(AbstractContext):
    KIND: ClassVar[str] = "http_request"
    SCHEMA_REF: ClassVar[str] = "schemas/http_request.json"

    method: str
    uri: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, object]] = None
    clientIp: str = ""


@dataclass(frozen=True)
class HttpResponseContext(AbstractContext):
    KIND: ClassVar[str] = "http_response"
    SCHEMA_REF: ClassVar[str] = "schemas/http_response.json"

    statusCode: int
    contentType: str
    responseTime: float
    cached: bool = False


@dataclass(frozen=True)
class AuthenticationContext(AbstractContext):
    KIND: ClassVar[str] = "authentication"
    SCHEMA_REF: ClassVar[str] = "schemas/authentication.json"

    method: str
    token: Optional[str] = None
    claims: Dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class CacheOperationContext(AbstractContext):
    KIND: ClassVar[str] = "cache_operation"
    SCHEMA_REF: ClassVar[str] = "schemas/cache_operation.json"

    operation: str
    key: str
    hit: bool
    duration: float
    ttl: int = 0


@dataclass(frozen=True)
class BusinessLogicContext(AbstractContext):
    KIND: ClassVar[str] = "business_logic"
    SCHEMA_REF: ClassVar[str] = "schemas/business_logic.json"

    operation: str
    inputs: Dict[str, object] = field(default_factory=dict)
    success: bool = False


@dataclass(frozen=True)
class DatabaseConnectionContext(AbstractContext):
    KIND: ClassVar[str] = "database_connection"
    SCHEMA_REF: ClassVar[str] = "schemas/database_connection.json"

    driver: str
    host: str
    database: str
    connectionTime: float
    pooled: bool = True


@dataclass(frozen=True)
class DatabaseQueryContext(AbstractContext):
    KIND: ClassVar[str] = "database_query"
    SCHEMA_REF: ClassVar[str] = "schemas/database_query.json"

    queryType: str
    table: str
    parameters: Dict[str, object] = field(default_factory=dict)
    executionTime: float = 0.0
    rowCount: int = 0


@dataclass(frozen=True)
class QueryResultContext(AbstractContext):
    KIND: ClassVar[str] = "query_result"
    SCHEMA_REF: ClassVar[str] = "schemas/query_result.json"

    rowCount: int
    executionTime: float


@dataclass(frozen=True)
class OrderCreatedContext(AbstractContext):
    KIND: ClassVar[str] = "business_result"
    SCHEMA_REF: ClassVar[str] = "schemas/business_result.json"

    orderId: str
    total: float
    items: Tuple[str, ...] = ()
    processingTime: float = 0.0


DEMO_RELATIONS: List[Relation] = [
    Relation(
        rel="source",
        href="https://github.com/example/shop/blob/main/src/OrderController.py#L42",
        title="Order controller",
        type="text/x-python",
    ),
    Relation(rel="documentation", href="https://docs.example.com/api/orders"),
]


# =============================================================================
# SCENARIO
# =============================================================================

def run_ecommerce_scenario(log: Optional[SemanticLogger] = None) -> LogDocument:
    """
    POST /api/orders: request -> order validation -> database connection
    -> order insert, with cache/auth/query events along the way.
    """
    log = log or SemanticLogger()

    request_id = log.open(HttpRequestContext(
        method="POST",
        uri="/api/orders",
        headers={"Content-Type": "application/json", "X-Request-ID": "req_0001"},
        body={"customerId": 12345, "items": ["P001", "P045"]},
        clientIp="192.168.1.100",
    ))
    log.event(CacheOperationContext(
        operation="get", key="jwt_blacklist_check", hit=True, duration=0.002, ttl=3600,
    ))
    log.event(AuthenticationContext(
        method="JWT", token="user_12345", claims={"role": "customer"},
    ))

    validation_id = log.open(BusinessLogicContext(
        operation="order_validation",
        inputs={"customerId": 12345, "total": 209.97},
    ))

    connection_id = log.open(DatabaseConnectionContext(
        driver="mysql",
        host="db-cluster-1.example.com",
        database="ecommerce_prod",
        connectionTime=0.045,
    ))
    log.event(DatabaseQueryContext(
        queryType="SELECT", table="customers",
        parameters={"id": 12345, "active": 1}, executionTime=0.012, rowCount=1,
    ))
    log.event(DatabaseQueryContext(
        queryType="UPDATE", table="inventory",
        parameters={"product_id": "P001,P045"}, executionTime=0.035, rowCount=2,
    ))

    insert_id = log.open(DatabaseQueryContext(queryType="INSERT", table="orders"))
    log.close(QueryResultContext(rowCount=1, executionTime=0.018), insert_id)

    log.close(QueryResultContext(rowCount=4, executionTime=0.11), connection_id)
    log.close(OrderCreatedContext(
        orderId="ORD-2024-0001", total=209.97, items=("P001", "P045"), processingTime=0.16,
    ), validation_id)
    log.close(HttpResponseContext(
        statusCode=201, contentType="application/json", responseTime=0.21,
    ), request_id)

    return log.flush(DEMO_RELATIONS)
