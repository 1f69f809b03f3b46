"""
Tree Node

Display model for one operation or event in the semantic tree viewer.
Nodes are built by LogDataParser and rendered by the text/HTML renderers.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import urlparse

from ..config import DEFAULT_MAX_LINES


@dataclass
class TreeNode:
    id: str
    kind: str
    data: Mapping[str, Any]
    execution_time: float = 0.0
    children: List[TreeNode] = field(default_factory=list)

    def add_child(self, child: TreeNode):
        self.children.append(child)

    def find(self, node_id: Optional[str]) -> Optional[TreeNode]:
        """Depth-first lookup by id."""
        if node_id is None:
            return None
        if self.id == node_id:
            return self
        for child in self.children:
            found = child.find(node_id)
            if found is not None:
                return found
        return None

    def display_line(self, max_lines: int = DEFAULT_MAX_LINES) -> str:
        info = self.context_info(max_lines)
        time_display = format_execution_time(self.execution_time)
        if info:
            return f"{self.kind}::{info} [{time_display}]"
        return f"{self.kind} [{time_display}]"

    def context_info(self, max_lines: int = DEFAULT_MAX_LINES) -> str:
        """Short, kind-specific summary of the node data."""
        summarize = _SUMMARIES.get(self.kind)
        if summarize is not None:
            return summarize(self.data, max_lines)

        for key in ("operation", "method", "name"):
            if key in self.data:
                return str(self.data[key])
        return ""


# =============================================================================
# FORMATTING HELPERS
# =============================================================================

def format_execution_time(seconds: float) -> str:
    if seconds < 0.001:
        return f"{seconds * 1_000_000:.1f}μs"
    if seconds < 1.0:
        return f"{seconds * 1000:.1f}ms"
    return f"{seconds:.1f}s"


def format_bytes(value: Any) -> str:
    try:
        size = float(value)
    except (TypeError, ValueError):
        return "0B"
    if size < 1024:
        return f"{size:.0f}B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f}KB"
    return f"{size / (1024 * 1024):.1f}MB"


def shorten_url(url: str) -> str:
    if len(url) <= 40:
        return url
    parsed = urlparse(url)
    if parsed.hostname:
        return parsed.hostname + parsed.path
    return url[:37] + "..."


def truncate_message(message: str) -> str:
    if len(message) <= 60:
        return message
    return message[:57] + "..."


def format_multi_line(data: Any, max_lines: int) -> str:
    """Render a mapping/list as `k: v, ...`, limited to `max_lines` items (0 = all)."""
    if isinstance(data, Mapping):
        items = list(data.items())
    elif isinstance(data, (list, tuple)):
        items = [(None, value) for value in data]
    else:
        return str(data)

    parts = []
    for index, (key, value) in enumerate(items):
        if max_lines > 0 and index >= max_lines:
            parts.append(f"... ({len(items) - max_lines} more)")
            break
        shown = value if isinstance(value, (str, int, float, bool)) else "[complex]"
        parts.append(f"{key}: {shown}" if key is not None else str(shown))
    return ", ".join(parts)


# =============================================================================
# KIND-SPECIFIC SUMMARIES
# =============================================================================

def _http_request(data, max_lines):
    method = data.get("method", "")
    uri = data.get("uri", "")
    headers = data.get("headers")
    if headers:
        return f"{method} {uri} (headers: {format_multi_line(headers, max_lines)})"
    return f"{method} {uri}"


def _http_response(data, max_lines):
    return f"Status {data.get('statusCode', '')}"


def _database_connection(data, max_lines):
    return f"{data.get('host', '')}/{data.get('database', '')}"


def _database_query(data, max_lines):
    query_type = data.get("queryType", "")
    table = data.get("table", "")
    parameters = data.get("parameters")
    if parameters:
        return f"{query_type} {table} (params: {format_multi_line(parameters, max_lines)})"
    return f"{query_type} {table}"


def _external_api(data, max_lines):
    return f"{data.get('service', '')} {shorten_url(str(data.get('endpoint', '')))}"


def _cache_operation(data, max_lines):
    hit = "HIT" if data.get("hit") else "MISS"
    return f"{data.get('operation', '')} {data.get('key', '')} ({hit})"


def _file_processing(data, max_lines):
    return f"{data.get('operation', '')} {data.get('filename', '')}"


def _authentication(data, max_lines):
    status = "SUCCESS" if data.get("token") else "FAILED"
    return f"{data.get('method', '')} ({status})"


def _business_logic(data, max_lines):
    status = "SUCCESS" if data.get("success") else "FAILED"
    return f"{data.get('operation', '')} ({status})"


def _error(data, max_lines):
    return f"{data.get('errorType', '')}: {truncate_message(str(data.get('message', '')))}"


def _performance_metrics(data, max_lines):
    queries = data.get("databaseQueries", 0)
    return f"{queries} queries, {format_bytes(data.get('memoryUsed', 0))} memory"


_SUMMARIES: Dict[str, Callable[[Mapping[str, Any], int], str]] = {
    "http_request": _http_request,
    "http_response": _http_response,
    "database_connection": _database_connection,
    "database_query": _database_query,
    "complex_query": _database_query,
    "external_api_request": _external_api,
    "cache_operation": _cache_operation,
    "file_processing": _file_processing,
    "authentication_request": _authentication,
    "authentication": _authentication,
    "business_logic": _business_logic,
    "error": _error,
    "performance_metrics": _performance_metrics,
}
