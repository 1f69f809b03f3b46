"""
Log Data Parser

Turns a serialised session document into a TreeNode hierarchy:
the open chain becomes nested nodes, events hang under the node named
by their correlationId (or under the root when it cannot be found).
"""

from __future__ import annotations
from typing import Any, Dict, Mapping, Optional, Sequence

from ..config import TIME_FIELDS
from ..contracts.errors import LogDataError
from .node import TreeNode


class LogDataParser:

    def __init__(self, time_fields: Sequence[str] = TIME_FIELDS):
        self._time_fields = tuple(time_fields)

    def parse(self, document: Mapping[str, Any]) -> TreeNode:
        if not isinstance(document, Mapping):
            raise LogDataError("document must be a JSON object")

        open_data = document.get("open")
        if not isinstance(open_data, Mapping):
            raise LogDataError("missing open section")

        close_times = self._index_close_times(document.get("close"))
        root = self._parse_open(open_data, close_times)

        events = document.get("events")
        if isinstance(events, list):
            self._attach_events(root, events)

        return root

    def _parse_open(self, entry: Mapping[str, Any], close_times: Dict[str, float]) -> TreeNode:
        node_id = str(entry.get("id", "unknown"))
        data = _as_data(entry.get("data"))

        execution_time = self.extract_execution_time(data)
        if execution_time is None:
            execution_time = close_times.get(node_id, 0.0)

        node = TreeNode(
            id=node_id,
            kind=str(entry.get("kind", "unknown")),
            data=data,
            execution_time=execution_time,
        )

        nested = entry.get("open")
        if isinstance(nested, Mapping):
            node.add_child(self._parse_open(nested, close_times))

        return node

    def _attach_events(self, root: TreeNode, events: Sequence[Any]):
        for event in events:
            if not isinstance(event, Mapping):
                continue
            data = _as_data(event.get("data"))
            node = TreeNode(
                id=str(event.get("id", "unknown")),
                kind=str(event.get("kind", "unknown")),
                data=data,
                execution_time=self.extract_execution_time(data) or 0.0,
            )
            parent = root.find(event.get("correlationId")) or root
            parent.add_child(node)

    def _index_close_times(self, close: Any) -> Dict[str, float]:
        """Map correlationId -> execution time for every close in the chain."""
        times: Dict[str, float] = {}
        while isinstance(close, Mapping):
            correlation_id = close.get("correlationId")
            value = self.extract_execution_time(_as_data(close.get("data")))
            if correlation_id is not None and value is not None:
                times[str(correlation_id)] = value
            close = close.get("close")
        return times

    def extract_execution_time(self, data: Mapping[str, Any]) -> Optional[float]:
        """First numeric time field in `data` (seconds), or None."""
        for key in self._time_fields:
            value = data.get(key)
            if isinstance(value, bool):
                continue
            if isinstance(value, (int, float)):
                return float(value)
            if isinstance(value, str):
                try:
                    return float(value)
                except ValueError:
                    continue
        return None


def _as_data(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}
