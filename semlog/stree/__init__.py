"""
Semantic tree viewer.

Read-only consumer of session documents: parses them into a node tree and
renders it as text or HTML. Never writes back into a session.
"""

from .node import TreeNode, format_execution_time
from .parser import LogDataParser
from .renderer import RenderConfig, TreeRenderer, parse_threshold
from .html import HtmlRenderer

__all__ = [
    "TreeNode",
    "format_execution_time",
    "LogDataParser",
    "RenderConfig",
    "TreeRenderer",
    "parse_threshold",
    "HtmlRenderer",
]
