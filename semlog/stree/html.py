"""
HTML Renderer

Standalone, collapsible HTML page for a parsed semantic tree.
All document content is escaped.
"""

from __future__ import annotations
from html import escape
from typing import List

from .node import TreeNode, format_execution_time
from .renderer import RenderConfig

KIND_CLASSES = {
    "http_request": "http",
    "http_response": "http",
    "database_connection": "database",
    "database_query": "database",
    "complex_query": "database",
    "external_api_request": "api",
    "authentication_request": "auth",
    "authentication": "auth",
    "cache_operation": "cache",
    "business_logic": "business",
    "file_processing": "file",
    "performance_metrics": "metrics",
    "error": "error",
}

PAGE_HEADER = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Semantic Tree Visualization</title>
    <style>
        body { font-family: monospace; margin: 20px; }
        .tree-node { margin-left: 1.5em; }
        .children.collapsed { display: none; }
        .toggle { cursor: pointer; }
        .timing.fast { color: #2e7d32; }
        .timing.normal { color: #1565c0; }
        .timing.slow { color: #ef6c00; }
        .timing.very-slow { color: #c62828; font-weight: bold; }
    </style>
</head>
<body>
    <h1>Semantic Tree Visualization</h1>
"""

PAGE_FOOTER = """    <script>
        function toggleNode(toggle) {
            const children = toggle.parentElement.parentElement.querySelector('.children');
            if (children) {
                children.classList.toggle('collapsed');
                toggle.textContent = children.classList.contains('collapsed') ? '\\u25b6' : '\\u25bc';
            }
        }
    </script>
</body>
</html>
"""


def timing_class(seconds: float) -> str:
    if seconds < 0.1:
        return "fast"
    if seconds < 0.5:
        return "normal"
    if seconds < 1.0:
        return "slow"
    return "very-slow"


class HtmlRenderer:

    def render(self, tree: TreeNode, config: RenderConfig) -> str:
        parts: List[str] = [PAGE_HEADER, '<div class="semantic-tree">\n']
        self._render_node(tree, config, 0, parts)
        parts.append("</div>\n")
        parts.append(PAGE_FOOTER)
        return "".join(parts)

    def _render_node(self, node: TreeNode, config: RenderConfig, depth: int, parts: List[str]):
        indent = "    " * (depth + 1)
        kind = escape(node.kind)
        kind_class = KIND_CLASSES.get(node.kind, "default")

        if config.is_collapsed(node, depth):
            if depth == config.max_depth:
                parts.append(
                    f'{indent}<div class="tree-node collapsed" data-kind="{kind}">'
                    f'<span class="node-type {kind_class}">{kind}</span> '
                    f'<span class="timing collapsed">[...]</span></div>\n'
                )
            return

        if config.is_hidden(node):
            return

        has_children = bool(node.children)
        node_class = "has-children" if has_children else "leaf-node"
        parts.append(
            f'{indent}<div class="tree-node {node_class}" data-kind="{kind}" '
            f'data-time="{node.execution_time:.3f}">\n'
        )

        parts.append(f'{indent}    <div class="node-header">')
        if has_children:
            parts.append('<span class="toggle" onclick="toggleNode(this)">&#9660;</span> ')
        parts.append(f'<span class="node-type {kind_class}">{kind}</span> ')
        info = node.context_info(config.max_lines)
        if info:
            parts.append(f'<span class="node-info">{escape(info)}</span> ')
        parts.append(
            f'<span class="timing {timing_class(node.execution_time)}">'
            f'[{escape(format_execution_time(node.execution_time))}]</span>'
        )
        parts.append("</div>\n")

        if has_children:
            parts.append(f'{indent}    <div class="children">\n')
            for child in node.children:
                self._render_node(child, config, depth + 1, parts)
            parts.append(f"{indent}    </div>\n")

        parts.append(f"{indent}</div>\n")
