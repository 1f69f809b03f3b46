"""
Tree Renderer

Plain-text rendering of a session document as a box-drawing tree.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple
import math

from ..config import DEFAULT_MAX_LINES, DEFAULT_TREE_DEPTH
from .node import TreeNode
from .parser import LogDataParser

VERTICAL = "│"
BRANCH = "├"
LAST = "└"
HORIZONTAL = "─"
SPACE = " "


@dataclass(frozen=True)
class RenderConfig:
    """
    max_depth:      deepest level rendered before collapsing to `[...]`
    expand_kinds:   kinds rendered past max_depth anyway
    time_threshold: hide nodes faster than this (seconds)
    show_full_tree: ignore max_depth entirely
    max_lines:      items shown for multi-valued data (0 = no limit)
    """
    max_depth: int = DEFAULT_TREE_DEPTH
    expand_kinds: Tuple[str, ...] = field(default_factory=tuple)
    time_threshold: float = 0.0
    show_full_tree: bool = False
    max_lines: int = DEFAULT_MAX_LINES

    def __post_init__(self):
        if self.max_depth < 0:
            raise ValueError("max_depth must be 0 or greater")
        if self.time_threshold < 0:
            raise ValueError("time_threshold must be 0 or greater")
        if self.max_lines < 0:
            raise ValueError("max_lines must be 0 or greater (0 = no limit)")

    def is_collapsed(self, node: TreeNode, depth: int) -> bool:
        return (
            not self.show_full_tree
            and depth >= self.max_depth
            and node.kind not in self.expand_kinds
        )

    def is_hidden(self, node: TreeNode) -> bool:
        return self.time_threshold > 0 and node.execution_time < self.time_threshold


class TreeRenderer:

    def __init__(self, parser: Optional[LogDataParser] = None):
        self._parser = parser or LogDataParser()

    def render(self, document: Mapping[str, Any], config: RenderConfig) -> str:
        tree = self._parser.parse(document)
        return self.render_tree(tree, config)

    def render_tree(self, tree: TreeNode, config: RenderConfig) -> str:
        lines: List[str] = []
        self._render_node(tree, lines, "", True, config, 0)
        return "\n".join(lines)

    def _render_node(
        self,
        node: TreeNode,
        lines: List[str],
        prefix: str,
        is_last: bool,
        config: RenderConfig,
        depth: int,
    ):
        connector = (LAST if is_last else BRANCH) + HORIZONTAL * 2 + " "

        if config.is_collapsed(node, depth):
            if depth == config.max_depth:
                lines.append(f"{prefix}{connector}{node.kind} [...]")
            return

        if config.is_hidden(node):
            return

        lines.append(prefix + connector + node.display_line(config.max_lines))

        child_prefix = prefix + (SPACE if is_last else VERTICAL) + SPACE * 3
        for index, child in enumerate(node.children):
            self._render_node(
                child, lines, child_prefix, index == len(node.children) - 1, config, depth + 1
            )


def parse_threshold(value: str) -> float:
    """Parse `10ms`, `0.5s` or a bare number of seconds."""
    text = value.strip()
    try:
        if text.endswith("ms"):
            seconds = float(text[:-2]) / 1000
        elif text.endswith("s"):
            seconds = float(text[:-1])
        else:
            seconds = float(text)
    except ValueError:
        raise ValueError(f"Invalid threshold format: {value} (expected: 10ms, 0.5s)") from None

    if not math.isfinite(seconds):
        raise ValueError(f"Invalid threshold format: {value} (expected: 10ms, 0.5s)")
    if seconds < 0:
        raise ValueError("threshold must be 0 or greater")
    return seconds
