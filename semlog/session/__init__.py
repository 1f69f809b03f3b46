"""
Session layer: id allocation, the open/event/close/flush state machine,
and flush-time tree reconstruction.
"""

from .allocator import IdAllocator
from .logger import SemanticLogger
from .reconstruction import build_nested_close, build_nested_open

__all__ = [
    "IdAllocator",
    "SemanticLogger",
    "build_nested_open",
    "build_nested_close",
]
