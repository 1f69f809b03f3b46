"""
Configuration

Frozen configuration values with environment overrides.
Nothing here is read at import time except the defaults themselves.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple
import os


SEMANTIC_LOG_SCHEMA = "https://koriym.github.io/semantic-logger/schemas/semantic-log.json"

DEFAULT_LOG_DIR = os.path.join("var", "semantic-logs")
DEFAULT_LOG_PATTERN = "semantic-log-*.json"

# Data keys holding an execution time in seconds, in lookup order
TIME_FIELDS: Tuple[str, ...] = (
    "executionTime",
    "responseTime",
    "duration",
    "processingTime",
    "connectionTime",
)

DEFAULT_TREE_DEPTH = 2
DEFAULT_MAX_LINES = 5


@dataclass(frozen=True)
class LoggerConfig:
    """Unified configuration for logger, viewer CLI and API."""
    schema_ref: str = SEMANTIC_LOG_SCHEMA
    log_dir: str = DEFAULT_LOG_DIR
    log_pattern: str = DEFAULT_LOG_PATTERN
    time_fields: Tuple[str, ...] = TIME_FIELDS

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> LoggerConfig:
        """Build config from SEMLOG_* environment variables."""
        env = os.environ if environ is None else environ
        return LoggerConfig(
            schema_ref=env.get("SEMLOG_SCHEMA_REF", SEMANTIC_LOG_SCHEMA),
            log_dir=env.get("SEMLOG_LOG_DIR", DEFAULT_LOG_DIR),
            log_pattern=env.get("SEMLOG_LOG_PATTERN", DEFAULT_LOG_PATTERN),
            time_fields=_split_fields(env.get("SEMLOG_TIME_FIELDS")),
        )


def _split_fields(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return TIME_FIELDS
    fields = tuple(part.strip() for part in value.split(",") if part.strip())
    return fields or TIME_FIELDS
