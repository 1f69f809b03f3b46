"""
Log File Access

Read-only access to session documents saved as JSON files.
Used by the CLI and the API; the logger itself never touches disk.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List
import glob
import json
import logging
import os

from .config import DEFAULT_LOG_PATTERN
from .contracts.errors import LogDataError, LogFileNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogFileInfo:
    """Immutable listing entry for one document file."""
    name: str
    path: str
    size: int
    modified_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "size": self.size,
            "modified_at": self.modified_at.isoformat(),
        }


def list_log_files(log_dir: str, pattern: str = DEFAULT_LOG_PATTERN) -> List[LogFileInfo]:
    """Document files in `log_dir`, newest first."""
    if not os.path.isdir(log_dir):
        raise LogFileNotFoundError(log_dir)

    files = []
    for path in glob.glob(os.path.join(log_dir, pattern)):
        try:
            stat = os.stat(path)
        except OSError as e:
            logger.warning("skipping %s: %s", path, e)
            continue
        files.append(LogFileInfo(
            name=os.path.basename(path),
            path=path,
            size=stat.st_size,
            modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        ))

    files.sort(key=lambda f: (f.modified_at, f.name), reverse=True)
    return files


def load_document(path: str) -> Dict[str, Any]:
    """Load a JSON document; raises LogFileNotFoundError or LogDataError."""
    if not os.path.isfile(path):
        raise LogFileNotFoundError(path)

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise LogDataError(f"invalid JSON in {os.path.basename(path)}: {e}") from e

    if not isinstance(data, dict):
        raise LogDataError("document must be a JSON object")
    return data
