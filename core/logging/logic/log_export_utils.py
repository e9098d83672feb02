"""
log_export_utils.py

Serialises log entries for export (clipboard / file).
"""

from __future__ import annotations

import json
from typing import Iterable

from core.logging.models.log_entry import LogEntry


def logs_to_json(logs: Iterable[LogEntry]) -> str:
    return json.dumps([log.as_dict() for log in logs], indent=4, ensure_ascii=False)
