"""Converters for database rows to model objects."""

from __future__ import annotations

import json
from datetime import datetime
from typing import TYPE_CHECKING

from policyextract.core.models import LogEntry
from policyextract.core.types import RunStatus


if TYPE_CHECKING:
    import sqlite3


def row_to_log_entry(row: sqlite3.Row) -> LogEntry:
    """Convert database row to LogEntry object."""
    return LogEntry(
        id=row["id"],
        created_at=datetime.fromisoformat(row["created_at"]),
        status=RunStatus(row["status"]),
        source=row["source"],
        plan=row["plan"],
        details=row["details"],
    )


def row_to_fields(row: sqlite3.Row) -> list[str]:
    """Decode the JSON field list stored for a plan."""
    fields = json.loads(row["fields"])
    return [str(f) for f in fields]
