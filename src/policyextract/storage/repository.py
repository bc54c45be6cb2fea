"""SQLite-based store for plan overrides and the extraction log."""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from policyextract.core.errors import ConfigurationError
from policyextract.core.types import RunStatus
from policyextract.storage.converters import row_to_fields, row_to_log_entry
from policyextract.storage.schema import INIT_SCHEMA


if TYPE_CHECKING:
    from collections.abc import Iterator

    from policyextract.core.models import LogEntry


logger = logging.getLogger(__name__)


class PayerRepository:
    """SQLite repository for dynamic plan field lists and run history."""

    def __init__(self, db_path: str | Path = "policyextract.db") -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._connection() as conn:
            conn.executescript(INIT_SCHEMA)

    def set_fields(self, plan: str, fields: list[str]) -> None:
        names = [f.strip() for f in fields if f.strip()]
        if not names:
            msg = f"Plan {plan} needs at least one field"
            raise ConfigurationError(msg)
        if len(set(names)) != len(names):
            msg = f"Plan {plan} has duplicate field names"
            raise ConfigurationError(msg)
        now = datetime.now().isoformat()
        with self._connection() as conn:
            conn.execute(
                """INSERT INTO payer_fields (plan, fields, created_at, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(plan) DO UPDATE SET fields = excluded.fields,
                    updated_at = excluded.updated_at""",
                (plan, json.dumps(names), now, now),
            )
        logger.info("Stored %d fields for plan %s", len(names), plan)

    def get_fields(self, plan: str) -> list[str] | None:
        with self._connection() as conn:
            row = conn.execute("SELECT fields FROM payer_fields WHERE plan = ?", (plan,)).fetchone()
        return row_to_fields(row) if row else None

    def delete_fields(self, plan: str) -> bool:
        with self._connection() as conn:
            result = conn.execute("DELETE FROM payer_fields WHERE plan = ?", (plan,))
            return result.rowcount > 0

    def list_plans(self) -> dict[str, list[str]]:
        with self._connection() as conn:
            rows = conn.execute("SELECT plan, fields FROM payer_fields ORDER BY plan").fetchall()
        return {row["plan"]: row_to_fields(row) for row in rows}

    def log_extraction(
        self, source: str, status: RunStatus, plan: str | None = None, details: str | None = None
    ) -> int:
        with self._connection() as conn:
            cursor = conn.execute(
                """INSERT INTO extraction_log (created_at, status, source, plan, details)
                VALUES (?, ?, ?, ?, ?)""",
                (datetime.now().isoformat(), status.value, source, plan, details),
            )
            return int(cursor.lastrowid or 0)

    def recent_logs(self, limit: int = 20, status: RunStatus | None = None) -> list[LogEntry]:
        query = "SELECT * FROM extraction_log"
        params: list[Any] = []
        if status is not None:
            query += " WHERE status = ?"
            params.append(status.value)
        query += " ORDER BY id DESC LIMIT ?"
        params.append(limit)
        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()
        return [row_to_log_entry(r) for r in rows]

    def clear_logs(self) -> int:
        with self._connection() as conn:
            result = conn.execute("DELETE FROM extraction_log")
            return result.rowcount


class RepositorySink:
    """Event sink that writes extraction lifecycle events to the log table."""

    _STATUS = {
        "extraction_started": RunStatus.STARTED,
        "extraction_succeeded": RunStatus.SUCCESS,
        "extraction_failed": RunStatus.ERROR,
    }

    def __init__(self, repository: PayerRepository) -> None:
        self.repository = repository

    def record(self, event: str, fields: dict[str, Any]) -> None:
        status = self._STATUS.get(event)
        if status is None:
            return
        self.repository.log_extraction(
            source=str(fields.get("source", "")),
            status=status,
            plan=fields.get("plan"),
            details=fields.get("details"),
        )
