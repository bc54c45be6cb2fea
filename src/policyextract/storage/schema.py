"""Database schema initialization for the plan and log store."""

from __future__ import annotations


INIT_SCHEMA = """
-- Dynamic plan field lists, consulted before the static plan table
CREATE TABLE IF NOT EXISTS payer_fields (
    plan TEXT PRIMARY KEY,
    fields TEXT NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Extraction audit log
CREATE TABLE IF NOT EXISTS extraction_log (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TIMESTAMP NOT NULL,
    status TEXT NOT NULL,
    source TEXT NOT NULL,
    plan TEXT,
    details TEXT
);

-- Indexes
CREATE INDEX IF NOT EXISTS idx_log_created ON extraction_log(created_at);
CREATE INDEX IF NOT EXISTS idx_log_status ON extraction_log(status);
"""
