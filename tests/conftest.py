"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import fitz
import pytest

from policyextract.config.fields import ALKOOT_SCHEMA, QLM_SCHEMA
from policyextract.config.settings import Settings
from policyextract.core.events import MemorySink
from policyextract.core.models import Document
from policyextract.storage.repository import PayerRepository


if TYPE_CHECKING:
    from collections.abc import Callable

    from policyextract.core.models import PlanSchema


ALKOOT_TEXT = """Policy Schedule
Policy Number: ALK-001
Category: Employee
Co-insurance on all inpatient treatment: 20 %
Deductible on consultation: 50
Pregnancy & Childbirth: N/A
Dental Benefit: QAR500 per year
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of the tests."""
    for name in (
        "LLM_PROVIDER",
        "OPENAI_API_KEY",
        "OPENAI_MODEL",
        "ANTHROPIC_API_KEY",
        "ANTHROPIC_MODEL",
        "EXTRACTION_TIMEOUT",
        "EXTRACTION_POLL_INTERVAL",
        "EXTRACTION_CURRENCY",
        "POLICYEXTRACT_DB",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def qlm_schema() -> PlanSchema:
    return QLM_SCHEMA


@pytest.fixture
def alkoot_schema() -> PlanSchema:
    return ALKOOT_SCHEMA


@pytest.fixture
def repository(tmp_path: Path) -> PayerRepository:
    return PayerRepository(tmp_path / "store.db")


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "cli.db"


@pytest.fixture
def alkoot_document() -> Document:
    return Document(name="alkoot.pdf", data=b"%PDF-1.4", page_count=1, text=ALKOOT_TEXT)


@pytest.fixture
def make_pdf(tmp_path: Path) -> Callable[[str, list[str]], Path]:
    """Write a one-page PDF with one text line per entry."""

    def _make(name: str, lines: list[str]) -> Path:
        path = tmp_path / name
        doc = fitz.open()
        page = doc.new_page()
        for i, line in enumerate(lines):
            page.insert_text((72, 72 + 16 * i), line)
        doc.save(path)
        doc.close()
        return path

    return _make
