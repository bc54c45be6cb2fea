"""Tests for the command-line interface."""

from __future__ import annotations

import json

import pytest

from policyextract.cli import main
from policyextract.orchestrator.pipeline import Pipeline
from policyextract.storage.repository import PayerRepository


def test_no_command_prints_help(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 0
    assert "extract" in capsys.readouterr().out


def test_plan_commands(db_path) -> None:
    main(["add-plan", "Daman", "Policy Number", "Network", "--db", str(db_path)])
    assert PayerRepository(db_path).get_fields("Daman") == ["Policy Number", "Network"]
    main(["plans", "--db", str(db_path)])
    main(["remove-plan", "Daman", "--db", str(db_path)])
    assert PayerRepository(db_path).get_fields("Daman") is None


def test_extract_mock(db_path, tmp_path, make_pdf) -> None:
    pdf = make_pdf("policy.pdf", ["Policy Number: ALK-001", "Deductible on consultation: 75"])
    out = tmp_path / "result.json"
    main(["extract", str(pdf), "--plan", "ALKOOT", "--mock", "--db", str(db_path), "--json", str(out)])
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["Policy Number"] == "ALK-001"
    assert data["Deductible on consultation"] == "QAR 75"
    assert data["Category"] is None
    main(["log", "--db", str(db_path)])
    assert len(PayerRepository(db_path).recent_logs()) == 2


def test_compare_mock(db_path, tmp_path, make_pdf) -> None:
    left = make_pdf("left.pdf", ["Policy Number: ALK-001"])
    right = make_pdf("right.pdf", ["Policy Number: ALK-002"])
    html, out = tmp_path / "report.html", tmp_path / "report.json"
    main([
        "compare", str(left), str(right), "--plan", "ALKOOT", "--mock",
        "--db", str(db_path), "--html", str(html), "--json", str(out),
    ])
    records = json.loads(out.read_text(encoding="utf-8"))
    assert records[0] == {
        "field": "Policy Number",
        "file1Value": "ALK-001",
        "file2Value": "ALK-002",
        "status": "different",
    }
    assert html.exists()


def test_error_exits_with_one(db_path, tmp_path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["extract", str(tmp_path / "missing.pdf"), "--mock", "--db", str(db_path)])
    assert exc_info.value.code == 1


def test_builtin_plan_override_is_canonicalized(db_path) -> None:
    main(["add-plan", "qlm", "Insured", "Plan", "--db", str(db_path)])
    repo = PayerRepository(db_path)
    assert repo.get_fields("QLM") == ["Insured", "Plan"]
    assert Pipeline(mock=True, repository=repo).resolve_schema("Qlm").field_names == ["Insured", "Plan"]
    main(["remove-plan", " Qlm ", "--db", str(db_path)])
    assert repo.list_plans() == {}
