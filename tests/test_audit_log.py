"""
Tests for the audit log and secret redaction in logs.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from src.infrastructure.audit.audit_log import AuditLog
from src.utils.logger import SecretRedactingFilter, redact_secrets

SECRET = "AIzaTopSecret"


def test_audit_log_writes_redacted_json_lines(tmp_path: Path) -> None:
    path = tmp_path / "audit" / "calls.jsonl"
    audit = AuditLog(path)

    audit.log_call(
        "aidomainfinder",
        "GenerateSuggestions_Error",
        {"searchTerm": "brand", "url": f"https://x/models/m?key={SECRET}"},
        f'{{"error": "bad key {SECRET}"}}',
        f"Transport error: key={SECRET}",
        [SECRET],
    )
    audit.log_call("aidomainfinder", "GenerateSuggestions", {"searchTerm": "b"}, "{}", ["b.com"], [SECRET])

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert SECRET not in path.read_text(encoding="utf-8")
    first = json.loads(lines[0])
    assert first["action"] == "GenerateSuggestions_Error"
    assert first["request"]["url"].endswith("key=***")
    assert first["processed"] == "Transport error: key=***"
    assert json.loads(lines[1])["processed"] == ["b.com"]


def test_audit_log_without_path_keeps_records() -> None:
    audit = AuditLog(keep=2)
    for i in range(3):
        audit.log_call("m", "GenerateSuggestions", {"i": i}, "", [], None)
    assert [r["request"]["i"] for r in audit.records] == [1, 2]


def test_redact_secrets_ignores_empty_values() -> None:
    assert redact_secrets("abc", ["", None]) == "abc"  # type: ignore[list-item]
    assert redact_secrets("a-abc-a", ["abc"]) == "a-***-a"


def test_log_filter_masks_registered_secret() -> None:
    flt = SecretRedactingFilter([SECRET])
    record = logging.LogRecord("domain_finder", logging.INFO, __file__, 1, "url=%s", (f"?key={SECRET}",), None)
    assert flt.filter(record)
    assert record.getMessage() == "url=?key=***"
