"""
Tests for the advisory TLD distribution report.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from src.domains.suggestions.models import SuggestionResult
from src.evaluations.tld_distribution_eval import evaluate_tld_distribution
from src.ui.suggestion_display import render_suggestions, render_tld_distribution, suggestion_rows


def _results(tlds: list[str]) -> list[SuggestionResult]:
    return [SuggestionResult(f"brand{i}", tld, 100 - i) for i, tld in enumerate(tlds)]


def test_distribution_close_to_advice_passes() -> None:
    results = _results(["hu"] * 4 + ["com"] * 3 + ["net"] * 3)
    r = evaluate_tld_distribution(results, ["hu", "com", "net"])
    assert r["passed"]
    assert r["score"] == 1.0
    assert r["shares"] == {"hu": 0.4, "com": 0.3, "net": 0.3}
    assert r["issues"] == []


def test_skewed_distribution_is_reported_not_fixed() -> None:
    results = _results(["com"] * 10)
    r = evaluate_tld_distribution(results, [".hu", ".com"])
    assert not r["passed"]
    assert len(r["issues"]) == 2
    assert any(".hu: 0%" in issue for issue in r["issues"])
    assert len(results) == 10


def test_unrequested_tlds_flagged() -> None:
    r = evaluate_tld_distribution(_results(["com", "xyz"]), ["com"])
    assert r["passed"]
    assert "Unrequested TLDs: .xyz" in r["issues"]
    assert r["score"] < 1.0


def test_no_results() -> None:
    r = evaluate_tld_distribution([], ["com", "net"])
    assert not r["passed"]
    assert r["details"]["total"] == 0


def test_suggestion_rows() -> None:
    rows = suggestion_rows(_results(["com"]))
    assert rows == [{"Domain": "brand0.com", "Score": 100, "Status": "✅ available"}]


@patch("src.ui.suggestion_display.st")
def test_render_suggestions_table(mock_st: MagicMock) -> None:
    render_suggestions(_results(["com", "io"]))
    mock_st.subheader.assert_called_once_with("💡 2 suggestions")
    rows = mock_st.dataframe.call_args.args[0]
    assert [row["Domain"] for row in rows] == ["brand0.com", "brand1.io"]


@patch("src.ui.suggestion_display.st")
def test_render_suggestions_empty(mock_st: MagicMock) -> None:
    render_suggestions([])
    mock_st.info.assert_called_once()
    mock_st.dataframe.assert_not_called()


@patch("src.ui.suggestion_display.st")
def test_render_tld_distribution(mock_st: MagicMock) -> None:
    report = evaluate_tld_distribution(_results(["com"] * 10), ["hu", "com"])
    render_tld_distribution(report)
    lines = [c.args[0] for c in mock_st.markdown.call_args_list]
    assert lines[0].startswith("⚠️ **TLD mix differs from prompt advice**")
    assert lines[-1].strip() == "└─ .com: 100%"
    assert mock_st.caption.call_count == 2
