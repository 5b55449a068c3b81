"""
Streamlit rendering for domain suggestions and the TLD distribution report.
"""

from __future__ import annotations

from typing import Any, Sequence

import streamlit as st

from src.domains.suggestions.models import STATUS_AVAILABLE, SuggestionResult


def suggestion_rows(results: Sequence[SuggestionResult]) -> list[dict[str, Any]]:
    """Table rows: domain, score, status. Shown in emission (score) order."""
    return [
        {
            "Domain": r.domain,
            "Score": r.score,
            "Status": "✅ available" if r.status == STATUS_AVAILABLE else "❌ registered",
        }
        for r in results
    ]


def render_suggestions(results: Sequence[SuggestionResult]) -> None:
    if not results:
        st.info("No suggestions. Check the debug panel in the sidebar for the last error.")
        return
    st.subheader(f"💡 {len(results)} suggestions")
    st.dataframe(suggestion_rows(results), use_container_width=True, hide_index=True)


def render_tld_distribution(result: dict[str, Any]) -> None:
    """Display the TLD distribution evaluation (advisory, never enforced)."""
    passed = result.get("passed", False)
    score_pct = int(result.get("score", 0.0) * 100)
    shares = result.get("shares", {})
    issues = result.get("issues", [])

    status_icon = "✅" if passed else "⚠️"
    status_text = "matches prompt advice" if passed else "differs from prompt advice"
    st.markdown(f"{status_icon} **TLD mix {status_text}** (Score: {score_pct}%)")

    items = list(shares.items())
    for i, (tld, share) in enumerate(items):
        branch = "└─" if i == len(items) - 1 else "├─"
        st.markdown(f"   {branch} .{tld}: {int(share * 100)}%")

    if issues:
        for issue in issues[:5]:
            st.caption(issue)
