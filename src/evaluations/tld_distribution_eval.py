"""
TLD distribution evaluation: compare suggested TLD shares with the prompt's advice.

The prompt asks the model for ~40% first TLD and ~25% second TLD. Nothing enforces
that; this report only shows how closely the model followed it.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Sequence

from src.domains.suggestions.models import SuggestionResult
from src.domains.suggestions.prompt_builder import FIRST_TLD_SHARE, SECOND_TLD_SHARE, normalize_tld


def evaluate_tld_distribution(
    results: Sequence[SuggestionResult],
    tlds: Sequence[str],
    tolerance: float = 0.15,
) -> dict[str, Any]:
    """
    Measure per-TLD share of the suggestions.

    Checks:
    - First TLD within tolerance of 40%
    - Second TLD within tolerance of 25%
    - Every suggested TLD was one of the requested TLDs

    Args:
        results: Filtered suggestions.
        tlds: Requested TLDs in priority order.
        tolerance: Allowed absolute deviation from each target share (0.15 = 15 points).

    Returns:
        Dict with passed (bool), score (0.0-1.0), shares (tld -> fraction) and issues.
    """
    wanted = [normalize_tld(t) for t in tlds if normalize_tld(t)]
    counts = Counter(r.tld for r in results)
    total = sum(counts.values())
    shares = {tld: round(n / total, 2) for tld, n in counts.most_common()} if total else {}

    issues: list[str] = []
    if not total:
        return {
            "passed": False,
            "score": 0.0,
            "shares": shares,
            "issues": ["No suggestions to evaluate"],
            "details": {"total": 0, "requested_tlds": wanted},
        }

    targets: list[tuple[str, float]] = []
    if len(wanted) >= 2:
        targets = [(wanted[0], FIRST_TLD_SHARE / 100), (wanted[1], SECOND_TLD_SHARE / 100)]

    off_target = 0
    for tld, target in targets:
        actual = counts.get(tld, 0) / total
        if abs(actual - target) > tolerance:
            off_target += 1
            issues.append(f".{tld}: {round(actual * 100)}% of suggestions (advised ~{round(target * 100)}%)")

    unexpected = sorted(t for t in counts if wanted and t not in wanted)
    if unexpected:
        issues.append("Unrequested TLDs: " + ", ".join(f".{t}" for t in unexpected))

    passed = off_target == 0
    score = max(0.0, 1.0 - off_target * 0.3 - (0.2 if unexpected else 0.0))
    return {
        "passed": passed,
        "score": round(score, 2),
        "shares": shares,
        "issues": issues,
        "details": {"total": total, "requested_tlds": wanted},
    }
