"""
Turn raw `label.tld` strings from the model into scored suggestions.

This is where the IDN policy is enforced: an ASCII search never yields IDN
labels, whatever the prompt told the model.
"""

from __future__ import annotations

from typing import Iterable

from src.domains.suggestions.models import STATUS_AVAILABLE, CandidateDomain, SuggestionResult
from src.domains.suggestions.validator import is_idn, is_valid_label

MAX_SCORE = 100


def filter_suggestions(
    domains: Iterable[str],
    search_term: str,
    start_score: int = MAX_SCORE,
) -> list[SuggestionResult]:
    """
    Keep valid candidates in their original order.

    Scores start at start_score and drop by one per emitted result. There is no
    floor: a list longer than start_score produces zero and negative scores.
    """
    ascii_search = not is_idn(search_term)
    score = start_score
    results: list[SuggestionResult] = []
    for domain in domains:
        candidate = CandidateDomain.parse(domain.strip().lower())
        if candidate is None:
            continue
        if not is_valid_label(candidate.label):
            continue
        if ascii_search and is_idn(candidate.label):
            continue
        results.append(SuggestionResult(candidate.label, candidate.tld, score, STATUS_AVAILABLE))
        score -= 1
    return results
