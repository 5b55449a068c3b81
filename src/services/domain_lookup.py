"""
Host-facing entry points: AI domain suggestions and the availability stub.

`get_domain_suggestions` is the integration boundary. Whatever goes wrong
below it ends up in the log and the audit trail, never in front of the user:
the caller receives an empty list.
"""

from __future__ import annotations

import traceback
from typing import Any, Sequence

from src.domains.suggestions.models import STATUS_REGISTERED, Configuration, SuggestionResult
from src.domains.suggestions.prompt_builder import normalize_tld
from src.domains.suggestions.rate_limiter import RateLimiter
from src.domains.suggestions.result_filter import filter_suggestions
from src.infrastructure.audit.audit_log import MODULE_NAME, AuditLog, AuditSink
from src.infrastructure.counters.counter_store import CounterStore
from src.utils.config import audit_log_path, build_counter_store, load_configuration
from src.utils.logger import get_logger

logger = get_logger()

MODULE_METADATA: dict[str, str] = {
    "display_name": "AI Domain Finder (Gemini)",
    "api_version": "1.1",
}

# Choices offered by the host for the per-search settings
SUGGESTION_COUNT_OPTIONS: tuple[int, ...] = (10, 20, 30, 50)
DEFAULT_SUGGESTION_COUNT = 30

CREATIVITY_OPTIONS: dict[float, str] = {
    0.5: "Conservative",
    0.7: "Balanced",
    1.0: "Creative (Default)",
    1.3: "Very Creative",
    1.5: "Experimental",
}
DEFAULT_CREATIVITY = 1.0


def build_client(
    config: Configuration | None = None,
    *,
    temperature: float | str | None = None,
    store: CounterStore | None = None,
    audit: AuditSink | None = None,
):
    """Wire a GeminiClient from the environment, overriding any piece that is passed in."""
    from src.orchestration.gemini_client import GeminiClient

    config = config or load_configuration(temperature=temperature)
    limiter = RateLimiter(store or build_counter_store(), config.daily_limit, config.minute_limit)
    return GeminiClient(config, limiter, audit=audit or AuditLog(audit_log_path()))


def get_domain_suggestions(
    search_term: str,
    tlds: Sequence[str] | None = None,
    suggestion_count: int = 10,
    temperature: float | str | None = None,
    *,
    client: Any | None = None,
    audit: AuditSink | None = None,
) -> list[SuggestionResult]:
    """
    Generate, validate and score AI domain suggestions.

    Args:
        search_term: User's keyword (IDN allowed).
        tlds: TLDs in priority order ("com" or ".com").
        suggestion_count: Number of suggestions to ask the model for.
        temperature: Creativity override for this request.
        client: Pre-built GeminiClient (tests, or a host that caches one).
        audit: Audit sink used for the catch-all record.

    Returns:
        Scored suggestions with status "available", or [] on any failure.
    """
    search_term = search_term or ""
    tlds = [normalize_tld(t) for t in (tlds or []) if normalize_tld(t)]
    if not search_term.strip():
        return []

    try:
        if client is None:
            client = build_client(temperature=temperature, audit=audit)
        domains = client.generate(search_term, int(suggestion_count or 10), tlds)
        if not domains:
            # Failure details are in client.last_error and the audit log
            return []
        results = filter_suggestions(domains, search_term)
        logger.info(
            "Kept %d of %d suggested domains for %r", len(results), len(domains), search_term
        )
        return results
    except Exception as e:
        # No exc_info: the redaction filter only rewrites the message text
        tb = traceback.format_exc()
        logger.error("Domain suggestions failed for %r: %s\n%s", search_term, e, tb)
        sink = audit or getattr(client, "_audit", None) or AuditLog()
        api_key = getattr(getattr(client, "config", None), "api_key", "")
        sink.log_call(
            MODULE_NAME,
            "GetDomainSuggestions",
            {"searchTerm": search_term, "tlds": tlds, "suggestionCount": suggestion_count},
            str(e),
            tb,
            [api_key] if isinstance(api_key, str) and api_key else [],
        )
        return []


def check_availability(
    search_term: str,
    tlds: Sequence[str] | None = None,
    *,
    audit: AuditSink | None = None,
) -> list[SuggestionResult]:
    """
    Debug placeholder for availability lookups.

    Reports every `term.tld` pair as registered. There is no WHOIS/RDAP check
    behind this.
    """
    tlds = [normalize_tld(t) for t in (tlds or []) if normalize_tld(t)]
    if audit is not None:
        audit.log_call(MODULE_NAME, "CheckAvailability", {"searchTerm": search_term, "tlds": tlds}, "", "")
    label = (search_term or "").strip().lower()
    if not label or not tlds:
        return []
    return [SuggestionResult(label, tld, 0, STATUS_REGISTERED) for tld in tlds]
