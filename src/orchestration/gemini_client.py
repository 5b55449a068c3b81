"""
Gemini API (Google AI) wrapper that turns a search term into domain suggestions.

One attempt per generate() call: validate, check rate limits, build the prompt,
POST to generateContent, parse the text into `label.tld` lines. Failures are
captured in `last_error` / `last_exception` and reported to the audit sink; the
caller just gets an empty list.
"""

from __future__ import annotations

import re
from typing import Any, Sequence

import requests

from src.domains.suggestions.errors import (
    ConfigError,
    EmptyInputError,
    HttpError,
    MalformedResponseError,
    RateLimitedError,
    SuggestionError,
    TransportError,
)
from src.domains.suggestions.models import DEFAULT_TLDS, Configuration, SuggestionRequest
from src.domains.suggestions.prompt_builder import build_prompt
from src.domains.suggestions.rate_limiter import RateLimiter
from src.infrastructure.audit.audit_log import MODULE_NAME, AuditLog, AuditSink
from src.utils.config import gemini_api_url
from src.utils.logger import get_logger, redact_secrets, register_secret

logger = get_logger()

CONNECT_TIMEOUT_SECONDS = 10
READ_TIMEOUT_SECONDS = 30

ACTION_SUCCESS = "GenerateSuggestions"
ACTION_ERROR = "GenerateSuggestions_Error"

# Leading numbering / bullets the model adds despite being told not to: "1. ", "2) ", "- "
_LINE_PREFIX_RE = re.compile(r"^[\d.)\-\s]+")


def parse_domain_lines(text: str) -> list[str]:
    """
    Split generated text into candidate `label.tld` strings, in order.

    Lines are trimmed, stripped of leading numbering, lower-cased, and dropped
    when empty or without a dot. Validation happens later in filter_suggestions.
    """
    domains: list[str] = []
    for line in text.strip().splitlines():
        line = line.strip()
        if not line:
            continue
        domain = _LINE_PREFIX_RE.sub("", line).strip().lower()
        if domain and "." in domain:
            domains.append(domain)
    return domains


def _extract_generated_text(payload: Any) -> str:
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise MalformedResponseError("Invalid API response format") from None
    if not isinstance(text, str):
        raise MalformedResponseError("Invalid API response format")
    return text


class GeminiClient:
    def __init__(
        self,
        config: Configuration,
        rate_limiter: RateLimiter,
        audit: AuditSink | None = None,
        base_url: str | None = None,
    ) -> None:
        self.config = config
        self.rate_limiter = rate_limiter
        self._audit = audit or AuditLog()
        self._base_url = (base_url or gemini_api_url()).rstrip("/")
        self.last_error = ""
        self.last_exception: SuggestionError | None = None
        register_secret(config.api_key)

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/models/{self.config.model}:generateContent"

    def _redact(self, text: str) -> str:
        return redact_secrets(text, [self.config.api_key])

    def _payload(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": self.config.temperature},
        }

    def _post(self, prompt: str) -> requests.Response:
        try:
            return requests.post(
                self.endpoint,
                params={"key": self.config.api_key},
                headers={"Content-Type": "application/json"},
                json=self._payload(prompt),
                timeout=(CONNECT_TIMEOUT_SECONDS, READ_TIMEOUT_SECONDS),
                verify=True,
            )
        except requests.RequestException as e:
            # requests puts the full URL (with ?key=...) into exception messages
            raise TransportError(f"Transport error: {self._redact(str(e))}", e) from e

    @staticmethod
    def _json_or_none(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    def _audit_call(self, request: dict[str, Any], response_body: str, processed: Any) -> None:
        action = ACTION_SUCCESS if isinstance(processed, list) else ACTION_ERROR
        self._audit.log_call(MODULE_NAME, action, request, response_body, processed, [self.config.api_key])

    def generate(
        self,
        search_term: str,
        suggestion_count: int,
        tlds: Sequence[str] | None = None,
    ) -> list[str]:
        """
        Ask Gemini for domain suggestions.

        Args:
            search_term: User's keyword.
            suggestion_count: How many suggestions to request.
            tlds: TLDs in priority order; defaults to com, net, org, io.

        Returns:
            Lower-cased `label.tld` strings in model order, or [] on any failure
            (see last_error / last_exception).
        """
        self.last_error = ""
        self.last_exception = None
        request = SuggestionRequest(search_term or "", suggestion_count, tuple(tlds or DEFAULT_TLDS))
        log_request: dict[str, Any] = {
            "model": self.config.model,
            **request.as_log_dict(),
            "temperature": self.config.temperature,
        }
        response_body = ""
        try:
            if not self.config.api_key:
                raise ConfigError("API key not configured")
            if not request.search_term:
                raise EmptyInputError("Search term is empty")

            decision = self.rate_limiter.check()
            if not decision.allowed:
                raise RateLimitedError(decision.reason or "Rate limit reached")

            prompt = build_prompt(
                self.config.prompt_template,
                request.search_term,
                request.suggestion_count,
                request.tlds,
            )
            log_request["prompt"] = prompt

            response = self._post(prompt)
            response_body = response.text or ""
            payload = self._json_or_none(response)
            if response.status_code != 200:
                raise HttpError.from_response(response.status_code, payload)

            text = _extract_generated_text(payload)
            self.rate_limiter.commit()
        except SuggestionError as e:
            self.last_exception = e
            self.last_error = self._redact(str(e))
            logger.warning("Gemini suggestions failed (%s): %s", type(e).__name__, self.last_error)
            self._audit_call(log_request, response_body, self.last_error)
            return []

        domains = parse_domain_lines(text)
        logger.info("Gemini returned %d candidate domains for %r", len(domains), request.search_term)
        self._audit_call(log_request, response_body, domains)
        return domains
