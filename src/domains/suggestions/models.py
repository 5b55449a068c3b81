"""
Value types for domain suggestions: Configuration, request, candidates, results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ALLOWED_MODELS: tuple[str, ...] = (
    "gemini-2.0-flash",
    "gemini-2.5-flash",
    "gemini-2.5-pro",
)
DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_DAILY_LIMIT = 1500
DEFAULT_MINUTE_LIMIT = 15
DEFAULT_TEMPERATURE = 1.0
MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0

DEFAULT_TLDS: tuple[str, ...] = ("com", "net", "org", "io")

STATUS_AVAILABLE = "available"
STATUS_REGISTERED = "registered"

DEFAULT_PROMPT = """You are a domain name suggestion expert. Based on "{searchTerm}", generate {suggestionCount} creative domain name suggestions.

Available TLDs: {tldList}
{tldPriority}
{idnInstruction}
Requirements:
- Suggest memorable, brandable domain names
- Consider the language and market of the user
- Mix exact matches with creative alternatives
- Include keyword variations and synonyms
- Return ONLY domain names (e.g., "example.com"), one per line
- Do not include explanations, numbering, or any other text"""


def _as_int(value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value: Any, default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Configuration:
    """
    Validated settings for one suggestion request.

    Use `Configuration.build()`; it defaults unknown models, clamps the
    temperature and falls back to DEFAULT_PROMPT for a blank template.
    """

    api_key: str = ""
    model: str = DEFAULT_MODEL
    daily_limit: int = DEFAULT_DAILY_LIMIT
    minute_limit: int = DEFAULT_MINUTE_LIMIT
    temperature: float = DEFAULT_TEMPERATURE
    prompt_template: str = DEFAULT_PROMPT

    @classmethod
    def build(
        cls,
        api_key: str | None = None,
        model: str | None = None,
        daily_limit: Any = None,
        minute_limit: Any = None,
        temperature: Any = None,
        prompt_template: str | None = None,
    ) -> Configuration:
        model = (model or "").strip()
        if model not in ALLOWED_MODELS:
            model = DEFAULT_MODEL

        temp = _as_float(temperature, DEFAULT_TEMPERATURE)
        temp = max(MIN_TEMPERATURE, min(MAX_TEMPERATURE, temp))

        template = prompt_template if prompt_template and prompt_template.strip() else DEFAULT_PROMPT

        return cls(
            api_key=(api_key or "").strip(),
            model=model,
            daily_limit=_as_int(daily_limit, DEFAULT_DAILY_LIMIT),
            minute_limit=_as_int(minute_limit, DEFAULT_MINUTE_LIMIT),
            temperature=temp,
            prompt_template=template,
        )

    def __repr__(self) -> str:
        key_hint = f"…{self.api_key[-4:]}" if len(self.api_key) >= 4 else ("…" if self.api_key else "")
        return (
            f"Configuration(model={self.model!r}, api_key={key_hint!r}, daily_limit={self.daily_limit}, "
            f"minute_limit={self.minute_limit}, temperature={self.temperature})"
        )


@dataclass(frozen=True)
class SuggestionRequest:
    search_term: str
    suggestion_count: int = 10
    tlds: tuple[str, ...] = field(default_factory=tuple)

    def as_log_dict(self) -> dict[str, Any]:
        return {
            "searchTerm": self.search_term,
            "suggestionCount": self.suggestion_count,
            "tlds": list(self.tlds),
        }


@dataclass(frozen=True)
class CandidateDomain:
    """One `label.tld` line of model output split on its last dot."""

    label: str
    tld: str

    @classmethod
    def parse(cls, domain: str) -> CandidateDomain | None:
        label, dot, tld = domain.rpartition(".")
        if not dot or not tld:
            return None
        return cls(label=label, tld=tld)


@dataclass(frozen=True)
class SuggestionResult:
    label: str
    tld: str
    score: int = 0
    status: str = STATUS_AVAILABLE

    @property
    def domain(self) -> str:
        return f"{self.label}.{self.tld}"
