"""Domain suggestions: validation, prompt building, rate limiting, result filtering."""

from src.domains.suggestions.models import Configuration, SuggestionResult
from src.domains.suggestions.prompt_builder import build_prompt
from src.domains.suggestions.rate_limiter import RateLimiter, RateLimitDecision
from src.domains.suggestions.result_filter import filter_suggestions
from src.domains.suggestions.validator import is_idn, is_valid_label

__all__ = [
    "Configuration",
    "RateLimitDecision",
    "RateLimiter",
    "SuggestionResult",
    "build_prompt",
    "filter_suggestions",
    "is_idn",
    "is_valid_label",
]
