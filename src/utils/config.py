"""Load and validate environment variables. Uses python-dotenv.

Callers should use the accessor functions below rather than reading `os.environ`
directly. `load_configuration()` turns the raw values into the immutable
`Configuration` used by the suggestion client.
"""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
import os

from src.domains.suggestions.models import (
    DEFAULT_DAILY_LIMIT,
    DEFAULT_MINUTE_LIMIT,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    Configuration,
)


def _project_root() -> Path:
    """Resolve project root (the directory holding app.py)."""
    return Path(__file__).resolve().parent.parent.parent


def load_config() -> None:
    """
    Load .env from project root. Idempotent; safe to call multiple times.
    Uses override=True to ensure .env values take precedence over existing env vars.
    """
    root = _project_root()
    env_path = root / ".env"
    load_dotenv(env_path, override=True)


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    """Get optional env var as int; return default if missing or invalid."""
    raw = get_optional(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_optional_float(key: str, default: float) -> float:
    """Get optional env var as float; return default if missing or invalid."""
    raw = get_optional(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# --- Public config accessors ---

def gemini_api_key() -> str:
    """Gemini API key. Empty string when unset; the client reports it as a config error."""
    return get_optional("GEMINI_API_KEY")


def gemini_model() -> str:
    """Optional: Gemini model id. Unknown ids fall back when the Configuration is built."""
    return get_optional("GEMINI_MODEL", DEFAULT_MODEL)


def gemini_temperature() -> float:
    """Optional: creativity 0.0-2.0. Default 1.0."""
    return get_optional_float("GEMINI_TEMPERATURE", DEFAULT_TEMPERATURE)


def daily_rate_limit() -> int:
    """Optional: max Gemini calls per UTC day. Default 1500 (free tier). <= 0 disables."""
    return get_optional_int("GEMINI_DAILY_RATE_LIMIT", DEFAULT_DAILY_LIMIT)


def minute_rate_limit() -> int:
    """Optional: max Gemini calls per UTC minute. Default 15 (free tier). <= 0 disables."""
    return get_optional_int("GEMINI_MINUTE_RATE_LIMIT", DEFAULT_MINUTE_LIMIT)


def gemini_api_url() -> str:
    """Base URL of the Gemini REST API (without the model path)."""
    return get_optional("GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta")


def prompt_template() -> str:
    """
    Optional custom prompt template.

    PROMPT_TEMPLATE wins over PROMPT_TEMPLATE_FILE. Relative file paths are
    resolved against the project root. Empty means "use the built-in prompt".
    """
    inline = get_optional("PROMPT_TEMPLATE")
    if inline:
        return inline
    path_value = get_optional("PROMPT_TEMPLATE_FILE")
    if not path_value:
        return ""
    path = Path(path_value)
    if not path.is_absolute():
        path = _project_root() / path
    return path.read_text(encoding="utf-8")


def redis_url() -> str | None:
    """Optional: Redis URL for shared rate-limit counters. Unset means in-process counters."""
    val = get_optional("REDIS_URL", "")
    return val or None


def audit_log_path() -> Optional[Path]:
    """
    Optional: JSON-lines audit log of every API call. Default data/audit/api_calls.jsonl.
    Set AUDIT_LOG_PATH=off to only log through the application logger.
    """
    val = get_optional("AUDIT_LOG_PATH", "")
    if val.lower() in ("off", "none", "false", "0"):
        return None
    if not val:
        return _project_root() / "data" / "audit" / "api_calls.jsonl"
    path = Path(val)
    return path if path.is_absolute() else _project_root() / path


def load_configuration(temperature: float | str | None = None) -> Configuration:
    """
    Build the immutable Configuration from the environment.

    Args:
        temperature: Per-request creativity override (e.g. from the UI). None uses
            GEMINI_TEMPERATURE.
    """
    return Configuration.build(
        api_key=gemini_api_key(),
        model=gemini_model(),
        daily_limit=daily_rate_limit(),
        minute_limit=minute_rate_limit(),
        temperature=gemini_temperature() if temperature is None else temperature,
        prompt_template=prompt_template(),
    )


def build_counter_store():
    """
    Counter store for the rate limiter: Redis when REDIS_URL is set, else in-memory.

    The in-memory store only limits a single process.
    """
    from src.infrastructure.counters.counter_store import InMemoryCounterStore, RedisCounterStore

    url = redis_url()
    if url:
        return RedisCounterStore.from_url(url)
    return InMemoryCounterStore()