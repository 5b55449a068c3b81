"""
Prompt rendering for domain suggestions.

Placeholders:
- {searchTerm}: user's search keyword
- {suggestionCount}: number of suggestions to generate
- {tldList}: TLDs as ".com, .net", in priority order
- {tldPriority}: TLD priority instruction (empty for fewer than two TLDs)
- {idnInstruction}: IDN policy chosen from the search term

The priority text is advice to the model. Output is never rebalanced by TLD.
"""

from __future__ import annotations

import re
from typing import Sequence

from src.domains.suggestions.validator import is_idn

IDN_INSTRUCTION_FULL = (
    "IDN Policy: The search term contains accented/international characters. "
    "You SHOULD use accented characters (like á, é, í, ó, ö, ő, ú, ü, ű) in domain "
    "suggestions to match the search intent."
)
IDN_INSTRUCTION_MINIMAL = (
    "IDN Policy: Suggest ONLY ASCII domain names (a-z, 0-9, hyphens). "
    "Do NOT use any accented or international characters."
)

FIRST_TLD_SHARE = 40
SECOND_TLD_SHARE = 25

_PLACEHOLDER_RE = re.compile(r"\{(searchTerm|suggestionCount|tldList|tldPriority|idnInstruction)\}")


def normalize_tld(tld: str) -> str:
    """'.com' / 'com' / ' COM ' -> 'com'."""
    return (tld or "").strip().lstrip(".").lower()


def _dotted(tld: str) -> str:
    return "." + normalize_tld(tld)


def format_tld_list(tlds: Sequence[str]) -> str:
    return ", ".join(_dotted(t) for t in tlds)


def build_tld_priority_instruction(tlds: Sequence[str]) -> str:
    """Tell the model to favour TLDs listed first (~40% first, ~25% second)."""
    if len(tlds) <= 1:
        return ""
    first = _dotted(tlds[0])
    second = _dotted(tlds[1])
    return (
        "TLD Priority: Distribute suggestions with preference for TLDs listed first.\n"
        f"Use {first} for approximately {FIRST_TLD_SHARE}% of suggestions, "
        f"{second} for approximately {SECOND_TLD_SHARE}%, "
        "and distribute the rest among other TLDs."
    )


def build_idn_instruction(search_term: str) -> str:
    return IDN_INSTRUCTION_FULL if is_idn(search_term) else IDN_INSTRUCTION_MINIMAL


def build_prompt(
    template: str,
    search_term: str,
    suggestion_count: int,
    tlds: Sequence[str],
) -> str:
    """
    Substitute the five placeholders in template.

    Single-pass replacement rather than str.format: unknown placeholders and
    literal braces in custom templates are left as they are, and placeholder
    text inside the search term is never expanded.
    """
    replacements = {
        "searchTerm": search_term,
        "suggestionCount": str(suggestion_count),
        "tldList": format_tld_list(tlds),
        "tldPriority": build_tld_priority_instruction(tlds),
        "idnInstruction": build_idn_instruction(search_term),
    }
    return _PLACEHOLDER_RE.sub(lambda m: replacements[m.group(1)], template)
