"""
IDN detection and second-level label validation.

Labels may contain Unicode letters so accented suggestions validate. No IDNA
normalisation or Punycode conversion happens here; that belongs to whatever
layer needs the ASCII-compatible form.
"""

from __future__ import annotations

import unicodedata

# RFC 1035: max 63 characters per label
MAX_LABEL_LENGTH = 63


def is_idn(value: str) -> bool:
    """True if value contains any character outside 7-bit ASCII."""
    return any(ord(ch) > 127 for ch in value)


def _is_letter_or_number(ch: str) -> bool:
    # Unicode general categories L* (letters) and N* (numbers)
    return unicodedata.category(ch)[0] in ("L", "N")


def is_valid_label(label: str) -> bool:
    """
    Validate a second-level domain label.

    The label must:
    - not be empty
    - not exceed 63 code points
    - not start or end with a hyphen
    - start with a letter or number and contain only letters, numbers and hyphens
    """
    if not label:
        return False
    if len(label) > MAX_LABEL_LENGTH:
        return False
    if label.startswith("-") or label.endswith("-"):
        return False
    if not _is_letter_or_number(label[0]):
        return False
    return all(ch == "-" or _is_letter_or_number(ch) for ch in label)
