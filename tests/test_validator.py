"""
Tests for IDN detection and label validation.
"""

from __future__ import annotations

import pytest

from src.domains.suggestions.validator import MAX_LABEL_LENGTH, is_idn, is_valid_label


@pytest.mark.parametrize(
    "value, expected",
    [
        ("kavezo", False),
        ("kávézó", True),
        ("", False),
        (chr(127), False),
        (chr(128), True),
        ("mybrand.com", False),
        ("日本", True),
    ],
)
def test_is_idn(value: str, expected: bool) -> None:
    assert is_idn(value) is expected


def test_is_idn_matches_code_point_range() -> None:
    """True iff some code point is >= 128."""
    for cp in (0, 65, 126, 127, 128, 233, 0x1F600):
        assert is_idn(f"a{chr(cp)}b") is (cp >= 128)


@pytest.mark.parametrize(
    "label",
    ["mybrand", "my-brand", "123", "a", "kávézó", "日本語", "a" * MAX_LABEL_LENGTH, "é" * MAX_LABEL_LENGTH],
)
def test_valid_labels(label: str) -> None:
    assert is_valid_label(label)


@pytest.mark.parametrize(
    "label",
    ["", "-bad", "bad-", "-", "-bad-", "a" * (MAX_LABEL_LENGTH + 1), "my_brand", "my.brand", "a b", "brand!"],
)
def test_invalid_labels(label: str) -> None:
    assert not is_valid_label(label)


def test_label_length_counts_code_points_not_bytes() -> None:
    """63 accented letters are 126 UTF-8 bytes but still a valid label."""
    label = "ő" * 63
    assert len(label.encode("utf-8")) > 63
    assert is_valid_label(label)
    assert not is_valid_label(label + "ő")
