"""Unit tests for shared configuration value parsing helpers."""

from __future__ import annotations

import pytest

from plainyaml.parsing import (
    normalize_optional_string,
    parse_permissive_boolean,
    parse_positive_int,
    parse_required_boolean,
)


def test_normalize_optional_string_trims_and_drops_empty_values() -> None:
    """Blank values should normalize to `None`."""

    assert normalize_optional_string(None) is None
    assert normalize_optional_string("   ") is None
    assert normalize_optional_string(" value ") == "value"
    assert normalize_optional_string(12) == "12"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, True),
        (False, False),
        ("yes", True),
        (" ON ", True),
        ("1", True),
        ("no", False),
        ("off", False),
        ("0", False),
        ("maybe", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_permissive_boolean_accepts_common_tokens(
    value: object, expected: bool | None
) -> None:
    """Permissive parsing should map known tokens and return `None` otherwise."""

    assert parse_permissive_boolean(value) is expected


def test_parse_required_boolean_names_the_field_on_failure() -> None:
    """Required parsing should raise with the offending field name."""

    assert parse_required_boolean("true", "verbose") is True
    with pytest.raises(ValueError, match="`verbose` must be a boolean value"):
        parse_required_boolean("sometimes", "verbose")


@pytest.mark.parametrize(("value", "expected"), [(4, 4), ("12", 12), (" 7 ", 7)])
def test_parse_positive_int_accepts_ints_and_numeric_text(value: object, expected: int) -> None:
    """Positive integers should parse from ints and their textual form."""

    assert parse_positive_int(value, "max_depth") == expected


@pytest.mark.parametrize("value", [0, -1, "0", "abc", "", None, True, 2.5])
def test_parse_positive_int_rejects_other_values(value: object) -> None:
    """Zero, negatives, booleans and non-numeric values should be rejected."""

    with pytest.raises(ValueError, match="`max_depth` must be a positive integer."):
        parse_positive_int(value, "max_depth")
