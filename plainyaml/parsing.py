"""Normalization of option values coming from config files and the environment.

Config files are decoded by plainyaml itself, so a value may arrive already
typed (`4`, `True`) or as text (`" 4 "`, `"yes"`); environment values are
always text. The helpers here accept both forms.
"""

from __future__ import annotations


_BOOLEAN_TOKENS = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}


def normalize_optional_string(value: object) -> str | None:
    """Return the stripped text of `value`, or `None` when nothing is left."""

    if value is None:
        return None
    return str(value).strip() or None


def parse_permissive_boolean(value: object) -> bool | None:
    """Read a boolean flag; unknown or blank tokens yield `None`."""

    if isinstance(value, bool):
        return value
    text = normalize_optional_string(value)
    return None if text is None else _BOOLEAN_TOKENS.get(text.lower())


def parse_required_boolean(value: object, field_name: str) -> bool:
    """Read a boolean option, naming `field_name` when the token is not recognized.

    Raises:
        ValueError: If the value is not one of the accepted boolean tokens.
    """

    parsed = parse_permissive_boolean(value)
    if parsed is None:
        raise ValueError(
            f"`{field_name}` must be a boolean value (`true`/`false`, `1`/`0`, `yes`/`no`)."
        )
    return parsed


def parse_positive_int(value: object, field_name: str) -> int:
    """Read a strictly positive integer option from an `int` or its text.

    Raises:
        ValueError: If the value is a bool, non-numeric, zero or negative.
    """

    if isinstance(value, bool):
        parsed = 0
    elif isinstance(value, int):
        parsed = value
    else:
        text = normalize_optional_string(value)
        parsed = int(text) if text is not None and text.lstrip("+-").isdigit() else 0
    if parsed <= 0:
        raise ValueError(f"`{field_name}` must be a positive integer.")
    return parsed
