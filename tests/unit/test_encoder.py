"""Unit tests for the depth-first encoder."""

from __future__ import annotations

import math

import pytest

from plainyaml import Encoder, YamlEncodeError, decode, encode
from plainyaml.encoder import encode_key


def test_encode_renders_flat_mapping_of_scalars() -> None:
    """Scalars should render as `key: token` lines in insertion order."""

    value = {"id": 1234, "name": "james", "date": "2019-05-05", "boolean": False}

    assert encode(value) == "id: 1234\nname: james\ndate: 2019-05-05\nboolean: false\n"


def test_encode_renders_empty_collections_and_null_inline() -> None:
    """Empty collections and `None` should stay on the key line."""

    assert encode({"k": []}) == "k: []\n"
    assert encode({"k": {}}) == "k: {}\n"
    assert encode({"k": None}) == "k: null\n"


def test_encode_renders_top_level_empty_collections() -> None:
    """An empty root should still produce a decodable document."""

    assert encode({}) == "{}\n"
    assert encode([]) == "[]\n"


def test_encode_renders_flat_list() -> None:
    """List elements should each get a `- ` marker."""

    assert encode(["tony", "nick"]) == "- tony\n- nick\n"


def test_encode_renders_records_with_nested_lists() -> None:
    """Mapping elements should put their first key on the marker line."""

    value = [
        {"name": "tony", "phones": ["1234-456"]},
        {"name": "nick", "phones": ["1234-456", "456-4334"]},
    ]

    assert encode(value) == (
        "- name: tony\n"
        "  phones:\n"
        "    - 1234-456\n"
        "- name: nick\n"
        "  phones:\n"
        "    - 1234-456\n"
        "    - 456-4334\n"
    )


def test_encode_renders_records_under_a_key() -> None:
    """Record lists nested in a mapping should indent one step under their key."""

    value = {
        "addresses": [
            {"street": "1234 some road", "city": "london"},
            {"street": "5 some avenue", "city": "leeds"},
        ]
    }

    assert encode(value) == (
        "addresses:\n"
        "  - street: 1234 some road\n"
        "    city: london\n"
        "  - street: 5 some avenue\n"
        "    city: leeds\n"
    )


def test_encode_renders_multi_level_mappings() -> None:
    """Nested mappings should indent by the configured step."""

    value = {
        "version": "3",
        "services": {"web": {"image": "nginx", "volumes": ["./www:/var/www"]}},
    }

    assert encode(value) == (
        'version: "3"\n'
        "services:\n"
        "  web:\n"
        "    image: nginx\n"
        "    volumes:\n"
        "      - ./www:/var/www\n"
    )


def test_encode_renders_nested_sequences() -> None:
    """A list inside a list should open with `- - `."""

    assert encode([[1, 2], 3]) == "- - 1\n  - 2\n- 3\n"


def test_encode_renders_multiline_strings_as_literal_blocks() -> None:
    """Strings with line breaks should become `|` blocks one step deeper."""

    value = {"address": {"line": "458 Some Road\nSomewhere"}}

    assert encode(value) == "address:\n  line: |\n    458 Some Road\n    Somewhere\n"
    assert encode(["a\n\nb"]) == "- |\n  a\n\n  b\n"


def test_encode_quotes_values_and_keys_that_would_decode_differently() -> None:
    """Ambiguous tokens should be double-quoted on both sides of the separator."""

    assert encode({"n": "1"}) == 'n: "1"\n'
    assert encode({"a: b": 1}) == '"a: b": 1\n'
    assert encode({"": "x"}) == '"": x\n'


def test_encode_renders_floats_with_fractional_part() -> None:
    """Integral floats should keep `.0` so they decode back as floats."""

    assert encode({"x": 1.0, "y": math.inf, "z": 1e20}) == "x: 1.0\ny: .inf\nz: 1e+20\n"


def test_encoder_honours_indent_step() -> None:
    """Mapping nesting should follow the configured indentation step."""

    encoder = Encoder(indent_step=4)

    assert encoder.dump({"a": {"b": 1}, "c": [1]}) == "a:\n    b: 1\nc:\n    - 1\n"


def test_encoder_dump_supports_start_column_and_sequence_context() -> None:
    """`dump` should shift output to `indent` and optionally emit it as a list element."""

    encoder = Encoder()

    assert encoder.dump({"a": 1}, indent=2) == "  a: 1\n"
    assert encoder.dump({"a": 1, "b": 2}, in_sequence=True) == "- a: 1\n  b: 2\n"


def test_encode_key_leaves_ordinary_keys_plain() -> None:
    """Keys that split back intact should not be quoted."""

    assert encode_key("bill-to") == "bill-to"
    assert encode_key("a:b") == "a:b"
    assert encode_key("- k") == '"- k"'
    assert encode_key("#c") == '"#c"'
    assert encode_key(" padded") == '" padded"'


@pytest.mark.parametrize("key", ["a\nb", "a\rb", "trailing\n"])
def test_encode_rejects_keys_containing_line_breaks(key: str) -> None:
    """A key with a line break cannot be written on one line and should be rejected."""

    with pytest.raises(YamlEncodeError, match="mapping keys cannot contain line breaks"):
        encode({key: 1})


@pytest.mark.parametrize("value", ["a\rb", "a\r\nb", ["x\ry"]])
def test_encode_rejects_strings_containing_carriage_returns(value: object) -> None:
    """Carriage returns would split lines on decode, so they should be rejected."""

    with pytest.raises(YamlEncodeError):
        encode({"k": value})


def test_encode_keeps_newlines_inside_values_as_blocks() -> None:
    """Newlines in values remain supported through literal blocks."""

    assert decode(encode({"k": "a\nb"})) == {"k": "a\nb"}


def test_literal_blocks_trim_trailing_line_breaks() -> None:
    """Trailing line breaks of a multiline string are not kept by a round trip."""

    text = encode({"a": "x\n", "b": "one\ntwo\n\n"})

    assert text == "a: |\n  x\n\nb: |\n  one\n  two\n\n\n"
    assert decode(text) == {"a": "x", "b": "one\ntwo"}
