"""
Tests for the request/response normalization helpers.

Test plan:
- strip_hex_prefix: prefixed, unprefixed, None, non-string coercion,
  only the leading prefix removed
- ensure_hex_prefix: adds prefix, idempotent
- unwrap_quoted_string: quoted, unquoted, inner quotes kept (greedy),
  one pair only, half-quoted bodies untouched, newlines not crossed
- json_body: compact, order preserved
"""

import pytest

from parity_privacy.encoding import (
    ensure_hex_prefix,
    is_quoted_string,
    json_body,
    json_text,
    strip_hex_prefix,
    unwrap_quoted_string,
)


class TestStripHexPrefix:
    def test_removes_prefix(self) -> None:
        assert strip_hex_prefix("0xABC") == "ABC"

    def test_unprefixed_unchanged(self) -> None:
        assert strip_hex_prefix("ABC") == "ABC"

    def test_none_is_empty(self) -> None:
        assert strip_hex_prefix(None) == ""

    def test_coerces_to_text(self) -> None:
        assert strip_hex_prefix(42) == "42"

    def test_only_leading_prefix(self) -> None:
        assert strip_hex_prefix("0x0xab") == "0xab"
        assert strip_hex_prefix("ab0x") == "ab0x"

    def test_uppercase_x_is_not_a_prefix(self) -> None:
        assert strip_hex_prefix("0XAB") == "0XAB"


class TestEnsureHexPrefix:
    def test_adds_prefix(self) -> None:
        assert ensure_hex_prefix("ABC") == "0xABC"

    def test_idempotent(self) -> None:
        assert ensure_hex_prefix("0xABC") == "0xABC"
        assert ensure_hex_prefix(ensure_hex_prefix("ABC")) == "0xABC"

    def test_empty(self) -> None:
        assert ensure_hex_prefix("") == "0x"


class TestUnwrapQuotedString:
    def test_quoted(self) -> None:
        assert unwrap_quoted_string('"foo"') == "foo"

    def test_not_quoted(self) -> None:
        assert unwrap_quoted_string("foo") == "foo"

    def test_inner_quote_kept(self) -> None:
        assert unwrap_quoted_string('"a"b"') == 'a"b'

    def test_single_pass(self) -> None:
        assert unwrap_quoted_string('""x""') == '"x"'

    def test_empty_quoted(self) -> None:
        assert unwrap_quoted_string('""') == ""

    @pytest.mark.parametrize("body", ['"foo', 'foo"', "", '"'])
    def test_half_quoted_unchanged(self, body: str) -> None:
        assert unwrap_quoted_string(body) == body

    def test_does_not_cross_newlines(self) -> None:
        assert unwrap_quoted_string('"a\nb"') == '"a\nb"'

    def test_is_quoted_string(self) -> None:
        assert is_quoted_string('"0xdead"')
        assert not is_quoted_string("0xdead")
        assert not is_quoted_string('{"a": 1}')


class TestJsonBody:
    def test_compact(self) -> None:
        assert json_text(["a", "b"]) == '["a","b"]'

    def test_order_preserved(self) -> None:
        assert json_text(["b", "a"]) == '["b","a"]'

    def test_bytes_utf8(self) -> None:
        assert json_body(["é"]) == '["é"]'.encode("utf-8")
