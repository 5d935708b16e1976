"""Tests for the tags module."""

import re

import pytest

from fieldmap.tags import get, lookup, lower_first, unquote


class TestLookup:
    """Test struct tag key lookup."""

    def test_single_pair(self):
        assert lookup('json:"name"', "json") == ("name", True)

    def test_multiple_pairs(self):
        tag = 'json:"name,omitempty" db:"user_name" yaml:"n"'
        assert get(tag, "json") == "name,omitempty"
        assert get(tag, "db") == "user_name"
        assert get(tag, "yaml") == "n"

    def test_missing_key(self):
        assert lookup('json:"name"', "xml") == ("", False)

    def test_empty_value_is_found(self):
        assert lookup('json:""', "json") == ("", True)

    def test_options_kept_verbatim(self):
        assert get('json:",omitempty"', "json") == ",omitempty"
        assert get('json:"-"', "json") == "-"

    def test_extra_spaces(self):
        assert get('  db:"a"    json:"b"  ', "json") == "b"

    def test_escaped_quote_in_value(self):
        assert get(r'json:"a\"b" db:"c"', "db") == "c"
        assert get(r'json:"a\"b"', "json") == 'a"b'

    def test_malformed_pair_stops_scan(self):
        """Pairs after a malformed one are never reached."""
        assert get('json name db:"x"', "db") == ""
        assert get('json:name db:"x"', "db") == ""

    def test_unterminated_value(self):
        assert lookup('json:"name', "json") == ("", False)

    def test_empty_tag(self):
        assert lookup("", "json") == ("", False)


class TestUnquote:
    """Test Go string literal decoding."""

    def test_raw(self):
        assert unquote('`json:"name"`') == 'json:"name"'

    def test_raw_drops_carriage_returns(self):
        assert unquote("`a\r\nb`") == "a\nb"

    def test_interpreted(self):
        assert unquote(r'"json:\"name\""') == 'json:"name"'

    def test_simple_escapes(self):
        assert unquote(r'"\t\n\\"') == "\t\n\\"

    def test_hex_octal_unicode(self):
        assert unquote(r'"\x41\102é\U0001F600"') == "ABé\U0001F600"

    def test_utf8_bytes_from_hex(self):
        assert unquote(r'"\xc3\xa9"') == "é"

    def test_invalid_escape(self):
        with pytest.raises(ValueError):
            unquote(r'"\q"')

    def test_invalid_utf8_bytes_kept(self):
        assert unquote(r'"a\xffb"') == "a\udcffb"

    @pytest.mark.parametrize("literal, message", [
        (r'"\400"', "octal escape value > 255: 256"),
        (r'"\uDFFF"', "escape sequence is invalid Unicode code point"),
        (r'"\'"', "unknown escape sequence"),
    ])
    def test_out_of_range_escapes(self, literal, message):
        with pytest.raises(ValueError, match=re.escape(message)):
            unquote(literal)

    def test_rune(self):
        assert unquote("'a'") == "a"
        assert unquote(r"'\''") == "'"
        assert unquote(r"'\x41'") == "A"
        assert unquote(r"'\u00e9'") == "é"

    @pytest.mark.parametrize("literal", ["''", "'ab'", r"'\"'", r"'\400'", "'\n'"])
    def test_invalid_rune(self, literal):
        with pytest.raises(ValueError):
            unquote(literal)

    def test_not_a_literal(self):
        with pytest.raises(ValueError):
            unquote("name")

    def test_mismatched_quotes(self):
        with pytest.raises(ValueError):
            unquote('"name`')


class TestLowerFirst:
    """Test mapping key derivation."""

    def test_exported_name(self):
        assert lower_first("Name") == "name"

    def test_only_first_character(self):
        assert lower_first("UserID") == "userID"
        assert lower_first("HTTPServer") == "hTTPServer"

    def test_already_lowercase(self):
        assert lower_first("id") == "id"

    def test_single_character(self):
        assert lower_first("X") == "x"

    def test_non_ascii(self):
        assert lower_first("Émile") == "émile"

    def test_underscore(self):
        assert lower_first("_") == "_"

    def test_empty(self):
        assert lower_first("") == ""
