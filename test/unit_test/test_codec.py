"""
Tests for base64url encoding and decoding.
"""
import os

import pytest

from tokensmith.security.codec import base64url_decode, base64url_encode
from tokensmith.security.exceptions import InvalidEncodingError


class TestBase64urlEncode:
    """Tests for base64url_encode."""

    @pytest.mark.parametrize(
        "data,expected",
        [
            (b"", ""),
            (b"f", "Zg"),
            (b"fo", "Zm8"),
            (b"foo", "Zm9v"),
            (b"foob", "Zm9vYg"),
        ],
    )
    def test_strips_padding(self, data, expected):
        """Test that '=' padding is removed."""
        assert base64url_encode(data) == expected

    def test_uses_url_safe_alphabet(self):
        """Test that '+' and '/' become '-' and '_'."""
        # Standard base64 of these bytes is "+/8="
        assert base64url_encode(b"\xfb\xff") == "-_8"

    def test_long_input_has_no_newlines(self):
        """Test that long input is encoded on a single line."""
        encoded = base64url_encode(os.urandom(512))
        assert "\n" not in encoded
        assert "=" not in encoded


class TestBase64urlDecode:
    """Tests for base64url_decode."""

    def test_decodes_unpadded_input(self):
        """Test decoding of input with two and three leftover characters."""
        assert base64url_decode("Zg") == b"f"
        assert base64url_decode("Zm8") == b"fo"
        assert base64url_decode("Zm9v") == b"foo"

    def test_reverses_character_substitution(self):
        """Test that '-' and '_' are mapped back."""
        assert base64url_decode("-_8") == b"\xfb\xff"

    def test_round_trip_random_bytes(self):
        """Test decode(encode(b)) == b for assorted lengths."""
        for length in range(0, 70):
            data = os.urandom(length)
            assert base64url_decode(base64url_encode(data)) == data

    def test_empty_string(self):
        """Test that the empty string decodes to empty bytes."""
        assert base64url_decode("") == b""

    def test_length_mod_four_equals_one_is_invalid(self):
        """Test that a single leftover character is rejected."""
        with pytest.raises(InvalidEncodingError) as exc_info:
            base64url_decode("Zm9vY")
        assert exc_info.value.error_code == "INVALID_ENCODING"

    @pytest.mark.parametrize("data", ["Zm9v+g", "Zm9v/g", "Zm8=", "Zm 9v", "Zm9v\n", "é"])
    def test_characters_outside_alphabet_are_invalid(self, data):
        """Test that non-base64url characters are rejected."""
        with pytest.raises(InvalidEncodingError):
            base64url_decode(data)

    def test_non_string_input_is_invalid(self):
        """Test that bytes input is rejected."""
        with pytest.raises(InvalidEncodingError):
            base64url_decode(b"Zm9v")
