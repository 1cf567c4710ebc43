"""Tests for the token codec."""

import base64
import json
import logging
import sys
from urllib.parse import quote

import pytest

from paging_cursor.errors import BadRequestError, MalformedTokenError
from paging_cursor.pagination.codec import (
    CursorMetaInfo,
    decode_token,
    encode_token,
    from_url_safe_base64,
    to_url_safe_base64
)


def make_token(payload) -> str:
    """Build a token from an arbitrary JSON payload."""
    return to_url_safe_base64(json.dumps(payload).encode("utf-8"))


class TestUrlSafeBase64:
    """Test URL-safe base64 helpers."""

    def test_alphabet_is_url_safe(self):
        """Test encoded bytes avoid +, / and = characters."""
        raw = bytes(range(256)) * 3
        encoded = to_url_safe_base64(raw)

        assert "+" not in encoded
        assert "/" not in encoded
        assert "=" not in encoded
        assert quote(encoded, safe="") == encoded

    def test_matches_standard_urlsafe_encoding(self):
        """Test output equals the stdlib URL-safe alphabet without padding."""
        raw = b"\xfb\xff\xfe?>"

        assert to_url_safe_base64(raw) == base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    @pytest.mark.parametrize("raw", [b"", b"a", b"ab", b"abc", b"abcd"])
    def test_decoding_restores_padding(self, raw):
        """Test decoding works for every padding length."""
        assert from_url_safe_base64(to_url_safe_base64(raw)) == raw


class TestEncodeToken:
    """Test encode_token."""

    def test_payload_layout(self):
        """Test payload is a compact [metaInfo, ...values] array."""
        token = encode_token([False, 123, "hello"], {"filter": "test"}, [True, False, False])
        payload = from_url_safe_base64(token).decode("utf-8")

        assert payload == '[{"$ctx":{"filter":"test"},"$dsc":[true,false,false]},false,123,"hello"]'

    def test_metadata_omitted_when_absent(self):
        """Test $ctx and $dsc are left out when not given."""
        token = encode_token([1])

        assert from_url_safe_base64(token) == b"[{},1]"

    def test_context_keys_are_canonical(self):
        """Test context key order does not change the token."""
        first = encode_token([1], {"b": 1, "a": {"y": 2, "x": 3}})
        second = encode_token([1], {"a": {"x": 3, "y": 2}, "b": 1})

        assert first == second

    def test_rejects_non_finite_numbers(self):
        """Test NaN cannot be encoded."""
        with pytest.raises(ValueError):
            encode_token([float("nan")])

    def test_rejects_unserializable_values(self):
        """Test non-JSON values surface the serializer error."""
        with pytest.raises(TypeError):
            encode_token([object()])


class TestDecodeToken:
    """Test decode_token."""

    def test_decodes_metadata_and_values(self):
        """Test metadata record and values are split apart."""
        meta_info, values = decode_token(make_token([{"$ctx": {"q": "x"}, "$dsc": [True]}, 5, "a"]))

        assert isinstance(meta_info, CursorMetaInfo)
        assert meta_info.context == {"q": "x"}
        assert meta_info.descending == [True]
        assert values == [5, "a"]

    def test_unknown_metadata_keys_ignored(self):
        """Test extra keys in the metadata record are ignored."""
        meta_info, values = decode_token(make_token([{"$other": 1}, 1]))

        assert meta_info.context is None
        assert meta_info.descending is None
        assert values == [1]

    def test_padded_input_rejected(self):
        """Test standard padded base64 is not accepted."""
        token = base64.b64encode(b'[{},12]').decode("ascii")
        assert token.endswith("=")

        with pytest.raises(MalformedTokenError):
            decode_token(token)

    @pytest.mark.parametrize(
        "token",
        [
            "not-valid-base64!!!",
            "abc+def/",
            "abc\n",
            "A",
            "",
        ]
    )
    def test_invalid_base64(self, token):
        """Test tokens that are not URL-safe base64 are rejected."""
        with pytest.raises(MalformedTokenError):
            decode_token(token)

    @pytest.mark.parametrize(
        "payload",
        [
            {"$ctx": 1},
            [],
            [1, 2, 3],
            ["meta", 1],
            None,
            [{"$dsc": "yes"}],
            [{"$dsc": [1, 0]}],
        ]
    )
    def test_invalid_payload(self, payload):
        """Test payloads that are not [metaInfo, ...values] are rejected."""
        with pytest.raises(MalformedTokenError):
            decode_token(make_token(payload))

    def test_invalid_json(self):
        """Test base64 of non-JSON text is rejected."""
        with pytest.raises(MalformedTokenError, match="not valid JSON"):
            decode_token(to_url_safe_base64(b"[{},"))

    @pytest.mark.skipif(
        not hasattr(sys, "get_int_max_str_digits") or sys.get_int_max_str_digits() == 0,
        reason="integer string length limit not available"
    )
    def test_integer_too_long(self):
        """Test JSON integers beyond the interpreter digit limit are rejected."""
        token = to_url_safe_base64(b"[{}," + b"9" * 5000 + b"]")

        with pytest.raises(MalformedTokenError, match="not valid JSON"):
            decode_token(token)

    def test_nesting_too_deep(self):
        """Test arrays nested past the recursion limit are rejected."""
        depth = 100000
        token = to_url_safe_base64(b"[{}," + b"[" * depth + b"]" * depth + b"]")

        with pytest.raises(MalformedTokenError, match="not valid JSON"):
            decode_token(token)

    def test_plain_metadata_names_ignored(self):
        """Test only $ctx and $dsc are read from the metadata record."""
        meta_info, values = decode_token(make_token([{"descending": [True], "context": "x"}, 1]))

        assert meta_info.descending is None
        assert meta_info.context is None
        assert values == [1]

    def test_invalid_utf8(self):
        """Test base64 of non-UTF-8 bytes is rejected."""
        with pytest.raises(MalformedTokenError, match="not UTF-8"):
            decode_token(to_url_safe_base64(b"\xff\xfe\xfd"))

    def test_non_string_token(self):
        """Test non-string input is rejected."""
        with pytest.raises(MalformedTokenError):
            decode_token(None)

    def test_error_is_bad_request(self):
        """Test malformed tokens map to 400 problem details."""
        with pytest.raises(BadRequestError) as exc_info:
            decode_token("not-valid-base64!!!")

        assert exc_info.value.status == 400
        assert exc_info.value.extensions == {"token_length": 19}

    def test_error_chains_cause(self):
        """Test the underlying decode error is chained."""
        with pytest.raises(MalformedTokenError) as exc_info:
            decode_token(to_url_safe_base64(b"[{},"))

        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_rejection_logged_without_token(self, caplog):
        """Test rejected tokens are logged by length only."""
        token = to_url_safe_base64(b"secret-ish payload")
        caplog.set_level(logging.DEBUG, logger="paging_cursor.pagination.codec")

        with pytest.raises(MalformedTokenError):
            decode_token(token)

        assert "Rejected cursor token" in caplog.text
        assert token not in caplog.text
