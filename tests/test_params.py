"""Tests for veer.routing.params — converters and percent-decoding."""

import re

import pytest

from veer.errors import HTTPError, ParamDecodeError
from veer.routing.params import CONVERTERS, decode_param


class TestConverters:
    def test_known_converters(self) -> None:
        assert set(CONVERTERS) == {"str", "int", "float", "path"}

    def test_int_pattern(self) -> None:
        assert re.fullmatch(CONVERTERS["int"], "42")
        assert not re.fullmatch(CONVERTERS["int"], "4a")

    def test_float_pattern(self) -> None:
        assert re.fullmatch(CONVERTERS["float"], "3.14")
        assert re.fullmatch(CONVERTERS["float"], "3")
        assert not re.fullmatch(CONVERTERS["float"], "3.")

    def test_str_stops_at_slash(self) -> None:
        assert not re.fullmatch(CONVERTERS["str"], "a/b")

    def test_path_spans_slashes(self) -> None:
        assert re.fullmatch(CONVERTERS["path"], "a/b/c")


class TestDecodeParam:
    def test_plain_value_unchanged(self) -> None:
        assert decode_param("abcd") == "abcd"

    def test_decodes_escapes(self) -> None:
        assert decode_param("hello%20world") == "hello world"

    def test_decodes_multibyte_utf8(self) -> None:
        assert decode_param("%E0%A4%A4") == "त"

    def test_plus_is_not_a_space(self) -> None:
        assert decode_param("a+b") == "a+b"

    def test_encoded_slash(self) -> None:
        assert decode_param("a%2Fb") == "a/b"

    def test_none_and_empty_pass_through(self) -> None:
        assert decode_param(None) is None
        assert decode_param("") == ""

    def test_truncated_escape_names_raw_value(self) -> None:
        with pytest.raises(ParamDecodeError) as exc_info:
            decode_param("%E0%A4%A")
        assert "%E0%A4%A" in str(exc_info.value)
        assert exc_info.value.detail == "Failed to decode param '%E0%A4%A'"
        assert exc_info.value.value == "%E0%A4%A"

    def test_non_hex_escape(self) -> None:
        with pytest.raises(ParamDecodeError):
            decode_param("100%zz")

    def test_invalid_utf8(self) -> None:
        with pytest.raises(ParamDecodeError) as exc_info:
            decode_param("%FF")
        assert "'%FF'" in str(exc_info.value)

    def test_decode_error_is_a_400(self) -> None:
        with pytest.raises(HTTPError) as exc_info:
            decode_param("%")
        assert exc_info.value.status == 400
