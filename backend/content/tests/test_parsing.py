# content/tests/test_parsing.py
"""
Tests for the structured-field codec and datetime parsing.

Coverage:
- decode: NULL/empty storage, valid JSON, corrupt storage
- encode: None, lists, pre-encoded strings, invalid input
- parse_iso_datetime: aware, naive and invalid values
"""

import pytest
from django.utils import timezone

from content.services.errors import PayloadValidationError, StructuredFieldError
from content.services.parsing import decode, encode, parse_iso_datetime


class TestDecode:
    def test_null_and_empty_are_empty_lists(self):
        assert decode(None) == []
        assert decode("") == []

    def test_valid_json(self):
        assert decode('["寺庙","长城"]') == ["寺庙", "长城"]
        assert decode('[{"day": 1, "title": "抵达"}]') == [{"day": 1, "title": "抵达"}]

    def test_corrupt_value_raises(self):
        with pytest.raises(StructuredFieldError) as excinfo:
            decode('["unterminated', field="highlights")
        assert excinfo.value.field == "highlights"
        assert excinfo.value.code == "DECODE_ERROR"
        assert excinfo.value.http_status == 500

    def test_non_text_storage_raises(self):
        with pytest.raises(StructuredFieldError):
            decode(b"[]")


class TestEncode:
    def test_none_stays_null(self):
        assert encode(None) is None
        assert encode("") is None

    def test_list_keeps_unicode(self):
        assert encode(["寺庙", "长城"]) == '["寺庙", "长城"]'

    def test_empty_list(self):
        assert encode([]) == "[]"

    def test_pre_encoded_string_is_validated(self):
        assert encode('["a"]') == '["a"]'
        with pytest.raises(PayloadValidationError) as excinfo:
            encode("not json", field="gallery")
        assert excinfo.value.code == "INVALID_JSON_FIELD"

    @pytest.mark.parametrize("raw", ["42", '"x"', "null", "true"])
    def test_pre_encoded_scalars_are_rejected(self, raw):
        with pytest.raises(PayloadValidationError) as excinfo:
            encode(raw, field="highlights")
        assert excinfo.value.code == "INVALID_JSON_FIELD"

    def test_pre_encoded_object_is_accepted(self):
        assert encode('{"day": 1}') == '{"day": 1}'

    def test_scalars_are_rejected(self):
        with pytest.raises(PayloadValidationError):
            encode(42, field="highlights")

    def test_round_trip(self):
        for value in ([], ["Temples", "Great Wall"], [{"day": 1, "items": ["a", None, 2.5]}]):
            assert decode(encode(value)) == value
        assert decode(encode(None)) == []


class TestParseIsoDatetime:
    def test_aware_value(self):
        dt = parse_iso_datetime("2024-06-01T08:00:00+08:00")
        assert timezone.is_aware(dt)
        assert dt.utcoffset().total_seconds() == 8 * 3600

    def test_naive_value_is_made_aware(self):
        assert timezone.is_aware(parse_iso_datetime("2024-06-01T08:00:00"))

    def test_blank_is_none(self):
        assert parse_iso_datetime("") is None
        assert parse_iso_datetime(None) is None

    def test_invalid_raises(self):
        with pytest.raises(PayloadValidationError) as excinfo:
            parse_iso_datetime("next tuesday")
        assert excinfo.value.code == "INVALID_DATETIME"
