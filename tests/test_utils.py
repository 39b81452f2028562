"""Tests for shared utility functions."""

import pytest

from detailing.utils import (
    format_time_label,
    is_valid_postcode,
    normalize_postcode,
    outward_code,
    parse_time,
)


class TestNormalizePostcode:
    def test_uppercases(self):
        assert normalize_postcode("bn1 1aa") == "BN11AA"

    def test_strips_inner_and_outer_whitespace(self):
        assert normalize_postcode("  BN1 \t 1AA ") == "BN11AA"

    def test_clean_postcode_unchanged(self):
        assert normalize_postcode("BN11AA") == "BN11AA"


class TestOutwardCode:
    @pytest.mark.parametrize(
        "postcode, expected",
        [
            ("BN1 1AA", "BN1"),
            ("BN41 1AA", "BN41"),
            ("SW1A 1AA", "SW1A"),
            ("M1 1AE", "M1"),
            ("bn41", "BN41"),
            ("", ""),
        ],
    )
    def test_outward_code(self, postcode, expected):
        assert outward_code(postcode) == expected


class TestIsValidPostcode:
    @pytest.mark.parametrize("postcode", ["BN1 1AA", "bn411aa", "SW1A 1AA", "M1 1AE"])
    def test_valid(self, postcode):
        assert is_valid_postcode(postcode)

    @pytest.mark.parametrize("postcode", ["", "BN1", "12345", "BN1 1A"])
    def test_invalid(self, postcode):
        assert not is_valid_postcode(postcode)


class TestTimes:
    def test_parse_time(self):
        assert parse_time("13:30") == 810

    def test_parse_time_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_time("1pm")

    @pytest.mark.parametrize(
        "value, label",
        [
            ("00:00", "12:00 AM"),
            ("10:00", "10:00 AM"),
            ("11:30", "11:30 AM"),
            ("12:00", "12:00 PM"),
            ("13:00", "1:00 PM"),
            ("16:45", "4:45 PM"),
        ],
    )
    def test_format_time_label(self, value, label):
        assert format_time_label(value) == label
