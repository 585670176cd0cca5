"""Tests for log-safe formatting of visitor-supplied values"""
import pytest

from storefront.logging import get_logger, mask_email_for_logging, sanitize_id_for_logging


@pytest.mark.parametrize("value,expected", [
    ("3f1c9a7e-1111-2222-3333-444455556666", "3f1c9a7e"),
    ("short", "short"),
    ("abc\ndef\tgh", "abc?def?"),
    (None, "N/A"),
    ("", "N/A"),
])
def test_sanitize_id_for_logging(value, expected):
    assert sanitize_id_for_logging(value) == expected


@pytest.mark.parametrize("value,expected", [
    ("budi.santoso@example.com", "b***@example.com"),
    ("not-an-email", "n***"),
    ("a@b.c\nINFO forged entry", "a***@b.c?INFO forged entry"),
    (None, "N/A"),
])
def test_mask_email_for_logging(value, expected):
    assert mask_email_for_logging(value) == expected


def test_get_logger_is_cached():
    assert get_logger("storefront.test") is get_logger("storefront.test")
