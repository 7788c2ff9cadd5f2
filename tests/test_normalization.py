"""Tests for field normalization rules."""
from datetime import datetime, timezone, timedelta
from projects_api.domain.normalization import (
    EPOCH,
    format_date,
    normalize_language,
    parse_timestamp,
    unique_tags
)


def test_css_is_published_as_css3():
    """Test the css label is published as css3."""
    assert normalize_language("css") == "css3"


def test_other_languages_are_unchanged():
    """Test other language labels pass through unchanged."""
    assert normalize_language("CSS") == "CSS"
    assert normalize_language("Rust") == "Rust"


def test_missing_language_becomes_empty_string():
    """Test a missing language becomes an empty string."""
    assert normalize_language(None) == ""


def test_parse_github_timestamp():
    """Test a GitHub timestamp parses to an aware UTC datetime."""
    parsed = parse_timestamp("2023-04-05T06:07:08Z")

    assert parsed == datetime(2023, 4, 5, 6, 7, 8, tzinfo=timezone.utc)


def test_parse_invalid_timestamp_falls_back_to_epoch():
    """Test invalid or missing timestamps map to the epoch."""
    assert parse_timestamp("yesterday") == EPOCH
    assert parse_timestamp(None) == EPOCH


def test_format_date_uses_utc_calendar_day():
    """Late evening in UTC-3 is already the next day in UTC."""
    moment = datetime(2023, 12, 31, 22, 30, tzinfo=timezone(timedelta(hours=-3)))

    assert format_date(moment) == "01/01/2024"


def test_unique_tags_strips_and_deduplicates():
    """Test tags are stripped, deduplicated and blanks dropped."""
    tags = unique_tags(["\n  python\n", "api", "python", "", "  ", "api\n"])

    assert tags == ["python", "api"]


def test_parse_non_string_timestamp_falls_back_to_epoch():
    """Test numeric timestamps are treated as unparseable."""
    assert parse_timestamp(1700000000) == EPOCH
