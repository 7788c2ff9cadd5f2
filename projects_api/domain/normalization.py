"""Normalization rules applied to raw repository fields."""
from datetime import datetime, timezone
from typing import Iterable, List, Optional


DATE_FORMAT = "%d/%m/%Y"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Legacy language labels and the label they are published under.
LANGUAGE_ALIASES = {
    "css": "css3",
}


def normalize_language(language: Optional[str]) -> str:
    """Rewrite legacy language labels; anything else is returned unchanged."""
    if not language:
        return ""
    return LANGUAGE_ALIASES.get(language, language)


def parse_timestamp(value: Optional[str]) -> datetime:
    """Parse an ISO-8601 timestamp as returned by the GitHub API.

    Unparseable, missing or non-string values map to the Unix epoch so that ordering
    never fails on a malformed record.
    """
    if not value or not isinstance(value, str):
        return EPOCH
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_date(moment: datetime) -> str:
    """Render a timestamp as a UTC calendar date, e.g. ``31/12/2023``."""
    return moment.astimezone(timezone.utc).strftime(DATE_FORMAT)


def unique_tags(tags: Iterable[str]) -> List[str]:
    """Strip tags, drop blanks and duplicates, keep first-seen order."""
    cleaned = (tag.replace("\n", "").strip() for tag in tags)
    return list(dict.fromkeys(tag for tag in cleaned if tag))
