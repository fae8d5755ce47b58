"""Text helpers used for slugs and post presentation data"""

import math
import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_NON_SLUG_CHARS = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATORS = re.compile(r"[\s_-]+")

# Characters read per minute
READING_SPEED = 200


def slugify(text: str) -> str:
    """Convert text to a lowercase, URL-safe ASCII slug.

    Non-ASCII characters are dropped, so a title written entirely in
    another script yields an empty string; callers supply a fallback.
    """
    slug = _NON_SLUG_CHARS.sub("", text.lower())
    slug = _SEPARATORS.sub("-", slug)
    return slug.strip("-")


def truncate_text(text: str, max_length: int) -> str:
    """Cut text at max_length, dropping a trailing partial word, and add an ellipsis."""
    if len(text) <= max_length:
        return text
    return re.sub(r"\s+\S*$", "", text[:max_length]) + "..."


def calculate_reading_time(content: str) -> int:
    """Estimated reading time in whole minutes (at least 1)."""
    return max(1, math.ceil(len(content) / READING_SPEED))


def format_number(num: int) -> str:
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return str(num)


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.match(email) is not None
