"""
Shared validators for input coercion and sanitization.

Used both by pydantic "before" validators (date-time strings, comma-separated
tags) and by the upload handler (extension/MIME checks).
"""

import os
import re
from datetime import date, datetime
from typing import Any, Optional
from urllib.parse import urlparse

from shared.config.constants import (
    ALLOWED_IMAGE_EXTENSIONS,
    ALLOWED_IMAGE_MIME_TYPES,
    Limits,
)

# Blocked URL schemes for image URLs
BLOCKED_SCHEMES = {"javascript", "data", "file", "ftp", "mailto", "tel", "vbscript"}

MAX_URL_LENGTH = 2048


def validate_image_url(url: Optional[str]) -> Optional[str]:
    """
    Validate an image URL.

    Accepts site-relative paths (as returned by the upload endpoint, e.g.
    "/uploads/1694...-123.jpg") and absolute http(s) URLs.

    Raises:
        ValueError: If the URL uses a disallowed scheme or is malformed.
    """
    if url is None:
        return None

    url = url.strip()
    if not url:
        return None

    if len(url) > MAX_URL_LENGTH:
        raise ValueError(f"URL too long (max {MAX_URL_LENGTH} characters)")

    if url.startswith("/") and not url.startswith("//"):
        return url

    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    if scheme in BLOCKED_SCHEMES:
        raise ValueError(f"URL scheme not allowed: {scheme}")
    if scheme not in ("http", "https"):
        raise ValueError("Only relative paths or HTTP/HTTPS URLs are allowed")
    if not parsed.netloc:
        raise ValueError("URL has no host")

    return url


def parse_datetime(value: Any) -> Any:
    """
    Coerce an ISO-8601 date-time string into a datetime.

    Accepts "2025-09-14T20:00", "2025-09-14 20:00:00", "2025-09-14T20:00:00Z"
    and offsets such as "+02:00". Non-string values are returned unchanged so
    the schema's own type check reports them.
    """
    if not isinstance(value, str):
        return value

    text = value.strip()
    if not text:
        return value
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return value


def parse_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD query parameter.

    Raises:
        ValueError: If the value is not a calendar date.
    """
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def split_tags(value: Any) -> Any:
    """
    Normalize menu item tags.

    "spicy, vegan,,gluten-free " -> ["spicy", "vegan", "gluten-free"]
    Lists are trimmed and de-duplicated in order; other types pass through.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if isinstance(value, (list, tuple, set)):
        seen: list[str] = []
        for tag in value:
            if not isinstance(tag, str):
                return value
            tag = tag.strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen
    return value


def escape_like_pattern(value: str) -> str:
    """
    Escape special characters in LIKE patterns.

    SQL LIKE uses % and _ as wildcards; escaping them keeps a search term
    from matching more than its literal text.
    """
    if not value:
        return value

    # Escape the escape character first, then the wildcards
    value = value.replace("\\", "\\\\")
    value = value.replace("%", "\\%")
    value = value.replace("_", "\\_")
    return value


def sanitize_search_term(term: Optional[str], max_length: int = Limits.MAX_SEARCH_TERM_LENGTH) -> str:
    """Trim, truncate and strip control characters from a search term."""
    if not term:
        return ""

    term = term.strip()[:max_length]
    return re.sub(r"[\x00-\x1f\x7f-\x9f]", "", term)


def is_allowed_image(filename: Optional[str], content_type: Optional[str]) -> bool:
    """
    Check that both the file extension and the declared MIME type are images
    of an accepted kind (jpeg/jpg/png/gif/webp).
    """
    if not filename or not content_type:
        return False

    ext = os.path.splitext(filename)[1].lower()
    mime = content_type.split(";", 1)[0].strip().lower()
    return ext in ALLOWED_IMAGE_EXTENSIONS and mime in ALLOWED_IMAGE_MIME_TYPES
