"""Slug and commit message sanitizers."""

import re
import unicodedata

MAX_SLUG_LENGTH = 60
MAX_COMMIT_MESSAGE_LENGTH = 200

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """
    Reduce text to a URL-safe token.

    Lowercase ASCII letters and digits separated by single hyphens, no leading
    or trailing hyphen, at most max_length characters. Characters without an
    ASCII decomposition (e.g. Han ideographs) are dropped, so the result may be
    empty.
    """
    normalized = unicodedata.normalize("NFKD", text)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
    slug = _NON_ALNUM.sub("-", ascii_text).strip("-")
    if len(slug) > max_length:
        slug = slug[:max_length].rstrip("-")
    return slug


def with_suffix(slug: str, attempt: int, max_length: int = MAX_SLUG_LENGTH) -> str:
    """
    Disambiguate a slug for the given attempt number.

    Attempt 1 is the slug itself; attempt n > 1 appends "-n", shortening the
    base so the result still fits in max_length.
    """
    if attempt <= 1:
        return slug
    suffix = f"-{attempt}"
    base = slug[: max_length - len(suffix)].rstrip("-")
    return f"{base}{suffix}"


def sanitize_commit_message(message: str) -> str:
    """Strip control characters, trim, and cap the length of a commit message."""
    cleaned = "".join(
        char for char in message if unicodedata.category(char) != "Cc"
    )
    cleaned = cleaned.strip()
    return cleaned[:MAX_COMMIT_MESSAGE_LENGTH]
