"""Parsing helpers for skill manifests."""

from __future__ import annotations

NO_DESCRIPTION = "No description"
DESCRIPTION_PREFIX = "description:"
DEFAULT_MAX_CHARS = 100


def _strip_quotes(value: str) -> str:
    # One layer only: '""x""' keeps its inner quotes.
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def extract_description(text: str, max_chars: int = DEFAULT_MAX_CHARS) -> str:
    """Extract a one-line summary from a manifest.

    The first ``description:`` line wins, wherever it appears. Without one,
    the first line that is not blank, a heading or a ``---`` fence is used,
    truncated to ``max_chars`` characters.

    Args:
        text: Manifest text (may be empty or garbage)
        max_chars: Truncation length for the fallback line

    Returns:
        The description, or "No description" when nothing usable is found.
    """
    lines = text.splitlines()

    for line in lines:
        trimmed = line.strip()
        if trimmed.startswith(DESCRIPTION_PREFIX):
            return _strip_quotes(trimmed[len(DESCRIPTION_PREFIX) :].strip())

    for line in lines:
        trimmed = line.strip()
        if trimmed and not trimmed.startswith("#") and not trimmed.startswith("---"):
            return trimmed[:max_chars]

    return NO_DESCRIPTION
