"""Rewriting of local path mentions into remote references."""

from collections.abc import Iterable
from pathlib import Path, PurePath
from typing import NamedTuple


class SubstitutionPair(NamedTuple):
    """A path as written in the text and the URL that replaces it."""

    path: str | PurePath
    url: str


def find_occurrences(text: str, needle: str) -> list[tuple[int, int]]:
    """Return ``(start, end)`` spans of every occurrence of ``needle``.

    The search resumes one character after each hit, so overlapping
    occurrences are all reported.
    """
    if not needle:
        return []

    spans: list[tuple[int, int]] = []
    position = text.find(needle)
    while position != -1:
        spans.append((position, position + len(needle)))
        position = text.find(needle, position + 1)
    return spans


def substitute_file_paths(
    text: str, pairs: Iterable[SubstitutionPair | tuple[str | PurePath, str]]
) -> str:
    """Replace every occurrence of each path in ``text`` with its URL.

    Spans from all pairs are pooled and applied right to left, so the offsets
    of spans still waiting are never shifted by an earlier replacement. Pairs
    whose paths overlap (one path a substring of another) are not reconciled:
    each span inserts its URL and the shared characters are consumed once.

    Matching is purely literal. A path that also appears inside a URL in
    ``text`` is rewritten there too, even though detection ignores paths
    inside URLs.

    Args:
        text: Original text.
        pairs: ``(path, url)`` pairs.

    Returns:
        The rewritten text.
    """
    replacements: list[tuple[int, int, str]] = []
    for path, url in pairs:
        for start, end in find_occurrences(text, str(path)):
            replacements.append((start, end, url))

    replacements.sort(key=lambda span: span[0], reverse=True)

    pieces: list[str] = []
    cursor = len(text)
    for start, end, url in replacements:
        pieces.append(text[min(end, cursor) : cursor])
        pieces.append(url)
        cursor = min(start, cursor)
    pieces.append(text[:cursor])
    return "".join(reversed(pieces))


def markdown_link(path: str | PurePath, url: str) -> str:
    """Build a ``[file name](url)`` link for a path."""
    name = Path(str(path)).name or str(path)
    return f"[{name}]({url})"
