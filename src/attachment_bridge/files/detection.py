"""Detection of local file paths mentioned in free-form text.

Four path grammars are matched against the text after URLs have been removed
from it:

- absolute Unix-style paths (``/home/user/notes.txt``)
- ``./``-relative paths (``./src/main.py``)
- ``~/``-home-relative paths (``~/Documents/report.pdf``)
- drive-letter paths (``C:\\Users\\name\\data.csv``)

Every candidate is confirmed against the filesystem. Matches are not
deduplicated across grammars: the same file found by two grammars appears
twice. Callers that need one entry per file should key the result by
``FileReference.resolved_path``.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

_TRIM_CHARS = " '\"()"

URL_PATTERN = re.compile(r"https?://[\w./?\-_%&=]+")


class GrammarKind(Enum):
    """Path grammar that produced a detection."""

    UNIX_ABSOLUTE = "unix_absolute"
    RELATIVE = "relative"
    HOME_RELATIVE = "home_relative"
    WINDOWS_DRIVE = "windows_drive"


@dataclass(frozen=True)
class FileReference:
    """A local file mentioned in text.

    Args:
        matched_text: The path exactly as written in the text, trimmed.
        resolved_path: Absolute path of the file at detection time.
        grammar_kind: The grammar that matched.
    """

    matched_text: str
    resolved_path: Path
    grammar_kind: GrammarKind


# Order matters: results are reported grammar by grammar in this order.
PATH_GRAMMARS: tuple[tuple[GrammarKind, re.Pattern[str]], ...] = (
    (GrammarKind.UNIX_ABSOLUTE, re.compile(r"/[a-zA-Z0-9_./-]+")),
    (GrammarKind.RELATIVE, re.compile(r"\./[a-zA-Z0-9_./-]+")),
    (GrammarKind.HOME_RELATIVE, re.compile(r"~/[a-zA-Z0-9_./-]+")),
    (GrammarKind.WINDOWS_DRIVE, re.compile(r"[A-Za-z]:\\[a-zA-Z0-9_.\\-]+")),
)


def _home_dir() -> Path | None:
    """Return the caller's home directory, or None if it cannot be determined."""
    try:
        return Path.home()
    except (RuntimeError, KeyError):
        return None


def strip_urls(text: str) -> str:
    """Remove every URL from ``text`` so its path segments are not read as files."""
    return URL_PATTERN.sub("", text)


def _candidate_path(kind: GrammarKind, path_text: str) -> Path | None:
    if kind is GrammarKind.HOME_RELATIVE:
        home = _home_dir()
        if home is None:
            logger.debug("Home directory unavailable, dropping %s", path_text)
            return None
        return home / path_text[1:].lstrip("/")
    return Path(path_text)


def detect_local_file_paths(text: str) -> list[FileReference]:
    """Find mentions of existing local files in ``text``.

    Args:
        text: Free-form text, typically a user message.

    Returns:
        References in grammar order, then in order of appearance. Candidates
        that do not exist or are not regular files are dropped silently.
    """
    searchable = strip_urls(text)
    references: list[FileReference] = []

    for kind, pattern in PATH_GRAMMARS:
        for match in pattern.finditer(searchable):
            path_text = match.group(0).strip(_TRIM_CHARS)
            candidate = _candidate_path(kind, path_text)
            if candidate is None:
                continue

            try:
                is_file = candidate.is_file()
            except OSError:
                is_file = False
            if not is_file:
                continue

            logger.debug("Detected local file %s (%s)", path_text, kind.value)
            references.append(
                FileReference(
                    matched_text=path_text,
                    resolved_path=candidate.absolute(),
                    grammar_kind=kind,
                )
            )

    return references
