"""Path extraction and binary notice disambiguation for diffnum.

Paths in a git diff appear in three places: the ``diff --git`` start line,
the ``---``/``+++`` header lines, and the ``Binary files ... differ`` notice.
Only the start line shows both paths in a form that can be checked, so the
other two are cross-validated against it whenever their split is ambiguous.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

DEV_NULL = "/dev/null"

# a/, b/, i/, w/, c/, o/ and friends, optionally behind a quote mark
PREFIX_PATTERN = re.compile(r"^[A-Za-z]/")
CANDIDATE_PATTERN = re.compile(r'^"?[A-Za-z]/')
BINARY_NOTICE_PATTERN = re.compile(r"^Binary files (.+) differ$")

_SEPARATOR = " and "
_DELETED_SUFFIX = _SEPARATOR + DEV_NULL


@dataclass
class PathRecord:
    """One side (old or new) of a diff entry's paths."""

    raw: Optional[str] = None
    path: Optional[str] = None
    found: bool = False

    def set(self, raw: str) -> None:
        """Record a raw token and its cleaned path."""
        self.raw = raw
        self.path = clean_path(raw)
        self.found = True

    @property
    def is_dev_null(self) -> bool:
        return self.path == DEV_NULL


def clean_path(token: str) -> str:
    """Strip quote marks and the one-letter mnemonic prefix from a path token."""
    if token == DEV_NULL:
        return token

    path = token
    if path.startswith('"'):
        path = path[1:]
        if path.endswith('"'):
            path = path[:-1]
    return PREFIX_PATTERN.sub("", path, count=1)


def trim_header_token(token: str, start_line: str) -> str:
    """Drop the tab git appends to ``---``/``+++`` paths containing spaces.

    The tab is removed only when the start line does not hold the token as
    written but does hold it without the tab.
    """
    if token.endswith("\t") and token not in start_line and token[:-1] in start_line:
        logger.debug("Trimmed trailing tab from path token", extra={"token": token})
        return token[:-1]
    return token


def has_forbidden_colon(path: Optional[str]) -> bool:
    """Check whether a cleaned path would break the ``path:line:`` layout."""
    return bool(path) and path != DEV_NULL and ":" in path


def parse_binary_notice(text: str) -> Optional[str]:
    """Return the ``<old> and <new>`` part of a binary notice, if text is one."""
    match = BINARY_NOTICE_PATTERN.match(text)
    if not match:
        return None
    return match.group(1)


def resolve_binary_paths(notice_body: str, start_line: str) -> Optional[Tuple[str, str]]:
    """Split a binary notice into its old and new tokens.

    Either token may itself contain `` and ``, so each possible split is
    checked against the start line. Returns ``(old_token, new_token)`` or
    None when no split is confirmed.
    """
    if notice_body.endswith(_DELETED_SUFFIX):
        old_token = notice_body[: -len(_DELETED_SUFFIX)]
        if old_token and old_token in start_line:
            logger.debug("Binary notice resolved as deletion", extra={"old": old_token})
            return old_token, DEV_NULL

    # Widest candidate first; every iteration moves the split point right.
    search_from = 0
    while True:
        index = notice_body.find(_SEPARATOR, search_from)
        if index < 0:
            break
        search_from = index + 1

        candidate = notice_body[index + len(_SEPARATOR):]
        if not CANDIDATE_PATTERN.match(candidate):
            continue
        if start_line.endswith(" " + candidate):
            old_token = notice_body[:index]
            logger.debug(
                "Binary notice resolved",
                extra={"old": old_token, "new": candidate},
            )
            return old_token, candidate

    logger.debug("Binary notice could not be resolved", extra={"notice": notice_body})
    return None
