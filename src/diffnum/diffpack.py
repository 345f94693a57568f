"""Diff header state machine and line annotation for diffnum."""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, TextIO

from .ansi import strip_ansi
from .config import AnnotateConfig
from .errors import (
    BinaryPathError,
    ColonInPathError,
    CombinedDiffError,
    DeletedFileBodyError,
    HunkRangeError,
    IndicatorError,
    MissingPathsError,
)
from .emitter import DELETED_FIELD, Emitter
from .paths import (
    PathRecord,
    has_forbidden_colon,
    parse_binary_notice,
    resolve_binary_paths,
    trim_header_token,
)

logger = logging.getLogger(__name__)

ADDED = "+"
REMOVED = "-"
CONTEXT = " "
NO_NEWLINE = "\\"


class Phase(Enum):
    """Where the state machine is within the current diff entry."""

    IDLE = "idle"
    IN_HEADER = "in_header"
    IN_BODY = "in_body"


@dataclass(frozen=True)
class DiffLine:
    """An input line in both its original and ANSI-stripped forms."""

    raw: str
    plain: str

    @classmethod
    def from_raw(cls, raw: str) -> "DiffLine":
        """Build from a line with its terminator already removed."""
        return cls(raw=raw, plain=strip_ansi(raw).rstrip("\r"))


@dataclass
class DiffEntry:
    """One file's section of the diff."""

    start_line: str
    old: PathRecord = field(default_factory=PathRecord)
    new: PathRecord = field(default_factory=PathRecord)
    is_binary: bool = False

    @property
    def paths_resolved(self) -> bool:
        return self.old.found and self.new.found

    @property
    def deleted(self) -> bool:
        return self.new.is_dev_null

    @property
    def display_path(self) -> str:
        """Path shown in the output: the new path, or the old one if deleted."""
        if self.deleted:
            return self.old.path or ""
        return self.new.path or ""


@dataclass
class HunkState:
    """Running new-file line counter for the current hunk."""

    next_line: int

    def take(self) -> int:
        """Return the current line number and advance past it."""
        value = self.next_line
        self.next_line += 1
        return value

    @property
    def pad_width(self) -> int:
        return len(str(self.next_line))


@dataclass
class DiffState:
    """Everything the state machine carries from one line to the next."""

    phase: Phase = Phase.IDLE
    entry: Optional[DiffEntry] = None
    hunk: Optional[HunkState] = None
    line_no: int = 0
    entries: int = 0
    annotated: int = 0

    def begin_entry(self, start_line: str) -> DiffEntry:
        """Discard the previous entry and start a new one."""
        self.entry = DiffEntry(start_line=start_line)
        self.hunk = None
        self.phase = Phase.IN_HEADER
        self.entries += 1
        return self.entry


@dataclass
class AnnotatedLine:
    """One output line before rendering."""

    kind: str  # header, hunk, body, binary
    text: str
    path: Optional[str] = None
    field: Optional[str] = None
    line_number: Optional[int] = None
    deleted: bool = False


class DiffProcessor:
    """Consumes diff lines one at a time and produces annotated records."""

    def __init__(self, config: AnnotateConfig):
        """Initialize diff processor."""
        self.config = config
        self.start_pattern = re.compile(r"^diff ")
        self.combined_hunk_pattern = re.compile(r"^@@@+")
        self.hunk_header_pattern = re.compile(
            r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@"
        )

    def process_line(self, state: DiffState, raw: str) -> List[AnnotatedLine]:
        """Advance the state machine by one line and return what to print."""
        line = DiffLine.from_raw(raw)
        state.line_no += 1
        plain = line.plain

        if self.start_pattern.match(plain):
            entry = state.begin_entry(plain)
            logger.debug(
                "Started diff entry",
                extra={"line_no": state.line_no, "start_line": entry.start_line},
            )
            return self._header(line)

        if plain.startswith("@@"):
            return self._start_hunk(state, line)

        if state.phase is Phase.IN_BODY:
            return [self._annotate_body(state, line)]

        if state.phase is Phase.IN_HEADER:
            if plain.startswith("--- "):
                self._record_path(state, state.entry.old, plain[4:])
            elif plain.startswith("+++ "):
                self._record_path(state, state.entry.new, plain[4:])
            else:
                notice_body = parse_binary_notice(plain)
                if notice_body is not None:
                    return self._binary(state, line, notice_body)

        return self._header(line)

    def _header(self, line: DiffLine) -> List[AnnotatedLine]:
        if not self.config.show_header:
            return []
        return [AnnotatedLine(kind="header", text=line.raw)]

    def _record_path(self, state: DiffState, record: PathRecord, token: str) -> None:
        token = trim_header_token(token, state.entry.start_line)
        record.set(token)
        self._check_colon(record.path, state.line_no)
        logger.debug(
            "Recorded path",
            extra={"line_no": state.line_no, "raw": record.raw, "path": record.path},
        )

    def _check_colon(self, path: Optional[str], line_no: int) -> None:
        if not self.config.allow_colons_in_path and has_forbidden_colon(path):
            raise ColonInPathError(path, line_no)

    def _binary(
        self, state: DiffState, line: DiffLine, notice_body: str
    ) -> List[AnnotatedLine]:
        entry = state.entry
        resolved = resolve_binary_paths(notice_body, entry.start_line)
        if resolved is None:
            raise BinaryPathError(state.line_no, line.raw)

        old_token, new_token = resolved
        entry.old.set(old_token)
        entry.new.set(new_token)
        entry.is_binary = True
        self._check_colon(entry.display_path, state.line_no)

        state.phase = Phase.IDLE
        logger.debug(
            "Binary entry",
            extra={
                "line_no": state.line_no,
                "path": entry.display_path,
                "deleted": entry.deleted,
            },
        )

        if self.config.show_header:
            return self._header(line)
        if not self.config.show_binary:
            return []
        return [
            AnnotatedLine(
                kind="binary",
                text="",
                path=entry.display_path,
                field=DELETED_FIELD if entry.deleted else None,
                deleted=entry.deleted,
            )
        ]

    def _start_hunk(self, state: DiffState, line: DiffLine) -> List[AnnotatedLine]:
        plain = line.plain
        if self.combined_hunk_pattern.match(plain):
            raise CombinedDiffError(state.line_no, line.raw)

        entry = state.entry
        if entry is None or entry.is_binary or not entry.paths_resolved:
            raise MissingPathsError(state.line_no, line.raw)

        header_match = self.hunk_header_pattern.match(plain)
        if not header_match:
            raise HunkRangeError(state.line_no, line.raw)

        state.hunk = HunkState(next_line=int(header_match.group(3)))
        state.phase = Phase.IN_BODY
        logger.debug(
            "Started hunk",
            extra={"line_no": state.line_no, "new_start": state.hunk.next_line},
        )

        if not self.config.show_hunk:
            return []
        return [AnnotatedLine(kind="hunk", text=line.raw)]

    def _annotate_body(self, state: DiffState, line: DiffLine) -> AnnotatedLine:
        entry = state.entry
        indicator = line.plain[:1]
        line_number = None

        if entry.deleted:
            if indicator not in (REMOVED, NO_NEWLINE):
                raise DeletedFileBodyError(state.line_no, line.raw)
            line_field = DELETED_FIELD
        elif indicator in (ADDED, CONTEXT):
            line_number = state.hunk.take()
            line_field = str(line_number)
        elif indicator in (REMOVED, NO_NEWLINE):
            line_field = " " * state.hunk.pad_width
        else:
            raise IndicatorError(state.line_no, line.raw)

        state.annotated += 1
        return AnnotatedLine(
            kind="body",
            text=line.raw,
            path=entry.display_path,
            field=line_field,
            line_number=line_number,
            deleted=entry.deleted,
        )


def iter_records(
    lines: Iterable[str], config: AnnotateConfig, state: Optional[DiffState] = None
) -> Iterator[AnnotatedLine]:
    """Yield annotated records for each line of a diff stream."""
    processor = DiffProcessor(config)
    if state is None:
        state = DiffState()
    for raw in lines:
        if raw.endswith("\n"):
            raw = raw[:-1]
        yield from processor.process_line(state, raw)


def annotate_stream(source: Iterable[str], sink: TextIO, config: AnnotateConfig) -> DiffState:
    """Annotate a diff stream line by line, writing each result immediately."""
    emitter = Emitter(config)
    state = DiffState()
    for record in iter_records(source, config, state):
        sink.write(emitter.render(record))
        sink.write("\n")

    logger.info(
        "Annotated diff stream",
        extra={
            "lines": state.line_no,
            "entries": state.entries,
            "annotated": state.annotated,
        },
    )
    return state
