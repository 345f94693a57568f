"""Error definitions and handling for diffnum."""

from typing import Any, Dict, Optional

from .ansi import strip_ansi


class DiffNumError(Exception):
    """Base exception for diffnum errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with code, message, and optional details."""
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        result = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ConfigError(DiffNumError):
    """An option failed its type contract."""

    def __init__(self, option: str, value: Optional[str], reason: str):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Invalid option {option}: {reason}",
            details={"option": option, "value": value, "reason": reason},
        )


class StructuralError(DiffNumError):
    """The diff grammar was violated at a specific input line."""

    code = "STRUCTURE_INVALID"
    reason = "malformed diff"

    def __init__(self, line_no: int, line: str):
        text = strip_ansi(line)
        super().__init__(
            code=self.code,
            message=f"{self.reason} at input line {line_no}: {text!r}",
            details={"line_no": line_no, "line": text},
        )


class MissingPathsError(StructuralError):
    """A hunk header arrived before both file paths were known."""

    code = "HUNK_WITHOUT_PATHS"
    reason = "hunk header found before the old and new paths were determined"


class HunkRangeError(StructuralError):
    """A hunk header could not be parsed."""

    code = "HUNK_RANGE_INVALID"
    reason = "unable to parse the new-file range of the hunk header"


class CombinedDiffError(StructuralError):
    """Combined (merge) diff hunks are not supported."""

    code = "COMBINED_DIFF_UNSUPPORTED"
    reason = "combined diff format is not supported"


class IndicatorError(StructuralError):
    """A body line started with an unknown indicator."""

    code = "INDICATOR_INVALID"
    reason = "unrecognized diff line indicator"


class DeletedFileBodyError(StructuralError):
    """A deleted file's body contained something other than removals."""

    code = "DELETED_FILE_BODY_INVALID"
    reason = "deleted file contains a line that is not a removal"


class PathError(DiffNumError):
    """A file path could not be used in the output."""


class ColonInPathError(PathError):
    """A resolved path contains a colon, which would break the output format."""

    def __init__(self, path: str, line_no: int):
        super().__init__(
            code="PATH_HAS_COLON",
            message=(
                f"path contains a colon at input line {line_no}: {path!r} "
                "(set allow_colons_in_path=1 to permit)"
            ),
            details={"path": path, "line_no": line_no},
        )


class BinaryPathError(PathError):
    """The paths of a binary notice could not be separated."""

    def __init__(self, line_no: int, line: str):
        text = strip_ansi(line)
        super().__init__(
            code="BINARY_PATH_UNDETERMINED",
            message=f"unable to determine binary file path at input line {line_no}: {text!r}",
            details={"line_no": line_no, "line": text},
        )
