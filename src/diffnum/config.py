"""Configuration management for diffnum."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from .ansi import is_color_spec
from .errors import ConfigError

logger = logging.getLogger(__name__)

BOOLEAN_OPTIONS = (
    "show_header",
    "show_hunk",
    "show_path",
    "show_binary",
    "allow_colons_in_path",
)
COLOR_OPTIONS = ("color_line_number", "color_path", "color_separator")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class AnnotateConfig:
    """Options controlling what diffnum prints and how it is colored."""

    # Output selection
    show_header: bool = True
    show_hunk: bool = True
    show_path: bool = False
    show_binary: bool = False

    # Path safety
    allow_colons_in_path: bool = True

    # SGR parameter strings, e.g. "1;33"; empty means uncolored
    color_line_number: str = ""
    color_path: str = ""
    color_separator: str = ""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        for name in COLOR_OPTIONS:
            value = getattr(self, name)
            if not isinstance(value, str) or not is_color_spec(value):
                raise ConfigError(name, str(value), "color must contain only digits and semicolons")

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "AnnotateConfig":
        """Build a configuration from ``key=value`` tokens; later tokens win."""
        options: Dict[str, str] = {}
        for token in tokens:
            key, sep, value = token.partition("=")
            key = key.strip()
            if not sep:
                raise ConfigError(key or token, None, "expected key=value")
            if key not in BOOLEAN_OPTIONS and key not in COLOR_OPTIONS:
                raise ConfigError(key, value, "unknown option")
            options[key] = value.strip()
        return cls.from_options(options)

    @classmethod
    def from_options(cls, options: Dict[str, str]) -> "AnnotateConfig":
        """Resolve explicit option values and derive the interlocking defaults."""
        show_header = _get_bool(options, "show_header", True)
        show_hunk = _get_bool(options, "show_hunk", show_header)
        # without headers the path is the only way to tell files apart
        show_path = _get_bool(options, "show_path", not show_header)
        show_binary = _get_bool(options, "show_binary", show_path and not show_header)
        # a colon only corrupts the path:line: layout when the path is shown
        allow_colons = _get_bool(options, "allow_colons_in_path", not show_path)

        config = cls(
            show_header=show_header,
            show_hunk=show_hunk,
            show_path=show_path,
            show_binary=show_binary,
            allow_colons_in_path=allow_colons,
            color_line_number=options.get("color_line_number", ""),
            color_path=options.get("color_path", ""),
            color_separator=options.get("color_separator", ""),
        )
        logger.debug("Resolved configuration", extra={"options": config.to_options_dict()})
        return config

    def to_options_dict(self) -> Dict[str, Any]:
        """Convert config to a dictionary keyed by option name."""
        return {
            "show_header": self.show_header,
            "show_hunk": self.show_hunk,
            "show_path": self.show_path,
            "show_binary": self.show_binary,
            "allow_colons_in_path": self.allow_colons_in_path,
            "color_line_number": self.color_line_number,
            "color_path": self.color_path,
            "color_separator": self.color_separator,
        }


def _get_bool(options: Dict[str, str], name: str, default: bool) -> bool:
    value: Optional[str] = options.get(name)
    if value is None:
        return default
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(name, value, "expected a boolean (1/0, true/false, yes/no, on/off)")
