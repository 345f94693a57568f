"""ANSI SGR escape handling for diffnum."""

import re

# git emits the bare reset "ESC[m", so the parameter list may be empty
SGR_PATTERN = re.compile(r"\x1b\[[0-9;]*m")
COLOR_SPEC_PATTERN = re.compile(r"^[0-9;]*$")

COLOR_OFF = "\x1b[m"


def strip_ansi(text: str) -> str:
    """Return a copy of text with every SGR escape sequence removed."""
    return SGR_PATTERN.sub("", text)


def is_color_spec(value: str) -> bool:
    """Check whether value is usable as the parameter list of an SGR escape."""
    return bool(COLOR_SPEC_PATTERN.match(value))


def colorize(text: str, spec: str) -> str:
    """Wrap text in a color-on/color-off pair when a color spec is set."""
    if not spec:
        return text
    return f"\x1b[{spec}m{text}{COLOR_OFF}"
