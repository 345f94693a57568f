"""Rendering of annotated records into output lines."""

from typing import TYPE_CHECKING

from .ansi import colorize
from .config import AnnotateConfig

if TYPE_CHECKING:
    from .diffpack import AnnotatedLine

SEPARATOR = ":"
DELETED_FIELD = "~"


class Emitter:
    """Formats the ``[path:][field:]`` prefix with optional coloring."""

    def __init__(self, config: AnnotateConfig):
        """Initialize with configuration."""
        self.config = config
        self.separator = colorize(SEPARATOR, config.color_separator)

    def render(self, record: "AnnotatedLine") -> str:
        """Render a record as a single output line without its terminator."""
        if record.kind == "body":
            return self.render_body(record.path, record.field, record.text)
        if record.kind == "binary":
            return self.render_binary(record.path, record.deleted)
        return record.text

    def render_body(self, path: str, line_field: str, text: str) -> str:
        """Prefix a diff body line; the line itself is never recolored."""
        prefix = ""
        if self.config.show_path:
            prefix = colorize(path, self.config.color_path) + self.separator
        return (
            prefix
            + colorize(line_field, self.config.color_line_number)
            + self.separator
            + text
        )

    def render_binary(self, path: str, deleted: bool) -> str:
        """Render the stand-in line for a binary entry when headers are hidden."""
        shown_path = path if self.config.show_path else ""
        rendered = colorize(shown_path, self.config.color_path) if shown_path else ""
        rendered += self.separator
        if deleted:
            rendered += colorize(DELETED_FIELD, self.config.color_line_number) + self.separator
        return rendered
