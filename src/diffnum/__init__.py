"""diffnum.

A unified diff filter that prefixes every diff body line with its file path
and the line number it occupies in the new version of the file.
"""

__version__ = "1.0.0"
__author__ = "diffnum developers"

__all__ = []
