"""Service layer for the diffnum API."""

from .annotate import AnnotateService

__all__ = ["AnnotateService"]
