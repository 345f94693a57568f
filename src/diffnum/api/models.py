"""Pydantic models for diffnum API requests and responses."""

from typing import List

from pydantic import BaseModel, Field, field_validator

from ..config import BOOLEAN_OPTIONS, COLOR_OPTIONS


class AnnotateRequest(BaseModel):
    """Request model for the annotate endpoint."""

    diff: str = Field(
        ...,
        description="Unified diff text, optionally containing ANSI color codes",
        examples=["diff --git a/f b/f\n--- a/f\n+++ b/f\n@@ -1,2 +1,3 @@\n one\n+two\n three\n"],
    )
    options: List[str] = Field(
        default_factory=list,
        description="Option tokens in key=value form",
        examples=[["show_path=1", "color_line_number=33"]],
    )

    @field_validator("options")
    @classmethod
    def options_must_be_tokens(cls, v):
        """Basic validation for option tokens."""
        for token in v:
            if "=" not in token:
                raise ValueError(f"option {token!r} must be in key=value form")
        return v


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., examples=["healthy"])
    version: str = Field(..., examples=["1.0.0"])


class VersionResponse(BaseModel):
    """Response model for version endpoint."""

    version: str = Field(..., examples=["1.0.0"])
    api_version: str = Field(..., examples=["v1"])
    supported_options: List[str] = Field(
        default_factory=lambda: list(BOOLEAN_OPTIONS + COLOR_OPTIONS)
    )
