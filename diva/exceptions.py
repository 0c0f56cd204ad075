"""
Error taxonomy for the document generator.

Each class maps to one HTTP outcome in ``diva.main``:

ValidationError        → 400, never retried
UpstreamProviderError  → 500, provider message surfaced in ``details``
SerializationError     → 500, python-docx failure surfaced in ``details``

The transcoder itself never raises these: malformed Markdown is rendered
best-effort.
"""
from __future__ import annotations

from typing import List, Optional


class DivaError(Exception):
    """Base class for all domain errors raised by the service."""

    def __init__(self, message: str, details: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or []


class ValidationError(DivaError):
    """A required request field is missing or blank."""


class UpstreamProviderError(DivaError):
    """The text-generation provider failed or returned a malformed response."""


class SerializationError(DivaError):
    """Building or packaging the .docx payload failed."""
