"""
Exception hierarchy for sindhi-translator.

Client errors carry the HTTP status and the human-readable message that is
returned to the caller. Everything else is a server-side failure.
"""

from __future__ import annotations


class SindhiTranslatorError(Exception):
    """Base exception for the package."""


class ClientError(SindhiTranslatorError):
    """Error caused by the caller's input. Surfaced as a 4xx response."""

    status_code = 400
    default_message = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class EmptySourceError(ClientError):
    """Source text is missing or blank."""

    default_message = "No text provided"


class NothingToExportError(ClientError):
    """All three record fields are blank."""

    default_message = "Nothing to export"


class InvalidExportTypeError(ClientError):
    """Requested export format is not recognised."""

    default_message = "Invalid export type"


class NoFileError(ClientError):
    """Upload request did not contain a file."""

    default_message = "No file uploaded"


class UnsupportedFileTypeError(ClientError):
    """Uploaded file has an extension we cannot extract text from."""

    default_message = "Invalid file type"


class FileTooLargeError(ClientError):
    """Uploaded file exceeds the configured size limit."""

    status_code = 413
    default_message = "File too large"


class TranslationError(SindhiTranslatorError):
    """A single translation call failed (network, HTTP status, malformed body).

    Always absorbed by the orchestrator; never reaches the caller.
    """


class ConfigurationError(TranslationError):
    """Translation backend is not configured (missing API key, bad URL)."""


class RenderError(SindhiTranslatorError):
    """An export artifact could not be written completely."""


class ExtractionError(SindhiTranslatorError):
    """Text could not be extracted from an uploaded document."""
