"""Exception hierarchy shared by the pipeline, CLI and web layers."""

from __future__ import annotations


class SbomFixError(Exception):
    """Base error. ``status_code`` is the HTTP status used by the web layer."""

    status_code = 500


class InvalidRequestError(SbomFixError):
    status_code = 400


class SbomNotFoundError(SbomFixError):
    status_code = 400

    def __init__(self, message: str = "SBOM file not found. Please generate it first.") -> None:
        super().__init__(message)


class SourceResolutionError(SbomFixError):
    """The user-supplied source could not be turned into a scannable input."""


class SbomGenerationError(SbomFixError):
    pass


class ScanError(SbomFixError):
    pass


class BackendError(SbomFixError):
    """A remediation backend failed. Recoverable inside the fallback chain."""

    status_code = 502
