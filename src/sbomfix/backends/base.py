"""Backend protocols consumed by the remediation orchestrator."""

from __future__ import annotations

from typing import Protocol


class SemanticAnalyzer(Protocol):
    """Context-aware analysis over the full scan and SBOM text."""

    def analyze(self, scan_text: str, sbom_text: str, query: str | None = None) -> str:
        """Return the analysis text. Raises BackendError on failure."""
        ...


class GenerativeModel(Protocol):
    """A language model that synthesises a script from a prompt."""

    def health_check(self) -> None:
        """Raise BackendError if the backend is unreachable."""
        ...

    def generate(self, prompt: str) -> str:
        """Return the model's response text. Raises BackendError on failure."""
        ...
