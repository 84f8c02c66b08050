"""Wrappers around the external SBOM tools: syft, grype and sbomqs.

Each tool is a subprocess with a bounded runtime. Generation and scanning
failures are fatal to the request; quality scoring never raises.
"""

from __future__ import annotations

import json
import logging
import re
import subprocess

from sbomfix.errors import SbomGenerationError, ScanError
from sbomfix.sbom.models import QualityScore, SbomHandle, ScoreSource
from sbomfix.source.models import (
    ContainerImage,
    LocalPath,
    RemoteRepository,
    SourceLocator,
)

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")


def syft_input(locator: SourceLocator) -> str:
    """The source argument syft expects for a locator."""
    if isinstance(locator, LocalPath):
        scheme = "file" if locator.path.is_file() else "dir"
        return f"{scheme}:{locator.path}"
    if isinstance(locator, RemoteRepository):
        return f"dir:{locator.checkout}"
    if isinstance(locator, ContainerImage):
        return locator.ref
    raise TypeError(f"Unsupported source locator: {locator!r}")


class SyftGenerator:
    """Generates a CycloneDX JSON SBOM with ``syft``."""

    def __init__(self, timeout: float = 600.0, binary: str = "syft") -> None:
        self._timeout = timeout
        self._binary = binary

    def generate(self, locator: SourceLocator) -> str:
        source = syft_input(locator)
        logger.info("Processing SBOM for source: %s", source)
        try:
            result = subprocess.run(
                [self._binary, "scan", source, "-o", "cyclonedx-json", "-q"],
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError as exc:
            raise SbomGenerationError(f"{self._binary} is not installed") from exc
        except subprocess.TimeoutExpired as exc:
            raise SbomGenerationError(
                f"SBOM generation timed out after {self._timeout}s"
            ) from exc

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            raise SbomGenerationError(f"Failed to create SBOM: {detail}")

        try:
            json.loads(result.stdout)
        except ValueError as exc:
            raise SbomGenerationError(f"{self._binary} produced invalid JSON: {exc}") from exc
        return result.stdout


class GrypeScanner:
    """Scans an SBOM with ``grype``, reporting only findings with a fix."""

    def __init__(self, timeout: float = 300.0, binary: str = "grype") -> None:
        self._timeout = timeout
        self._binary = binary

    def scan(self, sbom: SbomHandle) -> str:
        logger.info("Starting SBOM scan of %s", sbom.path)
        try:
            result = subprocess.run(
                [self._binary, f"sbom:{sbom.path}", "--only-fixed", "-q"],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError as exc:
            raise ScanError(f"Error running Grype: {self._binary} is not installed") from exc
        except subprocess.TimeoutExpired as exc:
            raise ScanError(f"Error running Grype: timed out after {self._timeout}s") from exc

        if result.returncode != 0:
            raise ScanError(
                f"Error running Grype: exit status {result.returncode}: "
                f"{result.stdout.strip()}"
            )
        return result.stdout


class QualityScorer:
    """Scores an SBOM with ``sbomqs``. Advisory only."""

    def __init__(self, timeout: float = 30.0, binary: str = "sbomqs") -> None:
        self._timeout = timeout
        self._binary = binary

    def score(self, sbom: SbomHandle) -> QualityScore:
        try:
            result = subprocess.run(
                [self._binary, "score", "--json", str(sbom.path)],
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError:
            return QualityScore(None, ScoreSource.UNAVAILABLE, f"{self._binary} is not installed")
        except subprocess.TimeoutExpired:
            logger.warning("Quality scoring timed out after %ss", self._timeout)
            return QualityScore(None, ScoreSource.UNAVAILABLE, "timed out")
        except OSError as exc:
            logger.warning("Quality scoring failed: %s", exc)
            return QualityScore(None, ScoreSource.UNAVAILABLE, str(exc))

        if result.returncode != 0:
            logger.warning("%s exited with status %d", self._binary, result.returncode)
            return QualityScore(
                None, ScoreSource.UNAVAILABLE, f"exit status {result.returncode}"
            )
        return parse_quality_output(result.stdout)


def parse_quality_output(output: str) -> QualityScore:
    """Read ``files[0].avg_score`` from JSON, else the first number in the text."""
    try:
        data = json.loads(output)
    except ValueError:
        data = None

    if isinstance(data, dict):
        try:
            return QualityScore(float(data["files"][0]["avg_score"]), ScoreSource.FULL)
        except (KeyError, IndexError, TypeError, ValueError):
            logger.debug("Unexpected sbomqs JSON layout")
            return QualityScore(None, ScoreSource.UNAVAILABLE, "unexpected JSON layout")

    match = _NUMBER_RE.search(output)
    if match:
        return QualityScore(float(match.group()), ScoreSource.BASIC)
    return QualityScore(None, ScoreSource.UNAVAILABLE, "no score in output")
