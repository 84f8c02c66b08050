"""Remediation orchestrator — drives the three-tier fallback chain.

Tiers, in priority order:
  1. Semantic analysis (only when the caller asks for it): full scan + SBOM
  2. Generative model: health-checked first, then prompted with the scan
  3. Static generator: deterministic, always succeeds

A failed tier is logged and recorded in the result's ``warning``; it never
fails the request.
"""

from __future__ import annotations

import logging

from sbomfix.backends.base import GenerativeModel, SemanticAnalyzer
from sbomfix.errors import BackendError
from sbomfix.remediation.ecosystem import PackageEcosystem
from sbomfix.remediation.extract import extract_script_block
from sbomfix.remediation.models import Engine, RemediationResult
from sbomfix.remediation.prompt import build_prompt
from sbomfix.remediation.static import generate_static_script

logger = logging.getLogger(__name__)


class RemediationOrchestrator:
    """Produces a remediation script from scan text, degrading gracefully."""

    def __init__(
        self,
        generative: GenerativeModel,
        semantic: SemanticAnalyzer | None = None,
    ) -> None:
        self._generative = generative
        self._semantic = semantic

    def remediate(
        self,
        scan: str,
        sbom: str,
        ecosystem: PackageEcosystem,
        prefer_advanced: bool = False,
    ) -> RemediationResult:
        if not scan.strip():
            logger.info("Empty scan output, nothing to remediate")
            return RemediationResult(script="", engine=None)

        failures: list[str] = []

        if prefer_advanced:
            result = self._try_semantic(scan, sbom, failures)
            if result is not None:
                return result

        result = self._try_generative(scan, ecosystem, failures)
        if result is not None:
            return result

        logger.info("Falling back to static remediation for %s", ecosystem.value)
        script = generate_static_script(ecosystem)
        return RemediationResult(
            script=script,
            engine=Engine.STATIC,
            commands=script,
            warning=_join(failures),
        )

    def _try_semantic(
        self, scan: str, sbom: str, failures: list[str]
    ) -> RemediationResult | None:
        if self._semantic is None:
            failures.append("semantic analysis is not configured")
            logger.warning("Semantic analysis requested but not configured")
            return None

        try:
            text = self._semantic.analyze(scan, sbom)
        except BackendError as exc:
            logger.warning("Semantic analysis failed, falling back: %s", exc)
            failures.append(f"semantic analysis failed: {exc}")
            return None

        return RemediationResult(
            script=text,
            engine=Engine.SEMANTIC,
            commands=extract_script_block(text),
        )

    def _try_generative(
        self, scan: str, ecosystem: PackageEcosystem, failures: list[str]
    ) -> RemediationResult | None:
        try:
            self._generative.health_check()
        except BackendError as exc:
            logger.warning("Generative backend health check failed: %s", exc)
            failures.append(f"generative backend unavailable: {exc}")
            return None

        try:
            text = self._generative.generate(build_prompt(ecosystem, scan))
        except BackendError as exc:
            logger.warning("Generative remediation failed, falling back: %s", exc)
            failures.append(f"generative model failed: {exc}")
            return None

        return RemediationResult(
            script=text,
            engine=Engine.GENERATIVE,
            commands=extract_script_block(text),
            warning=_join(failures),
        )


def _join(failures: list[str]) -> str | None:
    return "; ".join(failures) if failures else None
