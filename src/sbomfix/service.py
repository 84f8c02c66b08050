"""Remediation service — composes source resolution, SBOM tools and remediation.

This is the seam shared by the CLI and the web API. Every call receives or
returns an explicit :class:`SbomHandle`; nothing downstream reads a shared
"current SBOM" path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sbomfix.backends.base import SemanticAnalyzer
from sbomfix.backends.llamaindex import LlamaIndexClient
from sbomfix.backends.ollama import OllamaClient
from sbomfix.config import SbomFixConfig
from sbomfix.errors import BackendError, InvalidRequestError
from sbomfix.remediation.ecosystem import PackageEcosystem, classify
from sbomfix.remediation.models import RemediationResult
from sbomfix.remediation.orchestrator import RemediationOrchestrator
from sbomfix.sbom.models import QualityScore, SbomHandle
from sbomfix.sbom.store import SbomStore
from sbomfix.sbom.tools import GrypeScanner, QualityScorer, SyftGenerator
from sbomfix.source.resolve import SourceResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanReport:
    """Everything produced by one scan-and-remediate run."""

    sbom: SbomHandle
    scan_text: str
    ecosystem: PackageEcosystem
    remediation: RemediationResult
    quality: QualityScore | None = None


class RemediationService:
    def __init__(
        self,
        resolver: SourceResolver,
        generator: SyftGenerator,
        store: SbomStore,
        scanner: GrypeScanner,
        scorer: QualityScorer,
        orchestrator: RemediationOrchestrator,
        semantic: SemanticAnalyzer | None = None,
    ) -> None:
        self.resolver = resolver
        self.generator = generator
        self.store = store
        self.scanner = scanner
        self.scorer = scorer
        self.orchestrator = orchestrator
        self.semantic = semantic
        self._closeables: list = []

    @classmethod
    def from_config(cls, config: SbomFixConfig) -> RemediationService:
        """Wire the real tools and HTTP backends from configuration."""
        ollama = OllamaClient(
            host=config.ollama_host,
            model=config.ollama_model,
            timeout=config.generate_timeout,
            health_timeout=config.health_timeout,
            stream=config.stream,
        )
        llamaindex = LlamaIndexClient(
            endpoint=config.semantic_endpoint,
            timeout=config.semantic_timeout,
        )
        service = cls(
            resolver=SourceResolver(config.clone_dir, config.clone_timeout),
            generator=SyftGenerator(timeout=config.sbom_timeout),
            store=SbomStore(config.sbom_dir),
            scanner=GrypeScanner(timeout=config.scan_timeout),
            scorer=QualityScorer(timeout=config.quality_timeout),
            orchestrator=RemediationOrchestrator(ollama, llamaindex),
            semantic=llamaindex,
        )
        service._closeables = [ollama, llamaindex]
        return service

    def close(self) -> None:
        for client in self._closeables:
            client.close()

    def generate_sbom(self, raw_source: str) -> tuple[SbomHandle, str]:
        """Resolve a source string, build its SBOM and store it as current."""
        raw_source = (raw_source or "").strip()
        if not raw_source:
            raise InvalidRequestError(
                "No valid source provided. Provide an image, directory path, "
                "or remote URL."
            )

        locator = self.resolver.resolve(raw_source)
        content = self.generator.generate(locator)
        handle = self.store.save(content)
        logger.info("SBOM generated successfully: %s", handle.path)
        return handle, content

    def scan(
        self,
        sbom_path: str | None = None,
        use_advanced: bool = False,
        with_quality: bool = True,
    ) -> ScanReport:
        """Scan an SBOM (explicit path or current) and remediate the findings."""
        handle = self.store.open(sbom_path)
        scan_text = self.scanner.scan(handle)

        ecosystem = classify(scan_text)
        logger.info("Detected package type: %s", ecosystem.label)

        quality = self.scorer.score(handle) if with_quality else None

        remediation = self.orchestrator.remediate(
            scan_text,
            handle.read(),
            ecosystem,
            prefer_advanced=use_advanced,
        )
        engine = remediation.engine.value if remediation.engine else "none"
        logger.info("SBOM scan completed, remediation engine: %s", engine)

        return ScanReport(
            sbom=handle,
            scan_text=scan_text,
            ecosystem=ecosystem,
            remediation=remediation,
            quality=quality,
        )

    def remediate(self) -> ScanReport:
        """Remediate the current SBOM without the semantic tier."""
        logger.info("Starting remediation of the current SBOM")
        return self.scan(sbom_path=None, use_advanced=False, with_quality=False)

    def analyze(
        self,
        query: str | None = None,
        scan_data: str | None = None,
        sbom_path: str | None = None,
    ) -> tuple[str, str]:
        """Pass scan data straight to the semantic backend.

        Returns ``(scan_data, analysis)``. When ``scan_data`` is not given the
        SBOM is scanned first. Backend failures propagate.
        """
        if self.semantic is None:
            raise BackendError("Semantic analysis backend is not configured")

        if scan_data:
            handle = self.store.current() if not sbom_path else self.store.open(sbom_path)
            sbom_text = handle.read() if handle else ""
        else:
            handle = self.store.open(sbom_path)
            scan_data = self.scanner.scan(handle)
            sbom_text = handle.read()

        analysis = self.semantic.analyze(scan_data, sbom_text, query=query)
        return scan_data, analysis
