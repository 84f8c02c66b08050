"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from sbomfix.config import SbomFixConfig
from sbomfix.remediation.orchestrator import RemediationOrchestrator
from sbomfix.sbom.models import QualityScore, ScoreSource
from sbomfix.sbom.store import SbomStore
from sbomfix.service import RemediationService

PYTHON_SCAN = """\
NAME      INSTALLED  FIXED-IN  TYPE    VULNERABILITY        SEVERITY
requests  2.25.0     2.31.0    python  GHSA-j8r2-6x86-q33q  Medium
"""

FENCED_RESPONSE = """\
Here is the script:

```bash
pip install --upgrade requests==2.31.0
```
"""

SBOM_JSON = '{"bomFormat": "CycloneDX", "specVersion": "1.5", "components": []}'


@pytest.fixture
def python_scan() -> str:
    return PYTHON_SCAN


@pytest.fixture
def generative() -> MagicMock:
    """A healthy generative backend returning a fenced script."""
    backend = MagicMock()
    backend.generate.return_value = FENCED_RESPONSE
    return backend


@pytest.fixture
def semantic() -> MagicMock:
    backend = MagicMock()
    backend.analyze.return_value = "```bash\nnpm audit fix\n```"
    return backend


@pytest.fixture
def store(tmp_path: Path) -> SbomStore:
    return SbomStore(tmp_path / "sboms")


@pytest.fixture
def service(store: SbomStore, generative: MagicMock, semantic: MagicMock) -> RemediationService:
    """Service with stubbed tools and backends but a real store and orchestrator."""
    generator = MagicMock()
    generator.generate.return_value = SBOM_JSON
    scanner = MagicMock()
    scanner.scan.return_value = PYTHON_SCAN
    scorer = MagicMock()
    scorer.score.return_value = QualityScore(7.5, ScoreSource.FULL)

    return RemediationService(
        resolver=MagicMock(),
        generator=generator,
        store=store,
        scanner=scanner,
        scorer=scorer,
        orchestrator=RemediationOrchestrator(generative, semantic),
        semantic=semantic,
    )


@pytest.fixture
def config(tmp_path: Path) -> SbomFixConfig:
    return SbomFixConfig(
        data_dir=tmp_path / "data",
        config_dir=tmp_path / "config",
        static_dir=tmp_path / "static",
    )
