"""SBOM generation, storage, scanning and quality scoring."""

from sbomfix.sbom.models import QualityScore, SbomHandle, ScoreSource
from sbomfix.sbom.store import SbomStore
from sbomfix.sbom.tools import GrypeScanner, QualityScorer, SyftGenerator

__all__ = [
    "GrypeScanner",
    "QualityScore",
    "QualityScorer",
    "SbomHandle",
    "SbomStore",
    "ScoreSource",
    "SyftGenerator",
]
