"""Remediation fallback chain: semantic analysis, generative model, static."""

from sbomfix.remediation.ecosystem import PackageEcosystem, classify
from sbomfix.remediation.extract import extract_script_block
from sbomfix.remediation.models import Engine, RemediationResult
from sbomfix.remediation.orchestrator import RemediationOrchestrator
from sbomfix.remediation.static import generate_static_script

__all__ = [
    "Engine",
    "PackageEcosystem",
    "RemediationOrchestrator",
    "RemediationResult",
    "classify",
    "extract_script_block",
    "generate_static_script",
]
