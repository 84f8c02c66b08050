"""sbomfix — SBOM vulnerability remediation with layered LLM fallbacks."""

__version__ = "0.1.0"
