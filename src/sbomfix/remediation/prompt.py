"""Prompts sent to the remediation backends."""

from __future__ import annotations

from sbomfix.remediation.ecosystem import PackageEcosystem

_GENERATE_TEMPLATE = """\
You are a DevSecOps expert. Given the following SBOM scan output, write a clean \
script that upgrades each vulnerable {label} to its fixed version.

Only output the script in a code block.

SBOM Scan:
{scan}
"""


def build_prompt(ecosystem: PackageEcosystem, scan: str) -> str:
    return _GENERATE_TEMPLATE.format(label=ecosystem.label, scan=scan)
