"""Deterministic, backend-free remediation scripts keyed by ecosystem."""

from __future__ import annotations

from sbomfix.remediation.ecosystem import PackageEcosystem

RECOMMENDATIONS = (
    "Review your dependencies regularly and remove unused packages.",
    "Use a lockfile to pin exact dependency versions.",
    "Automate vulnerability scanning in your CI pipeline.",
)


def generate_static_script(ecosystem: PackageEcosystem) -> str:
    """Build a commented shell script that upgrades all packages.

    Pure: identical input always gives byte-identical output. For
    ``UNKNOWN`` the script contains comments only.
    """
    lines = [
        "#!/usr/bin/env bash",
        "# Static remediation script (no LLM backend was available)",
        f"# Package manager: {ecosystem.manager}",
        "",
    ]

    if ecosystem.upgrade_command:
        lines.append(f"# Upgrade all {ecosystem.label}s to their latest versions")
        lines.append(ecosystem.upgrade_command)
    else:
        lines.append("# Could not detect the package manager from the scan output.")
        lines.append("# Upgrade each vulnerable package to its fixed version manually.")

    lines.append("")
    lines.append("# General security recommendations:")
    for i, text in enumerate(RECOMMENDATIONS, start=1):
        lines.append(f"# {i}. {text}")

    return "\n".join(lines) + "\n"
