"""Package ecosystem classification of free-text scanner output."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class PackageEcosystem(enum.Enum):
    PYTHON = "python"
    NODEJS = "nodejs"
    JAVA = "java"
    GO = "go"
    RUBY = "ruby"
    RUST = "rust"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        """Human-readable label, e.g. ``"Python package"``."""
        return _PROFILES[self].label

    @property
    def manager(self) -> str:
        return _PROFILES[self].manager

    @property
    def upgrade_command(self) -> str:
        """Shell command upgrading every package, empty when unknown."""
        return _PROFILES[self].upgrade_command


@dataclass(frozen=True)
class _Profile:
    label: str
    manager: str
    upgrade_command: str


_PROFILES: dict[PackageEcosystem, _Profile] = {
    PackageEcosystem.PYTHON: _Profile(
        "Python package",
        "pip",
        "pip list --outdated | tail -n +3 | awk '{print $1}' "
        "| xargs -r -n1 pip install --upgrade",
    ),
    PackageEcosystem.NODEJS: _Profile(
        "Node.js package", "npm", "npm update && npm audit fix"
    ),
    PackageEcosystem.JAVA: _Profile(
        "Java package", "maven", "mvn versions:use-latest-releases"
    ),
    PackageEcosystem.GO: _Profile(
        "Go package", "go", "go get -u ./... && go mod tidy"
    ),
    PackageEcosystem.RUBY: _Profile("Ruby package", "bundler", "bundle update"),
    PackageEcosystem.RUST: _Profile("Rust package", "cargo", "cargo update"),
    PackageEcosystem.UNKNOWN: _Profile("package", "unknown", ""),
}

# Ordered, case-sensitive. First match wins, so a scan mentioning both
# "python" and "npm" is classified as Python.
_KEYWORDS: tuple[tuple[tuple[str, ...], PackageEcosystem], ...] = (
    (("python",), PackageEcosystem.PYTHON),
    (("nodejs", "npm"), PackageEcosystem.NODEJS),
    (("java", "maven"), PackageEcosystem.JAVA),
    (("golang", "go-module"), PackageEcosystem.GO),
    (("ruby", "gem"), PackageEcosystem.RUBY),
    (("rust", "cargo"), PackageEcosystem.RUST),
)


def classify(scan: str) -> PackageEcosystem:
    """Label scan text with the first ecosystem whose keyword it contains."""
    for keywords, ecosystem in _KEYWORDS:
        if any(keyword in scan for keyword in keywords):
            return ecosystem
    return PackageEcosystem.UNKNOWN
