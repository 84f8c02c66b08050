"""SBOM handles and quality-score results."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SbomHandle:
    """An SBOM on disk, identified by the sha256 of its content."""

    digest: str
    path: Path

    def read(self) -> str:
        return self.path.read_text(encoding="utf-8")


class ScoreSource(enum.Enum):
    """Where a quality score came from."""

    FULL = "full"
    BASIC = "basic"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class QualityScore:
    """Advisory SBOM quality score. Never blocks a scan."""

    value: float | None
    source: ScoreSource
    detail: str = ""

    def to_dict(self) -> dict:
        return {
            "score": self.value,
            "source": self.source.value,
            "detail": self.detail,
        }
