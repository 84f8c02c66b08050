"""Remediation data models."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Engine(enum.Enum):
    """Which tier of the fallback chain produced a remediation script."""

    SEMANTIC = "semantic"
    GENERATIVE = "generative"
    STATIC = "static"


@dataclass(frozen=True)
class RemediationResult:
    """Outcome of a remediation run.

    ``script`` is the full text returned by the engine and ``commands`` the
    executable part of it. ``engine`` is None only when there was nothing to
    remediate. ``warning`` records failures of higher-priority engines.
    """

    script: str
    engine: Engine | None
    commands: str = ""
    warning: str | None = None

    @property
    def used_semantic(self) -> bool:
        return self.engine is Engine.SEMANTIC
