"""Source locator variants — what an SBOM gets generated from."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class LocalPath:
    """A file or directory on the local filesystem."""

    path: Path


@dataclass(frozen=True)
class ContainerImage:
    """A container image reference, e.g. ``alpine:3.19``."""

    ref: str


@dataclass(frozen=True)
class RemoteRepository:
    """A git repository URL, shallow-cloned into ``checkout``."""

    url: str
    checkout: Path


SourceLocator = Union[LocalPath, ContainerImage, RemoteRepository]
