"""Resolution of user-supplied source strings into typed locators."""

from sbomfix.source.models import (
    ContainerImage,
    LocalPath,
    RemoteRepository,
    SourceLocator,
)
from sbomfix.source.resolve import SourceResolver

__all__ = [
    "ContainerImage",
    "LocalPath",
    "RemoteRepository",
    "SourceLocator",
    "SourceResolver",
]
