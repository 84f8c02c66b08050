"""Turn a raw source string into a typed :data:`SourceLocator`.

Resolution order:
  1. Anything that exists on the local filesystem is a ``LocalPath``
  2. ``http://`` / ``https://`` URLs are git repositories, shallow-cloned
     into a fixed scratch directory
  3. Everything else is treated as a container image reference
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path

from sbomfix.errors import SourceResolutionError
from sbomfix.source.models import (
    ContainerImage,
    LocalPath,
    RemoteRepository,
    SourceLocator,
)

logger = logging.getLogger(__name__)

_REMOTE_PREFIXES = ("http://", "https://")


class SourceResolver:
    """Resolves user input to a locator, cloning remote repositories.

    The scratch directory is wiped before every clone. Previous clones are
    not retained.
    """

    def __init__(self, clone_dir: str | Path, clone_timeout: float = 300.0) -> None:
        self._clone_dir = Path(clone_dir)
        self._clone_timeout = clone_timeout

    def resolve(self, raw: str) -> SourceLocator:
        if os.path.exists(raw):
            return LocalPath(path=Path(raw))

        if raw.startswith(_REMOTE_PREFIXES):
            self._clone(raw)
            return RemoteRepository(url=raw, checkout=self._clone_dir)

        return ContainerImage(ref=raw)

    def _clone(self, url: str) -> None:
        """Shallow clone ``url`` into the scratch directory. No retry."""
        try:
            shutil.rmtree(self._clone_dir)
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise SourceResolutionError(
                f"Failed to clear clone directory {self._clone_dir}: {exc}"
            ) from exc

        if shutil.which("git") is None:
            raise SourceResolutionError("Failed to clone repository: git is not installed")

        logger.info("Cloning %s into %s", url, self._clone_dir)
        try:
            subprocess.run(
                ["git", "clone", "--depth", "1", url, str(self._clone_dir)],
                capture_output=True,
                text=True,
                timeout=self._clone_timeout,
                check=True,
            )
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise SourceResolutionError(f"Failed to clone repository: {detail}") from exc
        except subprocess.TimeoutExpired as exc:
            raise SourceResolutionError(
                f"Failed to clone repository: timed out after {self._clone_timeout}s"
            ) from exc
        except OSError as exc:
            raise SourceResolutionError(f"Failed to clone repository: {exc}") from exc
