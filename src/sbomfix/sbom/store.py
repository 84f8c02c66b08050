"""Content-addressed SBOM storage with a "current" pointer.

Every generated SBOM is written to ``<root>/<sha256>.cyclonedx.json`` and
callers keep the returned handle, so concurrent requests never read each
other's documents. The ``current`` pointer only picks the default SBOM for
requests that do not name one.
"""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
import threading
from pathlib import Path

from sbomfix.errors import SbomNotFoundError
from sbomfix.sbom.models import SbomHandle

logger = logging.getLogger(__name__)

_SUFFIX = ".cyclonedx.json"
_POINTER = "current"


class SbomStore:
    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)
        self._lock = threading.Lock()

    @property
    def root(self) -> Path:
        return self._root

    def save(self, content: str) -> SbomHandle:
        """Persist ``content`` and mark it as the current SBOM."""
        digest = hashlib.sha256(content.encode("utf-8")).hexdigest()
        path = self._root / f"{digest}{_SUFFIX}"

        with self._lock:
            self._root.mkdir(parents=True, exist_ok=True)
            if not path.exists():
                _atomic_write(path, content)
            _atomic_write(self._root / _POINTER, digest)

        logger.info("Stored SBOM %s", digest[:12])
        return SbomHandle(digest=digest, path=path)

    def current(self) -> SbomHandle | None:
        pointer = self._root / _POINTER
        try:
            digest = pointer.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        path = self._root / f"{digest}{_SUFFIX}"
        if not digest or not path.is_file():
            return None
        return SbomHandle(digest=digest, path=path)

    def open(self, path: str | Path | None = None) -> SbomHandle:
        """Handle for an explicit SBOM file, or the current one."""
        if path is None or str(path) == "":
            handle = self.current()
            if handle is None:
                raise SbomNotFoundError()
            return handle

        file_path = Path(path)
        if not file_path.is_file():
            raise SbomNotFoundError(f"SBOM file not found: {file_path}")
        digest = hashlib.sha256(file_path.read_bytes()).hexdigest()
        return SbomHandle(digest=digest, path=file_path)


def _atomic_write(path: Path, text: str) -> None:
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=".tmp-")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
