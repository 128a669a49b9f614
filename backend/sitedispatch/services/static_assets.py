"""Static Asset Resolution: URL path -> readable regular file under a fixed root.

Invariants:
    - Never returns a path outside the root (symlinks are followed, then checked)
    - Directories, missing files and unreadable files are all Absent (None)
    - Never raises: any OSError/ValueError during the probe is Absent
    - Read-only: the only filesystem access is stat/access

Design Decisions:
    - Starlette's StaticFiles.lookup_path does the root-confined stat; we keep
      only the lookup and let FileResponse stream the body
    - check_dir=False: a missing root means every lookup misses, not a crash
    - "missing" and "unreadable" are not distinguished here; the dispatcher
      treats both as a resolution miss
"""

import os
import posixpath
import stat
from pathlib import Path

from starlette.staticfiles import StaticFiles


class StaticAssetResolver:
    """Resolves request paths against a static root fixed at construction."""

    def __init__(self, root: Path | str):
        self._root = Path(root).resolve()
        self._files = StaticFiles(directory=self._root, check_dir=False)

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, path: str) -> Path | None:
        relative = posixpath.normpath(path.lstrip("/"))
        if relative in ("", ".") or "\x00" in relative:
            return None
        try:
            full_path, stat_result = self._files.lookup_path(relative)
        except (OSError, ValueError):
            return None
        if stat_result is None or not stat.S_ISREG(stat_result.st_mode):
            return None
        if not os.access(full_path, os.R_OK):
            return None
        return Path(full_path)

    def resolve_document(self, name: str) -> Path | None:
        """Resolve a fixed document filename relative to the root."""
        return self.resolve("/" + name)
