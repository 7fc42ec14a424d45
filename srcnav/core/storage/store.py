"""Filesystem-backed store of per-commit build artifacts."""

from __future__ import annotations

import os
import posixpath
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from srcnav.core.exceptions import ArtifactNotFoundError

DEFAULT_STORE_DIR = ".srclib-cache"


class RepositoryStore:
    """Artifacts of one repository, addressed by commit and logical name.

    All paths handed in and out are store-relative, use ``/`` separators, and
    start with the commit id. The store only reads; artifacts are written by
    the external configure/make steps.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def commit_path(self, commit_id: str) -> str:
        """Store-relative directory holding a commit's artifacts."""
        return commit_id

    def file_path(self, commit_id: str, name: str) -> str:
        """Store-relative path of a commit artifact."""
        return posixpath.join(self.commit_path(commit_id), name)

    def abs_path(self, path: str) -> Path:
        """Physical location of a store-relative path."""
        return self._root.joinpath(*path.split("/"))

    def exists(self, commit_id: str) -> bool:
        """Check whether anything was built for a commit."""
        return self.abs_path(self.commit_path(commit_id)).is_dir()

    @contextmanager
    def open(self, path: str) -> Iterator[BinaryIO]:
        """Open an artifact for reading.

        Raises:
            ArtifactNotFoundError: If the artifact does not exist.
        """
        try:
            f = self.abs_path(path).open("rb")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
            raise ArtifactNotFoundError(f"{path}: artifact not found") from e
        with f:
            yield f

    def walk(self, commit_id: str) -> Iterator[str]:
        """Yield every artifact path under a commit, depth first.

        Entries are visited in sorted order so the sequence is stable across
        calls. Nothing is yielded when the commit was never built.
        """
        top = self.abs_path(self.commit_path(commit_id))
        if not top.is_dir():
            return
        for dirpath, dirnames, filenames in os.walk(top):
            dirnames.sort()
            rel_dir = Path(dirpath).relative_to(self._root).as_posix()
            for filename in sorted(filenames):
                yield posixpath.join(rel_dir, filename)


def get_default_store_path(project_root: Path, store_dir: str = DEFAULT_STORE_DIR) -> Path:
    """Get the store root for a repository."""
    return project_root / store_dir
