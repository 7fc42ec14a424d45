"""Repository handle: root directory, URI and commit of the working tree."""

from __future__ import annotations

import hashlib
import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from srcnav.core.exceptions import PathError
from srcnav.core.paths import clean_path
from srcnav.core.storage import DEFAULT_STORE_DIR

logger = logging.getLogger(__name__)

ROOT_MARKERS = (".git", ".hg", "Srcfile")
_VCS_DIRS = {".git", ".hg"}


@dataclass(frozen=True)
class Repo:
    """A repository as seen by one invocation."""

    root_dir: Path
    uri: str
    commit_id: str


def find_root(directory: Path) -> Path:
    """Nearest ancestor of ``directory`` (inclusive) that holds a root marker.

    Raises:
        PathError: If no ancestor looks like a repository root.
    """
    directory = Path(os.path.abspath(directory))
    for candidate in (directory, *directory.parents):
        if any((candidate / marker).exists() for marker in ROOT_MARKERS):
            return candidate
    raise PathError(f"{directory} is not inside a repository")


def _git(root: Path, *args: str) -> str | None:
    """Run a git command in ``root``; None if git is missing or the command fails."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=root,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError:
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def compute_tree_hash(root: Path, store_dir: str = DEFAULT_STORE_DIR) -> str:
    """SHA-256 over the relative paths and contents of every file under ``root``.

    VCS metadata and the build store are left out. Symlinks contribute their
    target path; sockets, fifos and devices are skipped.

    Raises:
        PathError: If a file cannot be read.
    """
    skip = _VCS_DIRS | {store_dir}
    digest = hashlib.sha256()
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        for filename in sorted(filenames):
            file = Path(dirpath) / filename
            try:
                if file.is_symlink():
                    content = os.readlink(file).encode()
                elif file.is_file():
                    content = file.read_bytes()
                else:
                    continue
            except OSError as e:
                raise PathError(f"cannot hash working tree: {e}") from e
            digest.update(file.relative_to(root).as_posix().encode())
            digest.update(b"\0")
            digest.update(content)
            digest.update(b"\0")
    return digest.hexdigest()


def normalize_remote_url(url: str) -> str:
    """Turn a clone URL into a repository URI.

    ``https://github.com/a/b.git`` and ``git@github.com:a/b.git`` both become
    ``github.com/a/b``.
    """
    url = url.strip()
    if url.endswith(".git"):
        url = url[: -len(".git")]
    url = url.rstrip("/")
    if "://" in url:
        parsed = urlparse(url)
        return f"{parsed.hostname or ''}{parsed.path}"
    if ":" in url and not url.startswith("/"):
        host, _, path = url.partition(":")
        host = host.rpartition("@")[2]
        return f"{host}/{path.lstrip('/')}"
    return url


def open_repo(
    directory: Path,
    uri: str | None = None,
    store_dir: str = DEFAULT_STORE_DIR,
) -> Repo:
    """Open the repository containing ``directory``.

    The commit id is the git HEAD when available, otherwise a hash of the
    working tree. ``uri`` overrides the URI derived from the origin remote.
    """
    root = find_root(directory)
    is_git = (root / ".git").exists()

    commit_id = _git(root, "rev-parse", "HEAD") if is_git else None
    if commit_id is None:
        logger.debug("No VCS revision for %s, hashing the working tree.", root)
        commit_id = compute_tree_hash(root, store_dir)

    if uri is None and is_git:
        remote = _git(root, "config", "--get", "remote.origin.url")
        if remote:
            uri = normalize_remote_url(remote)
    if not uri:
        uri = f"local/{root.name}"

    return Repo(root_dir=root, uri=uri, commit_id=commit_id)


def normalize_file(repo: Repo, file: str | Path, cwd: Path | None = None) -> str:
    """Express ``file`` relative to the repository root in clean posix form.

    Relative paths are taken relative to ``cwd`` (default: the process cwd).

    Raises:
        PathError: If the path is empty, is the root itself, or lies outside it.
    """
    if not str(file):
        raise PathError("empty file path")
    path = Path(file)
    if not path.is_absolute():
        path = Path(cwd or os.getcwd()) / path
    path = Path(os.path.normpath(path))
    try:
        rel = path.relative_to(repo.root_dir)
    except ValueError as e:
        raise PathError(f"{file} is outside repository {repo.root_dir}") from e
    if rel == Path("."):
        raise PathError(f"{file} is the repository root, not a file")
    return clean_path(rel.as_posix())
