"""Make sure build artifacts exist for the current commit."""

from __future__ import annotations

import logging
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from srcnav.core.exceptions import BuildError

if TYPE_CHECKING:
    from srcnav.core.repo import Repo
    from srcnav.core.storage import RepositoryStore

try:
    import fcntl  # POSIX

    HAVE_FCNTL = True
except ImportError:
    HAVE_FCNTL = False

try:
    import msvcrt  # Windows

    HAVE_MSVCRT = True
except ImportError:
    HAVE_MSVCRT = False

logger = logging.getLogger(__name__)

LOCK_NAME = ".build.lock"


class Toolchain(Protocol):
    """The external steps that write artifacts into the store."""

    def configure(self, repo_uri: str, subdir: str) -> None:
        """Write a build plan for the repository."""
        ...

    def execute(self, repo_uri: str, subdir: str) -> None:
        """Run the build plan, writing unit and graph artifacts."""
        ...


class CommandToolchain:
    """Runs configure and make as external commands in the repository root.

    Each command gets ``--repo <uri> --subdir <subdir>`` appended. Command
    output goes to stderr so stdout stays free for query results.
    """

    def __init__(
        self,
        root_dir: Path,
        configure_cmd: Sequence[str] = ("srclib", "config"),
        make_cmd: Sequence[str] = ("srclib", "make"),
    ) -> None:
        self._root_dir = root_dir
        self._configure_cmd = list(configure_cmd)
        self._make_cmd = list(make_cmd)

    def configure(self, repo_uri: str, subdir: str) -> None:
        self._run(self._configure_cmd, repo_uri, subdir)

    def execute(self, repo_uri: str, subdir: str) -> None:
        self._run(self._make_cmd, repo_uri, subdir)

    def _run(self, cmd: list[str], repo_uri: str, subdir: str) -> None:
        argv = [*cmd, "--repo", repo_uri, "--subdir", subdir]
        logger.debug("Running %s in %s", " ".join(argv), self._root_dir)
        try:
            result = subprocess.run(
                argv,
                cwd=self._root_dir,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                check=False,
            )
        except OSError as e:
            raise BuildError(f"{' '.join(cmd)}: {e}") from e
        if result.stdout:
            sys.stderr.write(result.stdout)
        if result.returncode != 0:
            raise BuildError(f"{' '.join(cmd)} exited with status {result.returncode}")


class NullToolchain:
    """Toolchain that does nothing; queries run against the store as it is."""

    def configure(self, repo_uri: str, subdir: str) -> None:
        pass

    def execute(self, repo_uri: str, subdir: str) -> None:
        pass


class _BuildLock:
    """Exclusive advisory lock on the store, held for one build."""

    def __init__(self, lock_path: Path) -> None:
        self.lock_path = lock_path
        self.lock_file = None

    def __enter__(self) -> _BuildLock:
        self.lock_path.parent.mkdir(parents=True, exist_ok=True)
        self.lock_file = open(self.lock_path, "a+")
        if HAVE_FCNTL:
            fcntl.flock(self.lock_file.fileno(), fcntl.LOCK_EX)
        elif HAVE_MSVCRT:
            msvcrt.locking(self.lock_file.fileno(), msvcrt.LK_LOCK, 1)
        else:
            logger.warning("File locking not available; concurrent builds may race")
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        if self.lock_file is None:
            return
        try:
            if HAVE_FCNTL:
                fcntl.flock(self.lock_file.fileno(), fcntl.LOCK_UN)
            elif HAVE_MSVCRT:
                self.lock_file.seek(0)
                msvcrt.locking(self.lock_file.fileno(), msvcrt.LK_UNLCK, 1)
        finally:
            self.lock_file.close()
            self.lock_file = None


def ensure_built(store: RepositoryStore, repo: Repo, toolchain: Toolchain) -> None:
    """Configure the commit if it was never built, then always make.

    There is no staleness check: make runs on every call and is expected to
    be cheap when nothing changed. Failures leave the store as the failing
    step left it.

    A NullToolchain returns at once without taking the lock, so queries
    against a pre-built store never write to it.

    Raises:
        BuildError: If configure or make fails.
    """
    if isinstance(toolchain, NullToolchain):
        logger.debug("Build skipped for %s at %s", repo.uri, repo.commit_id)
        return

    with _BuildLock(store.root / LOCK_NAME):
        if not store.exists(repo.commit_id):
            logger.info("Configuring %s at %s", repo.uri, repo.commit_id)
            toolchain.configure(repo.uri, ".")

        # TODO: skip make when the commit's artifacts are newer than the working tree.
        logger.info("Making %s at %s", repo.uri, repo.commit_id)
        toolchain.execute(repo.uri, ".")
