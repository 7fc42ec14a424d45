"""Entry point for the describe and list queries."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from srcnav.core.build import CommandToolchain, Toolchain, ensure_built
from srcnav.core.models import Description, Ref, SourceUnit
from srcnav.core.repo import Repo, normalize_file, open_repo
from srcnav.core.resolver import PositionResolver
from srcnav.core.storage import RepositoryStore, get_default_store_path

if TYPE_CHECKING:
    from srcnav.config import Settings
    from srcnav.remote import DefinitionClient


class Navigator:
    """Runs queries for one repository.

    Every query normalizes the file path first, then brings the store up to
    date for the current commit, then reads it.
    """

    def __init__(
        self,
        repo: Repo,
        store: RepositoryStore,
        toolchain: Toolchain,
        client: DefinitionClient,
        examples_per_page: int = 4,
    ) -> None:
        self.repo = repo
        self.store = store
        self._toolchain = toolchain
        self._resolver = PositionResolver(store, repo, client, examples_per_page)

    @classmethod
    def for_file(
        cls,
        file: str | Path,
        settings: Settings,
        client: DefinitionClient,
        toolchain: Toolchain | None = None,
    ) -> Navigator:
        """Open the repository that contains ``file``.

        Without an explicit toolchain the configured configure/make commands
        are used.
        """
        directory = Path(os.path.abspath(file)).parent
        repo = open_repo(directory, uri=settings.repo_uri, store_dir=settings.store_dir)
        store = RepositoryStore(get_default_store_path(repo.root_dir, settings.store_dir))
        if toolchain is None:
            toolchain = CommandToolchain(repo.root_dir, settings.configure_cmd, settings.make_cmd)
        return cls(repo, store, toolchain, client, settings.examples_per_page)

    def build(self) -> None:
        ensure_built(self.store, self.repo, self._toolchain)

    def units(self, file: str | Path) -> list[SourceUnit]:
        rel = normalize_file(self.repo, file)
        self.build()
        return self._resolver.units_for(rel)

    def list_refs(self, file: str | Path) -> list[Ref]:
        rel = normalize_file(self.repo, file)
        self.build()
        return self._resolver.list_refs(rel)

    def describe(
        self, file: str | Path, offset: int, include_examples: bool = True
    ) -> Description:
        rel = normalize_file(self.repo, file)
        self.build()
        return self._resolver.describe(rel, offset, include_examples=include_examples)
