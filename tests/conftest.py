"""Shared fixtures: temporary repositories, populated stores, fake collaborators."""

from __future__ import annotations

import json
import tempfile
import time
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from srcnav.core.models import Def, DefSpec, Example
from srcnav.core.repo import Repo
from srcnav.core.storage import RepositoryStore, get_default_store_path

REPO_URI = "example.com/r"
COMMIT_ID = "c0ffee"

WriteUnit = Callable[..., None]


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as td:
        yield Path(td)


@pytest.fixture
def repo(temp_dir: Path) -> Repo:
    """A repository handle rooted at the temp dir."""
    (temp_dir / "Srcfile").write_text("{}")
    return Repo(root_dir=temp_dir, uri=REPO_URI, commit_id=COMMIT_ID)


@pytest.fixture
def store(repo: Repo) -> RepositoryStore:
    return RepositoryStore(get_default_store_path(repo.root_dir))


def write_unit_files(
    store_root: Path,
    commit_id: str,
    name: str,
    unit_type: str,
    files: list[str],
    graph: dict[str, Any] | str | None = None,
) -> None:
    """Write a unit manifest and, optionally, its graph into a store."""
    unit_dir = store_root / commit_id / name
    unit_dir.mkdir(parents=True, exist_ok=True)
    manifest = {"Name": name, "Type": unit_type, "Files": files}
    (unit_dir / f"{unit_type}.unit.json").write_text(json.dumps(manifest))
    if graph is not None:
        text = graph if isinstance(graph, str) else json.dumps(graph)
        (unit_dir / f"{unit_type}.graph.json").write_text(text)


@pytest.fixture
def write_unit(store: RepositoryStore) -> WriteUnit:
    """Write units into the fixture store under COMMIT_ID."""

    def _write(
        name: str,
        unit_type: str,
        files: list[str],
        graph: dict[str, Any] | str | None = None,
        commit_id: str = COMMIT_ID,
    ) -> None:
        write_unit_files(store.root, commit_id, name, unit_type, files, graph)

    return _write


def make_ref(file: str, start: int, end: int, **fields: Any) -> dict[str, Any]:
    """Graph JSON for a ref."""
    return {"File": file, "Start": start, "End": end, **fields}


class FakeClient:
    """DefinitionClient double with scripted answers, failures and delays."""

    def __init__(
        self,
        definition: Def | None = None,
        examples: list[Example] | None = None,
        def_error: Exception | None = None,
        examples_error: Exception | None = None,
        def_delay: float = 0.0,
        examples_delay: float = 0.0,
    ) -> None:
        self.definition = definition
        self.examples = examples or []
        self.def_error = def_error
        self.examples_error = examples_error
        self.def_delay = def_delay
        self.examples_delay = examples_delay
        self.def_calls: list[DefSpec] = []
        self.example_calls: list[tuple[DefSpec, bool, int]] = []

    def get_definition(self, spec: DefSpec, include_doc: bool = True) -> Def:
        self.def_calls.append(spec)
        time.sleep(self.def_delay)
        if self.def_error is not None:
            raise self.def_error
        assert self.definition is not None
        return self.definition

    def list_examples(
        self, spec: DefSpec, formatted: bool = True, per_page: int = 4
    ) -> list[Example]:
        self.example_calls.append((spec, formatted, per_page))
        time.sleep(self.examples_delay)
        if self.examples_error is not None:
            raise self.examples_error
        return self.examples
