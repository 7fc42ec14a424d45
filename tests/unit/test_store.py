"""Tests for the artifact store and its naming rules."""

import pytest
from conftest import COMMIT_ID

from srcnav.core.exceptions import ArtifactNotFoundError
from srcnav.core.storage import (
    GRAPH_DATA,
    UNIT_DATA,
    RepositoryStore,
    data_type_suffix,
    source_unit_data_filename,
)


class TestLayout:
    """Tests for artifact naming."""

    def test_data_type_suffix(self) -> None:
        assert data_type_suffix(UNIT_DATA) == "unit.json"
        assert data_type_suffix(GRAPH_DATA) == "graph.json"

    def test_source_unit_data_filename(self) -> None:
        assert source_unit_data_filename(GRAPH_DATA, "pkg", "python") == "pkg/python.graph.json"

    def test_unit_name_with_slashes_nests(self) -> None:
        name = source_unit_data_filename(UNIT_DATA, "github.com/a/b", "GoPackage")
        assert name == "github.com/a/b/GoPackage.unit.json"


class TestRepositoryStore:
    """Tests for RepositoryStore."""

    def test_exists_false_before_build(self, store: RepositoryStore) -> None:
        assert not store.exists(COMMIT_ID)

    def test_exists_after_build(self, store: RepositoryStore, write_unit) -> None:
        write_unit("A", "python", ["a.py"])
        assert store.exists(COMMIT_ID)
        assert not store.exists("other")

    def test_file_path(self, store: RepositoryStore) -> None:
        assert store.file_path("abc", "pkg/python.graph.json") == "abc/pkg/python.graph.json"

    def test_open_reads_bytes(self, store: RepositoryStore, write_unit) -> None:
        write_unit("A", "python", ["a.py"])
        with store.open(store.file_path(COMMIT_ID, "A/python.unit.json")) as f:
            assert b'"Name": "A"' in f.read()

    def test_open_missing_raises_not_found(self, store: RepositoryStore) -> None:
        with pytest.raises(ArtifactNotFoundError) as exc_info:
            with store.open("nope/x.graph.json"):
                pass
        assert "nope/x.graph.json" in str(exc_info.value)

    def test_open_directory_raises_not_found(self, store: RepositoryStore, write_unit) -> None:
        write_unit("A", "python", ["a.py"])
        with pytest.raises(ArtifactNotFoundError):
            with store.open(store.file_path(COMMIT_ID, "A")):
                pass

    def test_walk_missing_commit_is_empty(self, store: RepositoryStore) -> None:
        assert list(store.walk("never-built")) == []

    def test_walk_is_sorted_and_restartable(self, store: RepositoryStore, write_unit) -> None:
        write_unit("B", "python", ["b.py"], graph={})
        write_unit("A", "python", ["a.py"])

        first = list(store.walk(COMMIT_ID))
        second = list(store.walk(COMMIT_ID))

        assert first == [
            f"{COMMIT_ID}/A/python.unit.json",
            f"{COMMIT_ID}/B/python.graph.json",
            f"{COMMIT_ID}/B/python.unit.json",
        ]
        assert first == second

    def test_walk_only_covers_one_commit(self, store: RepositoryStore, write_unit) -> None:
        write_unit("A", "python", ["a.py"])
        write_unit("A", "python", ["a.py"], commit_id="older")

        assert all(p.startswith(f"{COMMIT_ID}/") for p in store.walk(COMMIT_ID))
