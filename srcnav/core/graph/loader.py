"""Load a source unit's Graph from the build store."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from srcnav.core.exceptions import DecodeError
from srcnav.core.graph.base import Graph
from srcnav.core.models import Def, Doc, Ref
from srcnav.core.storage import GRAPH_DATA, source_unit_data_filename

if TYPE_CHECKING:
    from srcnav.core.storage import RepositoryStore


def graph_path(store: RepositoryStore, commit_id: str, unit_name: str, unit_type: str) -> str:
    """Store-relative path of a unit's graph artifact."""
    return store.file_path(commit_id, source_unit_data_filename(GRAPH_DATA, unit_name, unit_type))


def decode_graph(data: Any) -> Graph:
    """Build a Graph from decoded JSON. Missing sections are treated as empty."""
    if not isinstance(data, dict):
        raise TypeError(f"expected an object, got {type(data).__name__}")
    return Graph(
        defs=[Def.from_dict(d) for d in data.get("Defs") or []],
        refs=[Ref.from_dict(r) for r in data.get("Refs") or []],
        docs=[Doc.from_dict(d) for d in data.get("Docs") or []],
    )


def load_graph(store: RepositoryStore, commit_id: str, unit_name: str, unit_type: str) -> Graph:
    """Load and decode one unit's graph. The file is closed before returning.

    Raises:
        ArtifactNotFoundError: If the unit has no graph artifact.
        DecodeError: If the artifact is malformed.
    """
    path = graph_path(store, commit_id, unit_name, unit_type)
    with store.open(path) as f:
        try:
            return decode_graph(json.load(f))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise DecodeError(f"{path}: {e}") from e
