"""Naming rules for artifacts inside a commit directory."""

from __future__ import annotations

import posixpath

UNIT_DATA = "unit"
GRAPH_DATA = "graph"


def data_type_suffix(kind: str) -> str:
    """Suffix shared by every artifact of one data type (e.g. ``unit.json``)."""
    return f"{kind}.json"


def source_unit_data_filename(kind: str, unit_name: str, unit_type: str) -> str:
    """Commit-relative path of a unit's artifact: ``<name>/<type>.<kind>.json``."""
    return posixpath.join(unit_name, f"{unit_type}.{data_type_suffix(kind)}")
