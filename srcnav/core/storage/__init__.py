"""
Storage layer: on-disk artifacts produced by the build.

Components:
    - RepositoryStore: Read access to one repository's artifacts
    - layout: Naming rules for unit manifests and graph files

Layout:
    <store root>/<commit id>/<unit name>/<unit type>.unit.json
    <store root>/<commit id>/<unit name>/<unit type>.graph.json

The store is kept at .srclib-cache relative to the repository root.
"""

from srcnav.core.storage.layout import (
    GRAPH_DATA,
    UNIT_DATA,
    data_type_suffix,
    source_unit_data_filename,
)
from srcnav.core.storage.store import DEFAULT_STORE_DIR, RepositoryStore, get_default_store_path

__all__ = [
    "RepositoryStore",
    "DEFAULT_STORE_DIR",
    "GRAPH_DATA",
    "UNIT_DATA",
    "data_type_suffix",
    "get_default_store_path",
    "source_unit_data_filename",
]
