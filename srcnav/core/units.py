"""Find the source units a file belongs to."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from srcnav.core.exceptions import DecodeError
from srcnav.core.models import SourceUnit
from srcnav.core.paths import clean_path
from srcnav.core.storage import UNIT_DATA, data_type_suffix

if TYPE_CHECKING:
    from srcnav.core.storage import RepositoryStore

logger = logging.getLogger(__name__)


def load_unit(store: RepositoryStore, path: str) -> SourceUnit:
    """Decode one unit manifest.

    Raises:
        ArtifactNotFoundError: If the manifest does not exist.
        DecodeError: If the manifest is not a valid source unit.
    """
    with store.open(path) as f:
        try:
            return SourceUnit.from_dict(json.load(f))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise DecodeError(f"{path}: {e}") from e


def units_containing(store: RepositoryStore, commit_id: str, file: str) -> list[SourceUnit]:
    """Get every source unit whose file list includes ``file``.

    Scans all unit manifests of the commit on each call; the store is not
    indexed by file. Units are returned in store walk order. Malformed
    manifests are logged and skipped.
    """
    file = clean_path(file)
    suffix = data_type_suffix(UNIT_DATA)
    unit_files = [p for p in store.walk(commit_id) if p.endswith(suffix)]

    units: list[SourceUnit] = []
    for unit_file in unit_files:
        try:
            unit = load_unit(store, unit_file)
        except DecodeError as e:
            logger.warning("Skipping source unit: %s", e)
            continue
        if any(clean_path(f) == file for f in unit.files):
            units.append(unit)
    return units
