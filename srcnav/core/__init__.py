"""
Core module: data models, exceptions, storage and queries.

Models (models.py):
    - SourceUnit: A named, typed group of files built together
    - Ref / Def / Doc: Graph records produced by the toolchains
    - DefSpec: Locator of a definition (repo, unit type, unit, path)
    - Description: Result of describing a position

Exceptions (exceptions.py):
    - SrcnavError: Base exception for all srcnav errors
    - PathError: File cannot be placed in the repository
    - DecodeError: Stored artifact is malformed
    - BuildError: Configure or make failed
    - NetworkError / DefinitionNotFoundError: Definition service failures

Queries:
    - Navigator: describe() and list_refs() for a repository
    - PositionResolver: The query engine over a built store
"""

from srcnav.core.exceptions import (
    ArtifactNotFoundError,
    BuildError,
    ConfigError,
    DecodeError,
    DefinitionNotFoundError,
    NetworkError,
    PathError,
    RemoteError,
    SrcnavError,
)
from srcnav.core.models import Def, DefSpec, Description, Doc, Example, Ref, SourceUnit
from srcnav.core.navigator import Navigator
from srcnav.core.repo import Repo, normalize_file, open_repo
from srcnav.core.resolver import PositionResolver
from srcnav.core.storage import RepositoryStore, get_default_store_path

__all__ = [
    # Models
    "SourceUnit",
    "Ref",
    "Def",
    "Doc",
    "DefSpec",
    "Example",
    "Description",
    "Repo",
    # Exceptions
    "SrcnavError",
    "ConfigError",
    "PathError",
    "ArtifactNotFoundError",
    "DecodeError",
    "BuildError",
    "RemoteError",
    "NetworkError",
    "DefinitionNotFoundError",
    # Storage
    "RepositoryStore",
    "get_default_store_path",
    # Queries
    "Navigator",
    "PositionResolver",
    "normalize_file",
    "open_repo",
]
