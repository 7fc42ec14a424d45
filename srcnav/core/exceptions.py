"""Srcnav custom exceptions."""


class SrcnavError(Exception):
    """Base exception for Srcnav errors."""


class ConfigError(SrcnavError):
    """Invalid configuration value."""


class PathError(SrcnavError):
    """File path cannot be reconciled with the repository."""


class ArtifactNotFoundError(SrcnavError):
    """Artifact does not exist in the build store."""


class DecodeError(SrcnavError):
    """Stored artifact could not be decoded."""


class BuildError(SrcnavError):
    """Configure or make step failed."""


class RemoteError(SrcnavError):
    """Base for errors reported by the definition service."""


class NetworkError(RemoteError):
    """Definition service could not be reached or answered badly."""


class DefinitionNotFoundError(RemoteError):
    """Definition service has no such definition."""
