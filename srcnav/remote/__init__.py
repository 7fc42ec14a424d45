"""
Remote definition service.

Components:
    - DefinitionClient: Protocol the resolver depends on
    - HTTPDefinitionClient: requests-based implementation of the REST API
"""

from srcnav.remote.client import DefinitionClient, HTTPDefinitionClient

__all__ = [
    "DefinitionClient",
    "HTTPDefinitionClient",
]
