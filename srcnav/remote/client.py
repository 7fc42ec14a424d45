"""Client for the remote definition service."""

from __future__ import annotations

import logging
from typing import Any, Protocol
from urllib.parse import quote

import requests

from srcnav import __version__
from srcnav.core.exceptions import DefinitionNotFoundError, NetworkError
from srcnav.core.models import Def, DefSpec, Example

logger = logging.getLogger(__name__)


class DefinitionClient(Protocol):
    """Looks up definitions and their usage examples by locator."""

    def get_definition(self, spec: DefSpec, include_doc: bool = True) -> Def:
        """Fetch a definition.

        Raises:
            DefinitionNotFoundError: If the service does not know the definition.
            NetworkError: If the service cannot be reached or answers badly.
        """
        ...

    def list_examples(
        self, spec: DefSpec, formatted: bool = True, per_page: int = 4
    ) -> list[Example]:
        """Fetch one page of usage examples.

        Raises:
            NetworkError: If the service cannot be reached or answers badly.
        """
        ...


class HTTPDefinitionClient:
    """DefinitionClient over the service's REST API.

    Endpoints:
        GET {base}/repos/{repo}/.defs/{unit_type}/{unit}/.def/{path}
        GET {base}/repos/{repo}/.defs/{unit_type}/{unit}/.def/{path}/.examples

    Every request carries ``timeout``; there are no retries.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.setdefault("User-Agent", f"srcnav/{__version__}")
        self._session.headers.setdefault("Accept", "application/json")

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> HTTPDefinitionClient:
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        self.close()

    def def_url(self, spec: DefSpec) -> str:
        return (
            f"{self._base_url}/repos/{quote(spec.repo)}/.defs/{quote(spec.unit_type)}"
            f"/{quote(spec.unit)}/.def/{quote(spec.path)}"
        )

    def get_definition(self, spec: DefSpec, include_doc: bool = True) -> Def:
        params = {"Doc": "true"} if include_doc else {}
        data = self._get_json(self.def_url(spec), params)
        try:
            return Def.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise NetworkError(f"malformed definition for {spec}: {e}") from e

    def list_examples(
        self, spec: DefSpec, formatted: bool = True, per_page: int = 4
    ) -> list[Example]:
        params = {"Formatted": str(formatted).lower(), "PerPage": per_page}
        try:
            data = self._get_json(f"{self.def_url(spec)}/.examples", params)
        except DefinitionNotFoundError:
            logger.debug("No examples for %s", spec)
            return []
        if isinstance(data, dict):
            data = data.get("Examples")
        try:
            return [Example.from_dict(e) for e in data or []]
        except (TypeError, ValueError, AttributeError) as e:
            raise NetworkError(f"malformed examples for {spec}: {e}") from e

    def _get_json(self, url: str, params: dict[str, Any]) -> Any:
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise NetworkError(f"GET {url}: {e}") from e

        if response.status_code == 404:
            raise DefinitionNotFoundError(f"GET {url}: not found")
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise NetworkError(f"GET {url}: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(f"GET {url}: invalid JSON: {e}") from e
