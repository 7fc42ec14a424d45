"""Answer positional queries against the build store."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import TYPE_CHECKING

from srcnav.core.exceptions import ArtifactNotFoundError, DecodeError, RemoteError
from srcnav.core.graph import Graph, load_graph
from srcnav.core.models import Def, DefSpec, Description, Example, Ref, SourceUnit
from srcnav.core.paths import clean_path
from srcnav.core.units import units_containing

if TYPE_CHECKING:
    from srcnav.core.repo import Repo
    from srcnav.core.storage import RepositoryStore
    from srcnav.remote import DefinitionClient

logger = logging.getLogger(__name__)

DEFAULT_EXAMPLES_PER_PAGE = 4


class PositionResolver:
    """Finds refs in a file and resolves the ref under a byte offset.

    Local lookups read the store sequentially. Remote lookups go through
    ``client``; the definition and its examples are fetched concurrently and
    any failure of either, expected or not, only leaves that part of the
    result empty.
    """

    def __init__(
        self,
        store: RepositoryStore,
        repo: Repo,
        client: DefinitionClient,
        examples_per_page: int = DEFAULT_EXAMPLES_PER_PAGE,
    ) -> None:
        self._store = store
        self._repo = repo
        self._client = client
        self._examples_per_page = examples_per_page

    def units_for(self, file: str) -> list[SourceUnit]:
        """Source units of the current commit that contain ``file``."""
        return units_containing(self._store, self._repo.commit_id, file)

    def list_refs(self, file: str) -> list[Ref]:
        """Every ref located in ``file``, in unit order then artifact order."""
        file = clean_path(file)
        units = self.units_for(file)
        _log_units(f"File {file}", units)

        refs: list[Ref] = []
        for _, graph in self._graphs(units):
            refs.extend(graph.refs_in_file(file))
        return refs

    def describe(self, file: str, offset: int, include_examples: bool = True) -> Description:
        """Resolve the ref covering ``offset`` in ``file``.

        The first covering ref wins, in unit order then artifact order. Returns
        an empty Description when no ref covers the offset.
        """
        file = clean_path(file)
        units = self.units_for(file)
        _log_units(f"Position {file}:{offset}", units)

        match = self._first_ref_at(units, file, offset)
        if match is None:
            logger.info("No ref found at %s:%d.", file, offset)
            return Description()

        unit, ref = match
        ref = dataclasses.replace(
            ref,
            def_unit=ref.def_unit or unit.name,
            def_unit_type=ref.def_unit_type or unit.type,
            def_repo=ref.def_repo or self._repo.uri,
        )
        spec = DefSpec(
            repo=ref.def_repo,
            unit_type=ref.def_unit_type,
            unit=ref.def_unit,
            path=ref.def_path,
        )

        definition = None
        if ref.def_repo == self._repo.uri:
            definition = self._resolve_local(spec)

        definition, examples = self._fetch_remote(
            spec,
            fetch_definition=definition is None,
            fetch_examples=include_examples,
            definition=definition,
        )
        return Description(ref=ref, spec=spec, definition=definition, examples=examples)

    def _graphs(self, units: Iterable[SourceUnit]) -> Iterator[tuple[SourceUnit, Graph]]:
        """Load each unit's graph, skipping units whose graph is missing or malformed."""
        for unit in units:
            try:
                graph = load_graph(self._store, self._repo.commit_id, unit.name, unit.type)
            except (ArtifactNotFoundError, DecodeError) as e:
                logger.warning("Skipping source unit %s: %s", unit.id, e)
                continue
            yield unit, graph

    def _first_ref_at(
        self, units: list[SourceUnit], file: str, offset: int
    ) -> tuple[SourceUnit, Ref] | None:
        for unit, graph in self._graphs(units):
            ref = graph.ref_at(file, offset)
            if ref is not None:
                return unit, ref
        return None

    def _resolve_local(self, spec: DefSpec) -> Def | None:
        """Look the def up in this repository's store.

        Returns None when the defining unit's graph cannot be loaded or has no
        def with the path.
        """
        try:
            graph = load_graph(self._store, self._repo.commit_id, spec.unit, spec.unit_type)
        except (ArtifactNotFoundError, DecodeError) as e:
            logger.info("Couldn't load unit %s@%s: %s.", spec.unit, spec.unit_type, e)
            return None

        found = graph.find_def(spec.path)
        if found is None:
            logger.info(
                "No definition found with path %r in unit %r type %r.",
                spec.path,
                spec.unit,
                spec.unit_type,
            )
            return None

        doc = graph.find_doc(spec.path)
        return dataclasses.replace(
            found,
            file=str(self._repo.root_dir / found.file) if found.file else "",
            doc_html=doc.data if doc is not None else found.doc_html,
        )

    def _fetch_remote(
        self,
        spec: DefSpec,
        fetch_definition: bool,
        fetch_examples: bool,
        definition: Def | None = None,
    ) -> tuple[Def | None, list[Example]]:
        """Run the definition and example lookups side by side and wait for both."""
        if not fetch_definition and not fetch_examples:
            return definition, []

        examples: list[Example] = []
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="srcnav-remote") as pool:
            def_future: Future[Def | None] | None = None
            examples_future: Future[list[Example]] | None = None
            if fetch_definition:
                def_future = pool.submit(self._fetch_definition, spec)
            if fetch_examples:
                examples_future = pool.submit(self._fetch_examples, spec)
            wait([f for f in (def_future, examples_future) if f is not None])

        if def_future is not None:
            definition = def_future.result()
        if examples_future is not None:
            examples = examples_future.result()
        return definition, examples

    def _fetch_definition(self, spec: DefSpec) -> Def | None:
        try:
            return self._client.get_definition(spec, include_doc=True)
        except RemoteError as e:
            logger.info("Couldn't fetch definition %s: %s.", spec, e)
            return None
        except Exception:
            logger.warning("Definition lookup for %s failed.", spec, exc_info=True)
            return None

    def _fetch_examples(self, spec: DefSpec) -> list[Example]:
        try:
            return self._client.list_examples(
                spec, formatted=True, per_page=self._examples_per_page
            )
        except RemoteError as e:
            logger.info("Couldn't fetch examples for %s: %s.", spec, e)
            return []
        except Exception:
            logger.warning("Example lookup for %s failed.", spec, exc_info=True)
            return []


def _log_units(what: str, units: list[SourceUnit]) -> None:
    if units:
        ids = [u.id for u in units]
        logger.info("%s is in %d source units %s.", what, len(units), ids)
    else:
        logger.info("%s is not in any source units.", what)
