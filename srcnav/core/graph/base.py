"""In-memory graph of one source unit: defs, refs and docs."""

from __future__ import annotations

from collections.abc import Iterator

from srcnav.core.models import Def, Doc, Ref
from srcnav.core.paths import clean_path


class Graph:
    """Decoded graph artifact of a source unit.

    Keeps defs, refs and docs in artifact order; lookups scan in that order.
    """

    __slots__ = ("_defs", "_refs", "_docs")

    def __init__(
        self,
        defs: list[Def] | None = None,
        refs: list[Ref] | None = None,
        docs: list[Doc] | None = None,
    ) -> None:
        self._defs: list[Def] = list(defs or [])
        self._refs: list[Ref] = list(refs or [])
        self._docs: list[Doc] = list(docs or [])

    @property
    def defs(self) -> list[Def]:
        return self._defs

    @property
    def refs(self) -> list[Ref]:
        return self._refs

    @property
    def docs(self) -> list[Doc]:
        return self._docs

    def refs_in_file(self, file: str) -> Iterator[Ref]:
        """Refs located in ``file``, in artifact order."""
        file = clean_path(file)
        for ref in self._refs:
            if clean_path(ref.file) == file:
                yield ref

    def ref_at(self, file: str, offset: int) -> Ref | None:
        """First ref in ``file`` whose span covers ``offset``."""
        for ref in self.refs_in_file(file):
            if ref.covers(offset):
                return ref
        return None

    def find_def(self, path: str) -> Def | None:
        """First def with exactly this path."""
        for d in self._defs:
            if d.path == path:
                return d
        return None

    def find_doc(self, path: str) -> Doc | None:
        """Doc for a def path. When several match, the last one wins."""
        found = None
        for doc in self._docs:
            if doc.path == path:
                found = doc
        return found

    def __repr__(self) -> str:
        return f"Graph(defs={len(self._defs)}, refs={len(self._refs)}, docs={len(self._docs)})"
