"""Path normalization shared by the unit index and the resolver."""

from __future__ import annotations

import posixpath


def clean_path(path: str) -> str:
    """Return the shortest equivalent posix form of a repo-relative path.

    Backslashes become slashes, ``.`` and ``..`` elements are resolved and
    trailing slashes are dropped. An empty path cleans to ``"."``.
    """
    if not path:
        return "."
    return posixpath.normpath(path.replace("\\", "/"))
