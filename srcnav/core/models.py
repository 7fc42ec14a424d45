"""Data models for Srcnav.

Records mirror the JSON emitted by the language toolchains, so ``from_dict`` and
``to_dict`` use the toolchains' CamelCase keys. A JSON null decodes to the
field's zero value, as an absent key does.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SourceUnit:
    """A named, typed group of files analyzed together (e.g. one package)."""

    name: str
    type: str
    files: list[str] = field(default_factory=list)
    repo: str = ""
    commit_id: str = ""
    dir: str = ""
    dependencies: list[Any] = field(default_factory=list)
    data: Any = None

    @property
    def id(self) -> str:
        return f"{self.name}@{self.type}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SourceUnit:
        """Create a SourceUnit from a decoded unit manifest."""
        return cls(
            name=data["Name"],
            type=data["Type"],
            files=list(data.get("Files") or []),
            repo=data.get("Repo") or "",
            commit_id=data.get("CommitID") or "",
            dir=data.get("Dir") or "",
            dependencies=list(data.get("Dependencies") or []),
            data=data.get("Data"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "Type": self.type,
            "Repo": self.repo,
            "CommitID": self.commit_id,
            "Files": list(self.files),
            "Dir": self.dir,
            "Dependencies": list(self.dependencies),
            "Data": self.data,
        }


@dataclass
class Ref:
    """A byte span in one file that points at a definition."""

    file: str
    start: int
    end: int
    def_repo: str = ""
    def_unit_type: str = ""
    def_unit: str = ""
    def_path: str = ""
    repo: str = ""
    unit_type: str = ""
    unit: str = ""
    is_def: bool = False

    def covers(self, offset: int) -> bool:
        """Whether ``offset`` lies in the span. Both ends are inclusive."""
        return self.start <= offset <= self.end

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Ref:
        """Create a Ref from a decoded graph entry."""
        return cls(
            file=data["File"] or "",
            start=int(data["Start"] or 0),
            end=int(data["End"] or 0),
            def_repo=data.get("DefRepo") or "",
            def_unit_type=data.get("DefUnitType") or "",
            def_unit=data.get("DefUnit") or "",
            def_path=data.get("DefPath") or "",
            repo=data.get("Repo") or "",
            unit_type=data.get("UnitType") or "",
            unit=data.get("Unit") or "",
            is_def=bool(data.get("Def")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "DefRepo": self.def_repo,
            "DefUnitType": self.def_unit_type,
            "DefUnit": self.def_unit,
            "DefPath": self.def_path,
            "Def": self.is_def,
            "Repo": self.repo,
            "UnitType": self.unit_type,
            "Unit": self.unit,
            "File": self.file,
            "Start": self.start,
            "End": self.end,
        }


@dataclass
class Def:
    """A symbol declared inside a source unit."""

    path: str
    file: str = ""
    name: str = ""
    kind: str = ""
    repo: str = ""
    unit_type: str = ""
    unit: str = ""
    def_start: int = 0
    def_end: int = 0
    exported: bool = False
    data: Any = None
    doc_html: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Def:
        """Create a Def from a graph entry or a definition service response."""
        return cls(
            path=data["Path"] or "",
            file=data.get("File") or "",
            name=data.get("Name") or "",
            kind=data.get("Kind") or "",
            repo=data.get("Repo") or "",
            unit_type=data.get("UnitType") or "",
            unit=data.get("Unit") or "",
            def_start=int(data.get("DefStart") or 0),
            def_end=int(data.get("DefEnd") or 0),
            exported=bool(data.get("Exported")),
            data=data.get("Data"),
            doc_html=data.get("DocHTML"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "Repo": self.repo,
            "UnitType": self.unit_type,
            "Unit": self.unit,
            "Path": self.path,
            "Name": self.name,
            "Kind": self.kind,
            "File": self.file,
            "DefStart": self.def_start,
            "DefEnd": self.def_end,
            "Exported": self.exported,
            "Data": self.data,
        }
        if self.doc_html is not None:
            result["DocHTML"] = self.doc_html
        return result


@dataclass
class Doc:
    """Rendered documentation for the definition with the same path."""

    path: str
    data: str = ""
    format: str = ""
    file: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Doc:
        return cls(
            path=data["Path"] or "",
            data=data.get("Data") or "",
            format=data.get("Format") or "",
            file=data.get("File") or "",
        )


@dataclass(frozen=True)
class DefSpec:
    """Locator that identifies a definition across repositories."""

    repo: str
    unit_type: str
    unit: str
    path: str

    def __str__(self) -> str:
        return f"{self.repo}/{self.unit_type}/{self.unit}:{self.path}"


@dataclass
class Example:
    """A usage example of a definition, as returned by the definition service."""

    repo: str = ""
    file: str = ""
    start: int = 0
    end: int = 0
    start_line: int = 0
    end_line: int = 0
    src_html: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Example:
        return cls(
            repo=data.get("Repo") or "",
            file=data.get("File") or "",
            start=int(data.get("Start") or 0),
            end=int(data.get("End") or 0),
            start_line=int(data.get("StartLine") or 0),
            end_line=int(data.get("EndLine") or 0),
            src_html=data.get("SrcHTML") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "Repo": self.repo,
            "File": self.file,
            "Start": self.start,
            "End": self.end,
            "StartLine": self.start_line,
            "EndLine": self.end_line,
            "SrcHTML": self.src_html,
        }


@dataclass
class Description:
    """Result of describing a position: the definition and its usage examples.

    ``ref`` is None when no reference covers the position; such a result
    serializes to an empty object.
    """

    ref: Ref | None = None
    spec: DefSpec | None = None
    definition: Def | None = None
    examples: list[Example] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.ref is None

    def to_dict(self) -> dict[str, Any]:
        if self.is_empty:
            return {}
        return {
            "Def": self.definition.to_dict() if self.definition else None,
            "Examples": [e.to_dict() for e in self.examples],
        }
