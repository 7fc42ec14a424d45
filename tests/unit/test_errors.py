"""Tests for error handling paths."""

import pytest

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
from srcnav.core.models import Def, Description, Doc, Example, Ref, SourceUnit


class TestExceptionHierarchy:
    """Tests for exception class hierarchy."""

    @pytest.mark.parametrize(
        "error_type",
        [
            ArtifactNotFoundError,
            BuildError,
            ConfigError,
            DecodeError,
            PathError,
            RemoteError,
            NetworkError,
            DefinitionNotFoundError,
        ],
    )
    def test_all_are_srcnav_errors(self, error_type: type) -> None:
        error = error_type("test")
        assert isinstance(error, SrcnavError)
        assert isinstance(error, Exception)

    def test_remote_errors_share_a_base(self) -> None:
        """The resolver treats both remote failures alike."""
        assert issubclass(NetworkError, RemoteError)
        assert issubclass(DefinitionNotFoundError, RemoteError)

    def test_local_errors_are_not_remote(self) -> None:
        for error_type in (ArtifactNotFoundError, DecodeError, BuildError, PathError):
            assert not issubclass(error_type, RemoteError)


class TestModelDecoding:
    """Tests for decoding toolchain records."""

    def test_unit_requires_name_and_type(self) -> None:
        with pytest.raises(KeyError):
            SourceUnit.from_dict({"Files": ["a.py"]})

    def test_unit_null_files(self) -> None:
        unit = SourceUnit.from_dict({"Name": "A", "Type": "python", "Files": None})
        assert unit.files == []
        assert unit.id == "A@python"

    def test_ref_requires_span(self) -> None:
        with pytest.raises(KeyError):
            Ref.from_dict({"File": "a.py", "Start": 1})

    def test_ref_rejects_non_numeric_span(self) -> None:
        with pytest.raises(ValueError):
            Ref.from_dict({"File": "a.py", "Start": "x", "End": 2})

    def test_def_requires_path(self) -> None:
        with pytest.raises(KeyError):
            Def.from_dict({"Name": "x"})

    def test_null_ref_fields_are_zero_values(self) -> None:
        ref = Ref.from_dict(
            {
                "File": "a.py",
                "Start": None,
                "End": 4,
                "DefRepo": None,
                "DefUnitType": None,
                "DefUnit": None,
                "DefPath": None,
                "Def": None,
            }
        )

        assert ref.start == 0
        assert (ref.def_repo, ref.def_unit_type, ref.def_unit, ref.def_path) == ("", "", "", "")
        assert ref.is_def is False

    def test_null_def_fields_are_zero_values(self) -> None:
        found = Def.from_dict(
            {"Path": "p", "File": None, "Name": None, "DefStart": None, "DefEnd": None}
        )

        assert found.file == ""
        assert found.name == ""
        assert (found.def_start, found.def_end) == (0, 0)
        assert found.doc_html is None

    def test_null_doc_and_example_fields(self) -> None:
        assert Doc.from_dict({"Path": "p", "Data": None}).data == ""

        example = Example.from_dict({"File": None, "StartLine": None, "SrcHTML": None})
        assert (example.file, example.start_line, example.src_html) == ("", 0, "")


class TestDescriptionSerialization:
    """Tests for the describe result document."""

    def test_empty_is_empty_object(self) -> None:
        assert Description().to_dict() == {}

    def test_matched_without_def(self) -> None:
        result = Description(ref=Ref(file="a.py", start=0, end=1))
        assert result.to_dict() == {"Def": None, "Examples": []}

    def test_def_round_trips_its_keys(self) -> None:
        data = {"Path": "p", "File": "/abs/f.py", "Name": "f", "Data": {"x": 1}, "DocHTML": "d"}
        result = Description(ref=Ref(file="a.py", start=0, end=1), definition=Def.from_dict(data))

        rendered = result.to_dict()["Def"]

        assert rendered["Path"] == "p"
        assert rendered["File"] == "/abs/f.py"
        assert rendered["Data"] == {"x": 1}
        assert rendered["DocHTML"] == "d"
