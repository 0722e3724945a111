"""Tests for loading parser output."""

from pathlib import Path

import pytest

from gotest_stubs.loader import (
    DeclarationLoadError,
    load_declarations,
    load_declarations_content,
)


@pytest.fixture
def fixtures_path():
    """Path to test fixtures."""
    return Path(__file__).parent / "fixtures" / "declarations"


class TestLoadDeclarations:
    """Tests for load_declarations function."""

    def test_loads_header(self, fixtures_path):
        """Reads package, comments and imports."""
        source = load_declarations(fixtures_path / "buffer.json")

        assert source.path == "pkg/buffer.go"
        assert source.header.package == "pkg"
        assert source.header.comments == ("// Package pkg holds buffers.",)
        assert [(i.name, i.path) for i in source.header.imports] == [
            ("", "io"),
            ("str", "strings"),
        ]
        assert source.header.code == b""

    def test_loads_functions_in_order(self, fixtures_path):
        source = load_declarations(fixtures_path / "buffer.json")

        assert [f.name for f in source.functions] == [
            "Write",
            "Dump",
            "reset",
            "TestHelper",
        ]

    def test_loads_receiver(self, fixtures_path):
        """Receiver type flags and struct fields are kept."""
        write = load_declarations(fixtures_path / "buffer.json").functions[0]

        assert write.receiver is not None
        assert write.receiver.name == "b"
        assert str(write.receiver.type) == "*buffer"
        assert write.receiver.is_struct()
        assert [str(f.type) for f in write.receiver.fields] == ["[]byte"]
        assert write.returns_error

    def test_defaults_index_to_position(self, fixtures_path):
        dump = load_declarations(fixtures_path / "buffer.json").functions[1]

        assert [p.index for p in dump.parameters] == [0, 1]
        assert dump.parameters[0].is_writer()
        assert not dump.returns_error

    def test_defaults_exported_from_name(self, fixtures_path):
        """is_exported falls back to the capitalization of the name."""
        functions = load_declarations(fixtures_path / "buffer.json").functions

        exported = {f.name: f.is_exported for f in functions}
        assert exported == {
            "Write": True,
            "Dump": True,
            "reset": False,
            "TestHelper": True,
        }

    def test_raises_on_invalid_json(self, fixtures_path):
        with pytest.raises(DeclarationLoadError, match="invalid JSON") as exc_info:
            load_declarations(fixtures_path / "invalid.json")

        assert exc_info.value.source.endswith("invalid.json")

    def test_raises_on_missing_file(self, tmp_path):
        with pytest.raises(DeclarationLoadError):
            load_declarations(tmp_path / "missing.json")


class TestLoadDeclarationsContent:
    """Tests for load_declarations_content function."""

    def test_empty_document(self):
        """An empty object gives an empty source file."""
        source = load_declarations_content("{}")

        assert source.path == ""
        assert source.header.package == ""
        assert source.functions == ()

    def test_underlying_defaults_to_empty(self):
        source = load_declarations_content(
            '{"functions": [{"name": "F", "results": [{"type": {"value": "T"}}]}]}'
        )

        result = source.functions[0].results[0]
        assert result.name == ""
        assert result.type.underlying == ""
        assert not result.type.is_star

    def test_explicit_index_is_kept(self):
        source = load_declarations_content(
            '{"functions": [{"name": "F", "parameters": '
            '[{"name": "a", "index": 3, "type": {"value": "int"}}]}]}'
        )

        assert source.functions[0].parameters[0].index == 3

    @pytest.mark.parametrize(
        "content,message",
        [
            ("[]", "must be a JSON object"),
            ('{"functions": [{}]}', "function has no name"),
            ('{"functions": [{"name": "F", "parameters": [{"name": "x"}]}]}', "no type"),
            (
                '{"functions": [{"name": "F", "parameters": [{"type": "int"}]}]}',
                "'value'",
            ),
            ('{"functions": {"name": "F"}}', "must be a list"),
            ('{"functions": ["F"]}', "function must be an object"),
            ('{"header": {"imports": ["io"]}}', "import must be an object"),
            ('{"header": {"imports": [{"path": 5}]}}', "'path' must be a string"),
            ('{"header": {"code": 5}}', "'code' must be a string"),
            ('{"header": {"package": ["pkg"]}}', "'package' must be a string"),
            ('{"path": 1}', "'path' must be a string"),
            ('{"functions": [{"name": 5}]}', "'name' must be a string"),
            (
                '{"functions": [{"name": "F", "results": [{"type": {"value": 3}}]}]}',
                "'value' must be a string",
            ),
            (
                '{"functions": [{"name": "F", "results": '
                '[{"name": ["r"], "type": {"value": "int"}}]}]}',
                "'name' must be a string",
            ),
        ],
    )
    def test_rejects_malformed_documents(self, content, message):
        with pytest.raises(DeclarationLoadError, match=message):
            load_declarations_content(content, source="decl.json")

    def test_error_names_source(self):
        with pytest.raises(DeclarationLoadError, match=r"^decl\.json: "):
            load_declarations_content("{", source="decl.json")
