"""Load parsed Go declarations from the JSON emitted by the source parser."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path as FilePath
from typing import Any

from gotest_stubs.models import (
    Expression,
    Field,
    Function,
    Header,
    Import,
    Path,
    Receiver,
)

logger = logging.getLogger(__name__)


class DeclarationLoadError(Exception):
    """Parser output could not be turned into declarations."""

    def __init__(self, message: str, source: str = "<string>"):
        super().__init__(f"{source}: {message}")
        self.source = source


@dataclass(frozen=True)
class SourceFile:
    """Everything the parser reported about one Go source file."""

    path: Path
    header: Header
    functions: tuple[Function, ...]


def load_declarations(path: FilePath) -> SourceFile:
    """Load declarations from a parser output file.

    Args:
        path: Path to the JSON document

    Returns:
        The decoded SourceFile

    Raises:
        DeclarationLoadError: If the file cannot be read or is malformed
    """
    logger.info(f"Loading declarations from {path}")
    try:
        content = FilePath(path).read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to read {path}: {e}")
        raise DeclarationLoadError(str(e), source=str(path)) from e
    return load_declarations_content(content, source=str(path))


def load_declarations_content(content: str, source: str = "<string>") -> SourceFile:
    """Decode a parser output document.

    Args:
        content: The JSON document
        source: Name used in error messages

    Returns:
        The decoded SourceFile
    """
    try:
        document = json.loads(content)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {source}: {e}")
        raise DeclarationLoadError(f"invalid JSON: {e}", source=source) from e

    if not isinstance(document, dict):
        raise DeclarationLoadError("document must be a JSON object", source=source)

    header = _load_header(document.get("header") or {}, source)
    functions = tuple(
        _load_function(raw, source) for raw in _as_list(document, "functions", source)
    )
    logger.info(f"Loaded {len(functions)} functions from {source}")
    return SourceFile(
        path=Path(_as_str(document, "path", source)),
        header=header,
        functions=functions,
    )


def _as_list(raw: dict, key: str, source: str) -> list:
    value = raw.get(key) or []
    if not isinstance(value, list):
        raise DeclarationLoadError(f"'{key}' must be a list", source=source)
    return value


def _as_str(raw: dict, key: str, source: str) -> str:
    value = raw.get(key) or ""
    if not isinstance(value, str):
        raise DeclarationLoadError(f"'{key}' must be a string", source=source)
    return value


def _load_import(raw: Any, source: str) -> Import:
    if not isinstance(raw, dict):
        raise DeclarationLoadError("import must be an object", source=source)
    return Import(name=_as_str(raw, "name", source), path=_as_str(raw, "path", source))


def _load_header(raw: Any, source: str) -> Header:
    if not isinstance(raw, dict):
        raise DeclarationLoadError("'header' must be an object", source=source)
    return Header(
        package=_as_str(raw, "package", source),
        comments=tuple(_as_list(raw, "comments", source)),
        imports=tuple(_load_import(i, source) for i in _as_list(raw, "imports", source)),
        code=_as_str(raw, "code", source).encode("utf-8"),
    )


def _load_expression(raw: Any, source: str) -> Expression:
    if not isinstance(raw, dict) or "value" not in raw:
        raise DeclarationLoadError("type must be an object with a 'value'", source=source)
    return Expression(
        value=_as_str(raw, "value", source),
        is_star=raw.get("is_star", False),
        is_variadic=raw.get("is_variadic", False),
        is_writer=raw.get("is_writer", False),
        underlying=_as_str(raw, "underlying", source),
    )


def _load_field(raw: Any, position: int, source: str) -> Field:
    if not isinstance(raw, dict):
        raise DeclarationLoadError("field must be an object", source=source)
    if "type" not in raw:
        raise DeclarationLoadError(
            f"field {raw.get('name', '')!r} has no type", source=source
        )
    return Field(
        name=_as_str(raw, "name", source),
        type=_load_expression(raw["type"], source),
        index=raw.get("index", position),
    )


def _load_fields(raw: dict, key: str, source: str) -> tuple[Field, ...]:
    return tuple(
        _load_field(f, i, source) for i, f in enumerate(_as_list(raw, key, source))
    )


def _load_receiver(raw: dict | None, source: str) -> Receiver | None:
    if raw is None:
        return None
    return Receiver(
        field=_load_field(raw, 0, source),
        fields=_load_fields(raw, "fields", source),
    )


def _load_function(raw: Any, source: str) -> Function:
    if not isinstance(raw, dict):
        raise DeclarationLoadError("function must be an object", source=source)
    name = _as_str(raw, "name", source)
    if not name:
        raise DeclarationLoadError("function has no name", source=source)

    function = Function(
        name=name,
        is_exported=raw.get("is_exported", name[0].isupper()),
        receiver=_load_receiver(raw.get("receiver"), source),
        parameters=_load_fields(raw, "parameters", source),
        results=_load_fields(raw, "results", source),
        returns_error=raw.get("returns_error", False),
    )
    logger.debug(
        f"Loaded function: {function.full_name()} "
        f"({len(function.parameters)} params, {len(function.results)} results)"
    )
    return function
