"""Flatten declarations into the plain data a test template renders."""

import json
import logging
import re
from dataclasses import asdict, dataclass, field

from gotest_stubs.loader import SourceFile
from gotest_stubs.models import EmptyTypeNameError, Field, Function, Receiver

logger = logging.getLogger(__name__)


@dataclass
class ViewError:
    """A non-fatal error that stopped generation of a single field."""

    function: str
    field: str
    error: str


@dataclass
class ViewResult:
    """Template data for one source file."""

    path: str
    test_path: str
    package: str
    imports: list[dict]
    functions: list[dict]
    errors: list[ViewError] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "test_path": self.test_path,
            "package": self.package,
            "imports": self.imports,
            "functions": self.functions,
            "errors": [asdict(e) for e in self.errors],
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


def select_functions(
    functions: tuple[Function, ...],
    only: str | None = None,
    exclude: str | None = None,
    exported_only: bool = False,
) -> list[Function]:
    """Pick the functions to generate tests for.

    Args:
        functions: Candidate functions, in source order
        only: Regex a function name must match
        exclude: Regex a function name must not match
        exported_only: Keep exported functions only

    Returns:
        The selected functions, order preserved

    Raises:
        re.error: If either pattern is not a valid regex
    """
    only_re = re.compile(only) if only else None
    exclude_re = re.compile(exclude) if exclude else None

    selected = []
    for fn in functions:
        if exported_only and not fn.is_exported:
            continue
        if only_re and not only_re.search(fn.name):
            continue
        if exclude_re and exclude_re.search(fn.name):
            continue
        selected.append(fn)

    logger.info(f"Selected {len(selected)} of {len(functions)} functions")
    return selected


def field_view(
    f: Field | Receiver,
    errors: list[ViewError] | None = None,
    function: str = "",
) -> dict:
    """Describe a field for a template.

    A field whose short name cannot be derived gets ``short_name: None``; the
    failure is appended to ``errors`` when a list is given.
    """
    try:
        short_name = f.short_name()
    except EmptyTypeNameError as e:
        logger.warning(f"Skipping short name of {function}.{f.name or '_'}: {e}")
        short_name = None
        if errors is not None:
            errors.append(ViewError(function=function, field=f.name, error=str(e)))

    return {
        "name": f.name,
        "index": f.index,
        "type": str(f.type),
        "is_named": f.is_named(),
        "is_writer": f.is_writer(),
        "is_struct": f.is_struct(),
        "is_basic_type": f.is_basic_type(),
        "is_star": f.type.is_star,
        "is_variadic": f.type.is_variadic,
        "short_name": short_name,
    }


def function_view(fn: Function, errors: list[ViewError] | None = None) -> dict:
    """Describe a function and its test-oriented derivations for a template."""
    name = fn.full_name()

    receiver = None
    if fn.receiver is not None:
        receiver = field_view(fn.receiver, errors, name)
        receiver["fields"] = [field_view(f, errors, name) for f in fn.receiver.fields]

    parameters = [field_view(p, errors, name) for p in fn.parameters]
    # Reuse parameter views so a failing field is only reported once
    by_param = {id(p): v for p, v in zip(fn.parameters, parameters)}

    return {
        "name": fn.name,
        "full_name": name,
        "test_name": fn.test_name(),
        "is_exported": fn.is_exported,
        "is_naked": fn.is_naked(),
        "returns_error": fn.returns_error,
        "returns_multiple": fn.returns_multiple(),
        "only_returns_one_value": fn.only_returns_one_value(),
        "only_returns_error": fn.only_returns_error(),
        "receiver": receiver,
        "parameters": parameters,
        "test_parameters": [by_param[id(p)] for p in fn.test_parameters()],
        "test_results": [field_view(r, errors, name) for r in fn.test_results()],
    }


def build_view(source: SourceFile, functions: list[Function] | None = None) -> ViewResult:
    """Build template data for a source file.

    Args:
        source: The loaded source file
        functions: Subset of the file's functions to include (default: all)

    Returns:
        ViewResult with per-function data and any non-fatal errors
    """
    if functions is None:
        functions = list(source.functions)

    errors: list[ViewError] = []
    views = [function_view(fn, errors) for fn in functions]
    if errors:
        logger.warning(f"{len(errors)} fields could not be fully described")

    return ViewResult(
        path=str(source.path),
        test_path=str(source.path.test_path()),
        package=source.header.package,
        imports=[{"name": i.name, "path": i.path} for i in source.header.imports],
        functions=views,
        errors=errors,
    )
