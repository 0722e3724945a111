"""Semantic model for generating Go test skeletons from parsed declarations."""

from gotest_stubs.loader import (
    DeclarationLoadError,
    SourceFile,
    load_declarations,
    load_declarations_content,
)
from gotest_stubs.models import (
    EmptyTypeNameError,
    Expression,
    Field,
    Function,
    Header,
    Import,
    Path,
    Receiver,
)
from gotest_stubs.naming import is_separator, title
from gotest_stubs.view import (
    ViewError,
    ViewResult,
    build_view,
    function_view,
    select_functions,
)

__all__ = [
    # Models
    "Expression",
    "Field",
    "Receiver",
    "Function",
    "Import",
    "Header",
    "Path",
    "EmptyTypeNameError",
    # Naming
    "is_separator",
    "title",
    # Loading
    "SourceFile",
    "DeclarationLoadError",
    "load_declarations",
    "load_declarations_content",
    # Template data
    "ViewError",
    "ViewResult",
    "select_functions",
    "function_view",
    "build_view",
]
