"""Declaration models and the derivations test templates are built from."""

import logging
import unicodedata
from dataclasses import dataclass, field

from gotest_stubs.naming import title

logger = logging.getLogger(__name__)

BASIC_TYPES = frozenset(
    {
        "bool",
        "string",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "uintptr",
        "byte",
        "rune",
        "float32",
        "float64",
        "complex64",
        "complex128",
    }
)

TEST_SUFFIX = "_test"
SOURCE_EXTENSION = ".go"


class EmptyTypeNameError(ValueError):
    """A short name was requested for a field whose type has no name."""

    def __init__(self, field_name: str = ""):
        super().__init__("cannot derive short name: empty type value")
        self.field_name = field_name


def _starts_lower(s: str) -> bool:
    # Only category Ll; str.islower() also accepts Other_Lowercase such as "ª"
    return bool(s) and unicodedata.category(s[0]) == "Ll"


@dataclass(frozen=True)
class Expression:
    """A type reference such as ``int``, ``*bytes.Buffer`` or ``...string``."""

    value: str
    is_star: bool = False
    is_variadic: bool = False
    is_writer: bool = False
    underlying: str = ""  # e.g. "struct{...}" for named struct types

    def __str__(self) -> str:
        value = self.value
        if self.is_star:
            value = "*" + value
        if self.is_variadic:
            return "[]" + value
        return value


@dataclass(frozen=True)
class Field:
    """A parameter, result or receiver value."""

    name: str
    type: Expression
    index: int = 0

    def is_writer(self) -> bool:
        return self.type.is_writer

    def is_struct(self) -> bool:
        return self.type.underlying.startswith("struct")

    def is_basic_type(self) -> bool:
        """Whether the type, or the kind it resolves to, is a Go scalar."""
        return str(self.type) in BASIC_TYPES or self.type.underlying in BASIC_TYPES

    def is_named(self) -> bool:
        return self.name != "" and self.name != "_"

    def short_name(self) -> str:
        """Conventional one-letter variable name taken from the type name.

        Raises:
            EmptyTypeNameError: If the field's type has an empty value
        """
        if not self.type.value:
            logger.debug(f"No type value for field {self.name!r}")
            raise EmptyTypeNameError(self.name)
        # "İ" lower-cases to "i" plus a combining dot; keep the base letter
        return self.type.value[0].lower()[0]


@dataclass(frozen=True)
class Receiver:
    """A method receiver and the struct fields reachable through it."""

    field: Field
    fields: tuple[Field, ...] = ()

    @property
    def name(self) -> str:
        return self.field.name

    @property
    def type(self) -> Expression:
        return self.field.type

    @property
    def index(self) -> int:
        return self.field.index

    def is_writer(self) -> bool:
        return self.field.is_writer()

    def is_struct(self) -> bool:
        return self.field.is_struct()

    def is_basic_type(self) -> bool:
        return self.field.is_basic_type()

    def is_named(self) -> bool:
        return self.field.is_named()

    def short_name(self) -> str:
        return self.field.short_name()


@dataclass(frozen=True)
class Function:
    """A function or method declaration to generate a test for.

    ``results`` never includes a trailing ``error`` result; that is recorded
    in ``returns_error`` instead.
    """

    name: str
    is_exported: bool = False
    receiver: Receiver | None = None
    parameters: tuple[Field, ...] = ()
    results: tuple[Field, ...] = ()
    returns_error: bool = False

    def test_parameters(self) -> tuple[Field, ...]:
        """Parameters that become inputs of a test case (writers excluded)."""
        return tuple(p for p in self.parameters if not p.is_writer())

    def test_results(self) -> tuple[Field, ...]:
        """Results a test case asserts on.

        Writer parameters are captured as strings, so each one is appended
        after the real results as an extra string-typed result.
        """
        results = list(self.results)
        for p in self.parameters:
            if not p.is_writer():
                continue
            results.append(
                Field(
                    name=p.name,
                    type=Expression(value="string", is_writer=True, underlying="string"),
                    index=len(results),
                )
            )
        return tuple(results)

    def returns_multiple(self) -> bool:
        return len(self.results) > 1

    def only_returns_one_value(self) -> bool:
        return len(self.results) == 1 and not self.returns_error

    def only_returns_error(self) -> bool:
        return len(self.results) == 0 and self.returns_error

    def full_name(self) -> str:
        """Receiver type and function name, both title-cased."""
        receiver_type = ""
        if self.receiver is not None:
            receiver_type = self.receiver.type.value
        return title(receiver_type) + title(self.name)

    def test_name(self) -> str:
        """Name of the generated test function.

        Unexported receiver types and functions get an underscore after
        ``Test`` so the original casing stays visible.
        """
        if self.name.startswith("Test"):
            return self.name
        if self.receiver is not None:
            receiver_type = self.receiver.type.value
            if _starts_lower(receiver_type):
                receiver_type = "_" + receiver_type
            return "Test" + receiver_type + "_" + self.name
        if _starts_lower(self.name):
            return "Test_" + self.name
        return "Test" + self.name

    def is_naked(self) -> bool:
        """Whether there is nothing to vary between test cases."""
        return self.receiver is None and not self.parameters and not self.results


@dataclass(frozen=True)
class Import:
    """An import spec; ``name`` is the alias, empty when there is none."""

    name: str
    path: str


@dataclass(frozen=True)
class Header:
    """File-level metadata carried through to the generated test file."""

    package: str
    comments: tuple[str, ...] = ()
    imports: tuple[Import, ...] = ()
    code: bytes = field(default=b"", repr=False)


class Path(str):
    """A Go source file path."""

    def test_path(self) -> "Path":
        """The ``_test.go`` file that holds tests for this path."""
        if self.is_test_path():
            return self
        base = str(self)
        if base.endswith(SOURCE_EXTENSION):
            base = base[: -len(SOURCE_EXTENSION)]
        return Path(base + TEST_SUFFIX + SOURCE_EXTENSION)

    def is_test_path(self) -> bool:
        return self.endswith(TEST_SUFFIX + SOURCE_EXTENSION)
