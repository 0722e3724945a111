"""Command-line interface for gotest-stubs."""

import argparse
import logging
import re
import sys

from gotest_stubs.loader import DeclarationLoadError, load_declarations
from gotest_stubs.models import Path
from gotest_stubs.view import build_view, select_functions

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="gotest-stubs",
        description="Derive Go test skeleton data from parsed declarations",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # describe subcommand
    describe_parser = subparsers.add_parser(
        "describe",
        help="Print template data for a parsed source file as JSON",
    )
    describe_parser.add_argument(
        "declarations",
        help="JSON file produced by the source parser",
    )
    describe_parser.add_argument(
        "--only",
        help="Only include functions whose name matches this regex",
    )
    describe_parser.add_argument(
        "--exclude",
        help="Skip functions whose name matches this regex",
    )
    describe_parser.add_argument(
        "--exported",
        action="store_true",
        help="Only include exported functions",
    )
    describe_parser.add_argument(
        "--output",
        "-o",
        help="Write JSON to this file instead of stdout",
    )

    # test-path subcommand
    test_path_parser = subparsers.add_parser(
        "test-path",
        help="Print the test file path for each source path",
    )
    test_path_parser.add_argument(
        "paths",
        nargs="+",
        help="Go source file paths",
    )

    return parser


def parse_args(args: list[str]) -> argparse.Namespace:
    """Parse command-line arguments."""
    return create_parser().parse_args(args)


def run_describe(
    declarations: str,
    only: str | None = None,
    exclude: str | None = None,
    exported: bool = False,
    output: str | None = None,
) -> int:
    """Run the describe command.

    Args:
        declarations: Path to the parser's JSON output
        only: Regex of function names to include
        exclude: Regex of function names to skip
        exported: Only include exported functions
        output: File to write to (default: stdout)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        source = load_declarations(declarations)
        functions = select_functions(source.functions, only, exclude, exported)
    except DeclarationLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except re.error as e:
        logger.error(f"Invalid function filter: {e}")
        print(f"Error: invalid regex: {e}", file=sys.stderr)
        return 1

    result = build_view(source, functions)

    if output:
        try:
            with open(output, "w") as f:
                f.write(result.to_json())
        except OSError as e:
            logger.error(f"Failed to write {output}: {e}")
            print(f"Error: {e}", file=sys.stderr)
            return 1
        logger.info(f"Template data written to {output}")
    else:
        print(result.to_json())

    if result.errors:
        print(
            f"{len(result.errors)} fields could not be fully described",
            file=sys.stderr,
        )
    return 0


def run_test_path(paths: list[str]) -> int:
    """Run the test-path command."""
    for p in paths:
        print(Path(p).test_path())
    return 0


def run_cli(args: list[str]) -> int:
    """Run the CLI with the given arguments.

    Args:
        args: Command-line arguments (without program name)

    Returns:
        Exit code (0 for success, non-zero for fatal errors)
    """
    try:
        parsed = parse_args(args)
    except SystemExit as e:
        return e.code if e.code else 1

    setup_logging(parsed.verbose)

    if parsed.command is None:
        create_parser().print_help(sys.stderr)
        return 1

    if parsed.command == "describe":
        return run_describe(
            parsed.declarations,
            only=parsed.only,
            exclude=parsed.exclude,
            exported=parsed.exported,
            output=parsed.output,
        )
    elif parsed.command == "test-path":
        return run_test_path(parsed.paths)

    return 1


def main():
    """Entry point for the CLI."""
    sys.exit(run_cli(sys.argv[1:]))


if __name__ == "__main__":
    main()
