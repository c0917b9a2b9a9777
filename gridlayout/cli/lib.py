"""Command line interface for gridlayout.

Works on layout export files, the same JSON documents the designer writes:

    gridlayout new -o layout.json
    gridlayout generate layout.json --target css-areas --responsive
    gridlayout validate layout.json
    gridlayout env
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from gridlayout.config import (
    EnvVar,
    get_environment,
    get_environment_info,
    get_parent_class,
    list_environment_variables,
)
from gridlayout.core import get_logger, setup_logging
from gridlayout.providers import get_provider, list_providers
from gridlayout.schema import (
    BreakpointId,
    LayoutImportError,
    LayoutState,
    default_layout_state,
    export_layout_json,
    parse_layout_export,
)
from gridlayout.validation import validate_layout

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


# =============================================================================
# Helpers
# =============================================================================


def _resolve_layout_file(path: Path | None) -> Path | None:
    """Positional file argument, falling back to GRID_LAYOUT_FILE."""
    resolved = get_environment(EnvVar.GRID_LAYOUT_FILE, override=path)
    if resolved is None:
        logger.error("No layout file given and GRID_LAYOUT_FILE is not set")
    return resolved


def _load_layout(path: Path) -> LayoutState | None:
    """Read and validate a layout export, logging the reason on failure."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Cannot read {path}: {e}")
        return None

    try:
        return parse_layout_export(text).layout
    except LayoutImportError as e:
        logger.error(f"{path}: {e}")
        return None


def _emit(text: str, output: Path | None) -> None:
    if output:
        output.write_text(text + "\n", encoding="utf-8")
        logger.info(f"Written to {output}")
    else:
        print(text)


# =============================================================================
# New Command
# =============================================================================


def cmd_new(args: argparse.Namespace) -> int:
    """Handle the new command."""
    _emit(export_layout_json(default_layout_state()), args.output)
    return 0


def handle_new_command(argv: list[str]) -> int:
    """Handle new-specific arguments."""
    parser = argparse.ArgumentParser(
        prog="gridlayout new",
        description="Write a default layout export",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file path (prints to stdout if not specified)",
    )
    return cmd_new(parser.parse_args(argv))


# =============================================================================
# Generate Command
# =============================================================================


def cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate command."""
    path = _resolve_layout_file(args.file)
    if path is None:
        return 1
    state = _load_layout(path)
    if state is None:
        return 1

    if args.breakpoint:
        state = state.with_active_breakpoint(args.breakpoint)

    target = args.target
    if target is None:
        target = "css-areas" if get_environment(EnvVar.GRID_USE_AREAS) else "css"

    provider = get_provider(target)
    result = provider.transpile_with_warnings(
        state,
        parent_class=get_parent_class(args.parent_class),
        responsive=args.responsive,
    )
    for warning in result.warnings:
        logger.warning(f"[{warning.breakpoint}] {warning.message}")

    _emit(result.code, args.output)
    return 0


def handle_generate_command(argv: list[str]) -> int:
    """Handle generate-specific arguments."""
    parser = argparse.ArgumentParser(
        prog="gridlayout generate",
        description="Generate CSS or HTML from a layout export",
    )
    parser.add_argument(
        "file",
        type=Path,
        nargs="?",
        default=None,
        help="Layout export file (default: GRID_LAYOUT_FILE)",
    )
    parser.add_argument(
        "--target",
        "-t",
        type=str,
        default=None,
        choices=list_providers(),
        help="Output provider (default: css, or css-areas with GRID_USE_AREAS)",
    )
    parser.add_argument(
        "--responsive",
        "-r",
        action="store_true",
        help="Emit every breakpoint with media queries",
    )
    parser.add_argument(
        "--breakpoint",
        "-b",
        type=str,
        default=None,
        choices=[bp.value for bp in BreakpointId],
        help="Breakpoint to render (default: the file's active breakpoint)",
    )
    parser.add_argument(
        "--parent-class",
        type=str,
        default=None,
        help="Grid container class (default: GRID_PARENT_CLASS)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file path (prints to stdout if not specified)",
    )
    return cmd_generate(parser.parse_args(argv))


# =============================================================================
# Validate Command
# =============================================================================


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle the validate command."""
    path = _resolve_layout_file(args.file)
    if path is None:
        return 1
    state = _load_layout(path)
    if state is None:
        return 1

    errors = validate_layout(state)
    if not errors:
        logger.info(f"{path}: no issues found")
        return 0

    for error in errors:
        subject = error.child_id or "grid"
        print(f"{error.breakpoint}: {error.error_type} ({subject}) {error.message}")
    logger.info(f"{path}: {len(errors)} issue(s)")
    return 0


def handle_validate_command(argv: list[str]) -> int:
    """Handle validate-specific arguments."""
    parser = argparse.ArgumentParser(
        prog="gridlayout validate",
        description="Check a layout export for structural issues",
    )
    parser.add_argument(
        "file",
        type=Path,
        nargs="?",
        default=None,
        help="Layout export file (default: GRID_LAYOUT_FILE)",
    )
    return cmd_validate(parser.parse_args(argv))


# =============================================================================
# Env Command
# =============================================================================


def cmd_env(args: argparse.Namespace) -> int:
    """Handle the env command."""
    for var in list_environment_variables(args.category):
        info = get_environment_info(var)
        print(f"{info.name}={get_environment(var)}  # {info.description}")
    return 0


def handle_env_command(argv: list[str]) -> int:
    """Handle env-specific arguments."""
    parser = argparse.ArgumentParser(
        prog="gridlayout env",
        description="Show effective configuration",
    )
    parser.add_argument(
        "--category",
        "-c",
        type=str,
        default=None,
        choices=["grid", "output", "runtime"],
        help="Only show one category",
    )
    return cmd_env(parser.parse_args(argv))


# =============================================================================
# Main
# =============================================================================


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: gridlayout {command} [args]")
    print("\nCommands:")
    print("  new        Write a default layout export")
    print("  generate   Generate CSS or HTML from a layout export")
    print("  validate   Check a layout export for structural issues")
    print("  env        Show effective configuration")
    print("\nExamples:")
    print("  gridlayout new -o layout.json")
    print("  gridlayout generate layout.json --responsive")
    print("  gridlayout generate layout.json -t html --parent-class page")
    print("  gridlayout validate layout.json")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        show_help()
        return 1

    command, rest_args = args[0], args[1:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    commands = {
        "new": lambda: handle_new_command(rest_args),
        "generate": lambda: handle_generate_command(rest_args),
        "validate": lambda: handle_validate_command(rest_args),
        "env": lambda: handle_env_command(rest_args),
    }

    if command in commands:
        setup_logging(get_environment(EnvVar.GRID_LOG_LEVEL))
        return commands[command]()

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


__all__ = ["main", "show_help"]
