"""
Command line tools for Quiver libraries.

  quiver_to_json [--res] [--indent N] LIBRARY > quiver.json
  quiver_to_markdown LIBRARY OUTPUT_DIRECTORY
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from .config import settings
from .errors import QuiverError
from .export.markdown import export_markdown
from .storage.loader import read_library
from .utils.serializers import dump_library_json

# stdout carries the JSON export, so status and errors go to stderr
console = Console(stderr=True)


def _library_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "library",
        nargs="?" if settings.LIBRARY_PATH else None,
        default=settings.LIBRARY_PATH,
        type=Path,
        help="Path to the .qvlibrary folder (default: QUIVER_LIBRARY_PATH)",
    )


def _fail(exc: Exception) -> int:
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", highlight=False, soft_wrap=True)
    return 1


def json_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="quiver_to_json",
        description="Loads a Quiver library into a single JSON document on stdout.",
    )
    parser.add_argument(
        "--res",
        action="store_true",
        default=settings.LOAD_RESOURCES,
        help="include the content of all resources as data URIs",
    )
    parser.add_argument("--indent", type=int, default=settings.JSON_INDENT, help="pretty-print with N spaces")
    _library_arg(parser)
    args = parser.parse_args(argv)

    try:
        library = read_library(args.library, load_resources=args.res)
        dump_library_json(library, sys.stdout, indent=args.indent)
    except (QuiverError, OSError) as exc:
        return _fail(exc)
    return 0


def markdown_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="quiver_to_markdown",
        description="Converts a Quiver library into a set of Markdown files.",
    )
    _library_arg(parser)
    parser.add_argument("output", type=Path, help="Output directory")
    args = parser.parse_args(argv)

    try:
        library = read_library(args.library, load_resources=True)
        with console.status(f"Writing Markdown to {args.output}..."):
            written = export_markdown(library, args.output)
    except (QuiverError, OSError) as exc:
        return _fail(exc)

    console.print(f"[green]✓[/green] {len(written)} note(s) written to {escape(str(args.output))}", highlight=False, soft_wrap=True)
    return 0


def run_json() -> None:
    sys.exit(json_main())


def run_markdown() -> None:
    sys.exit(markdown_main())

