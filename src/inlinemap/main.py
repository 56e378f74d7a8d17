"""inlinemap CLI entry point."""

import json
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console

from inlinemap.args import Args, bind_and_run
from inlinemap.log import get_logger, init_logging
from inlinemap.sourcemap.errors import SourceMapDecodeError
from inlinemap.sourcemap.inline import (
    InlineOptions,
    TransformedModule,
    extract_source_map,
    with_inline_sourcemap,
)

logger = get_logger(__name__)

EXIT_SUCCESS = 0
"""Command completed."""

EXIT_NO_MAP = 1
"""The code carries no inline source map."""

EXIT_FILE_ERROR = 2
"""An input file is missing, unreadable or corrupt."""

error_console = Console(stderr=True)


def get_version() -> str:
    """Get the installed inlinemap version.

    Returns:
        Version string, or "unknown" when running from an uninstalled tree.

    """
    try:
        return version("inlinemap")
    except PackageNotFoundError:
        return "unknown"


def _write_output(text: str, out: Path | None) -> None:
    if out is None:
        sys.stdout.write(text)
    else:
        out.write_text(text, encoding="utf-8")
        logger.debug("Wrote %d characters to %s", len(text), out)


def run_inline(
    code_file: Path,
    map_file: Path,
    options: InlineOptions,
    out: Path | None = None,
) -> int:
    """Inline a source map file into a code file.

    Args:
        code_file: Transformed module code.
        map_file: Source map JSON for the code.
        options: Project root and module path used to normalize sources.
        out: Output file, stdout when None.

    Returns:
        Process exit code.

    """
    try:
        code = code_file.read_text(encoding="utf-8")
        source_map = json.loads(map_file.read_text(encoding="utf-8"))
    except OSError as err:
        error_console.print(f"[red]error:[/red] cannot read input: {err}")
        return EXIT_FILE_ERROR
    except json.JSONDecodeError as err:
        error_console.print(f"[red]error:[/red] {map_file} is not valid JSON: {err}")
        return EXIT_FILE_ERROR

    if not isinstance(source_map, dict):
        error_console.print(f"[red]error:[/red] {map_file} is not a source map object")
        return EXIT_FILE_ERROR

    module = with_inline_sourcemap(TransformedModule(code=code, map=source_map), options)
    _write_output(module.code, out)
    return EXIT_SUCCESS


def run_extract(code_file: Path, out: Path | None = None) -> int:
    """Print the inline source map of a code file as JSON.

    Args:
        code_file: Module code carrying an inline source map trailer.
        out: Output file, stdout when None.

    Returns:
        Process exit code.

    """
    try:
        code = code_file.read_text(encoding="utf-8")
    except OSError as err:
        error_console.print(f"[red]error:[/red] cannot read input: {err}")
        return EXIT_FILE_ERROR

    try:
        source_map = extract_source_map(code)
    except SourceMapDecodeError as err:
        error_console.print(f"[red]error:[/red] {code_file}: {err}")
        return EXIT_FILE_ERROR

    if source_map is None:
        error_console.print(f"[yellow]{code_file} has no inline source map[/yellow]")
        return EXIT_NO_MAP

    _write_output(json.dumps(source_map, indent=2, ensure_ascii=False) + "\n", out)
    return EXIT_SUCCESS


def execute(args: Args) -> int:
    """Dispatch parsed args to the matching command.

    Returns:
        Process exit code.

    """
    if args.code_file is None:
        error_console.print("[red]error:[/red] CODE_FILE is required")
        return EXIT_FILE_ERROR

    if args.extract:
        return run_extract(args.code_file, args.out)

    if args.map is None:
        error_console.print("[red]error:[/red] --map is required unless --extract")
        return EXIT_FILE_ERROR

    options = InlineOptions(root=args.effective_root, filepath=args.effective_filepath)
    return run_inline(args.code_file, args.map, options, args.out)


def run(args: Args) -> None:
    """Configure and run the CLI."""
    if args.version:
        Console().print(f"inlinemap {get_version()}", highlight=False)
        sys.exit(EXIT_SUCCESS)

    load_dotenv(
        dotenv_path=Path.cwd() / ".env",
        override=False,
    )
    init_logging(args)
    sys.exit(execute(args))


def main() -> None:
    """Entry point for the CLI."""
    bind_and_run(run)


if __name__ == "__main__":
    main()
