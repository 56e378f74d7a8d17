"""Parse and organize CLI args."""

import os
from collections.abc import Callable
from pathlib import Path

import typed_argparse as tap

ROOT_ENV_VAR = "INLINEMAP_ROOT"
"""Environment variable holding the project root when --root is omitted."""


class Args(tap.TypedArgs):
    """CLI args."""

    code_file: Path | None = tap.arg(
        positional=True,
        help="Transformed module code to process",
        default=None,
    )
    map: Path | None = tap.arg(
        help="Source map JSON file to inline into the code",
        default=None,
    )
    root: Path | None = tap.arg(
        help=f"Project root (default: ${ROOT_ENV_VAR} or the working directory)",
        default=None,
    )
    filepath: Path | None = tap.arg(
        help="Module file path used to resolve relative sources (default: CODE_FILE)",
        default=None,
    )
    extract: bool = tap.arg(
        help="Extract the inline source map instead of inlining one",
        default=False,
    )
    out: Path | None = tap.arg(
        help="Output file path (default: stdout)",
        default=None,
    )
    verbose: bool = tap.arg(help="Enables verbose (DEBUG) logging", default=False)
    version: bool = tap.arg(help="Show version and exit", default=False)

    @property
    def effective_root(self) -> str:
        """Get the project root to normalize sources against.

        If --root is provided, use that. Otherwise read the root from the
        environment, falling back to the current working directory.

        Returns:
            str: Absolute project root path

        """
        root = self.root
        if root is None:
            env_root = os.environ.get(ROOT_ENV_VAR)
            root = Path(env_root) if env_root else Path.cwd()
        return str(root.absolute())

    @property
    def effective_filepath(self) -> str:
        """Get the module file path used to resolve relative sources.

        Returns:
            str: Absolute module file path

        Raises:
            ValueError: If neither --filepath nor CODE_FILE was given.

        """
        filepath = self.filepath or self.code_file
        if filepath is None:
            msg = "A module file path is required to inline a source map."
            raise ValueError(msg)
        return str(filepath.absolute())


def bind_and_run(app_main: Callable[[Args], None]) -> None:
    """Parse args and run the app passing the parsed args."""
    tap.Parser(Args).bind(app_main).run()
