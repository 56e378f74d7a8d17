"""Source path normalization for inline source maps.

Dev servers may report map sources that are not valid filesystem paths
(e.g. ``/src/main.js`` relative to a virtual source root). Rewrite them
to absolute paths under the project root. Path math is pure string
manipulation with POSIX separators; the filesystem is never touched.
"""

import posixpath
import re
from typing import Any

_DRIVE_LETTER_RE = re.compile(r"^[A-Za-z]:/")


def _to_posix(path: str) -> str:
    return path.replace("\\", "/")


def is_absolute(path: str) -> bool:
    """Check whether a path is absolute.

    Both POSIX roots and Windows drive-letter prefixes count as absolute.

    Args:
        path: Path to check.

    Returns:
        True if the path is absolute.

    """
    path = _to_posix(path)
    return path.startswith("/") or bool(_DRIVE_LETTER_RE.match(path))


def _normalize(path: str) -> str:
    normalized = posixpath.normpath(path)
    # normpath keeps a leading double slash, collapse it like any other
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


def normalize_source(
    source: Any,
    *,
    root: str,
    filepath: str,
) -> Any:
    """Rewrite a single map source to an absolute filesystem path.

    Args:
        source: Source entry from the map's ``sources`` list.
        root: Absolute project root path.
        filepath: Absolute path of the module the map belongs to.

    Returns:
        The normalized path. Empty or non-string entries, and paths
        already absolute inside the root, are returned unchanged.

    """
    if not isinstance(source, str) or not source:
        return source

    # relative to the module's directory, not necessarily the project root
    if not is_absolute(source):
        base_dir = posixpath.dirname(_to_posix(filepath))
        return _normalize(posixpath.join(base_dir, _to_posix(source)))

    if not source.startswith(root):
        return _normalize(f"{_to_posix(root)}/{_to_posix(source)}")

    return source


def normalize_sources(
    sources: Any,
    *,
    root: str,
    filepath: str,
) -> Any:
    """Rewrite every entry of a map's ``sources`` list.

    Args:
        sources: The ``sources`` field of a source map.
        root: Absolute project root path.
        filepath: Absolute path of the module the map belongs to.

    Returns:
        A new list in the same order, or ``sources`` unchanged when it is
        not a list.

    """
    if not isinstance(sources, list):
        return sources
    return [
        normalize_source(source, root=root, filepath=filepath) for source in sources
    ]
