"""Source map retrieval hook for stack trace rewriting.

A stack trace rewriter asks for the source map of a module by its source
identifier. ``SourceMapSupport`` owns the single retrieval hook it calls;
installing a new hook replaces the previous one.
"""

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel

from inlinemap.log import get_logger
from inlinemap.sourcemap.errors import SourceMapDecodeError
from inlinemap.sourcemap.inline import extract_source_map

logger = get_logger(__name__)

SourceMapLookup = Callable[[str], Mapping[str, Any] | None]
"""Returns the source map of a module source, or None when it has none."""


class RetrievedSourceMap(BaseModel):
    """Source map handed to the stack trace rewriter."""

    url: str
    """Source identifier the map was requested for."""

    map: dict[str, Any]
    """The source map itself."""


SourceMapRetriever = Callable[[str], RetrievedSourceMap | None]


class SourceMapSupport:
    """Holder of the source map retrieval hook.

    Keep one hook at a time. Each ``install`` call replaces the previous
    hook entirely; hooks are never chained.
    """

    def __init__(self) -> None:
        """Initialize with no hook installed."""
        self._retriever: SourceMapRetriever | None = None

    @property
    def is_installed(self) -> bool:
        """Check whether a retrieval hook is installed."""
        return self._retriever is not None

    def install(self, retriever: SourceMapRetriever) -> None:
        """Install the retrieval hook, replacing any previous one.

        Args:
            retriever: Callable resolving a source identifier to its map.

        """
        if self._retriever is not None:
            logger.debug("Replacing installed source map retriever")
        self._retriever = retriever
        logger.debug("Installed source map retriever")

    def uninstall(self) -> None:
        """Remove the retrieval hook."""
        if self._retriever is not None:
            self._retriever = None
            logger.debug("Uninstalled source map retriever")

    def retrieve_source_map(self, source: str) -> RetrievedSourceMap | None:
        """Retrieve the source map for a source identifier.

        Args:
            source: Source identifier, typically a module file path.

        Returns:
            The retrieved map, or None if no hook is installed or the hook
            has no map for the source.

        """
        if self._retriever is None:
            return None
        return self._retriever(source)


_source_map_support: SourceMapSupport | None = None


def get_source_map_support() -> SourceMapSupport:
    """Get the process-wide source map support instance.

    Returns:
        The shared SourceMapSupport instance.

    """
    global _source_map_support  # noqa: PLW0603
    if _source_map_support is None:
        _source_map_support = SourceMapSupport()
    return _source_map_support


def install_sourcemaps_support(
    get_source_map: SourceMapLookup,
    *,
    support: SourceMapSupport | None = None,
) -> SourceMapSupport:
    """Register a source map lookup for stack trace rewriting.

    Args:
        get_source_map: Lookup returning the map of a source, or None.
        support: Target instance, defaults to the process-wide one.

    Returns:
        The instance the hook was installed into.

    """
    if support is None:
        support = get_source_map_support()

    def retrieve_source_map(source: str) -> RetrievedSourceMap | None:
        source_map = get_source_map(source)
        if source_map is None:
            logger.debug("No source map for %s", source)
            return None
        return RetrievedSourceMap(url=source, map=dict(source_map))

    support.install(retrieve_source_map)
    return support


def code_source_map_lookup(
    get_code: Callable[[str], str | None] | Mapping[str, str],
) -> SourceMapLookup:
    """Build a lookup that reads maps from the modules' inline trailers.

    Args:
        get_code: Callable or mapping resolving a source identifier to the
            module code that was passed through ``with_inline_sourcemap``.

    Returns:
        A lookup suitable for ``install_sourcemaps_support``. A corrupt
        trailer is logged and reported as no map.

    """
    load_code = get_code.get if isinstance(get_code, Mapping) else get_code

    def lookup(source: str) -> dict[str, Any] | None:
        code = load_code(source)
        if code is None:
            return None
        try:
            return extract_source_map(code)
        except SourceMapDecodeError as err:
            logger.warning("Ignoring corrupt inline source map in %s: %s", source, err)
            return None

    return lookup
