"""Inline source maps for transformed module code.

Provide embedding of source maps into module code as a tagged trailer,
decoding of that trailer, and the retrieval hook used by stack trace
rewriting.
"""

from inlinemap.sourcemap.errors import InlineSourceMapError, SourceMapDecodeError
from inlinemap.sourcemap.handler import (
    RetrievedSourceMap,
    SourceMapSupport,
    code_source_map_lookup,
    get_source_map_support,
    install_sourcemaps_support,
)
from inlinemap.sourcemap.inline import (
    InlineOptions,
    TransformedModule,
    extract_source_map,
    with_inline_sourcemap,
)

__all__ = [
    "InlineOptions",
    "InlineSourceMapError",
    "RetrievedSourceMap",
    "SourceMapDecodeError",
    "SourceMapSupport",
    "TransformedModule",
    "code_source_map_lookup",
    "extract_source_map",
    "get_source_map_support",
    "install_sourcemaps_support",
    "with_inline_sourcemap",
]
