"""Embed source maps into transformed module code and recover them later."""

from inlinemap.sourcemap import (
    InlineOptions,
    InlineSourceMapError,
    RetrievedSourceMap,
    SourceMapDecodeError,
    SourceMapSupport,
    TransformedModule,
    code_source_map_lookup,
    extract_source_map,
    get_source_map_support,
    install_sourcemaps_support,
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
