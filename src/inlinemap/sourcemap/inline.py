"""Inline source map trailer encoding and decoding.

Append a module's source map to its code as a tagged base64 trailer and
recover it later, so the map travels with the code through caches, disk
writes and exec without a side channel.
"""

import base64
import binascii
import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from inlinemap.log import get_logger
from inlinemap.sourcemap.errors import SourceMapDecodeError
from inlinemap.sourcemap.paths import normalize_sources

logger = get_logger(__name__)

SOURCEMAPPING_URL = "sourceMappingURL"
"""Standard inline source map comment keyword."""

INLINE_SOURCEMAP_SENTINEL = "//# sourceMappingSource=vite-node"
"""Comment line marking code that already carries a tagged trailer."""

INLINE_SOURCEMAP_URL = f"{SOURCEMAPPING_URL}=data:application/json;charset=utf-8"
"""Data URL prefix of the tagged trailer, up to the base64 marker."""

# A tagged trailer is a whole comment line, optionally preceded by the
# sentinel line. The payload runs to the end of that line.
_TAGGED_TRAILER_RE = re.compile(
    rf"^(?:(?P<sentinel>{re.escape(INLINE_SOURCEMAP_SENTINEL)})\r?\n)?"
    rf"//# {re.escape(INLINE_SOURCEMAP_URL)};base64,(?P<payload>\S+)[ \t\r]*$",
    re.MULTILINE,
)

# Only well-formed payloads (base64 alphabet up to end of line) are matched,
# anything else is left in place as ordinary code.
_GENERIC_TRAILER_RE = re.compile(
    rf"//# {SOURCEMAPPING_URL}=data:application/json[^,\n]+base64,"
    r"[A-Za-z0-9+/]*={0,2}[ \t\r]*$",
    re.MULTILINE,
)


@dataclass
class TransformedModule:
    """Result of transforming a single module."""

    code: str
    """Transformed module source text."""

    map: dict[str, Any] | None = None
    """Source map of the transform, treated as opaque except ``sources``."""


@dataclass(frozen=True)
class InlineOptions:
    """Context for inlining a module's source map."""

    root: str
    """Absolute project root path."""

    filepath: str
    """Absolute path of the module being processed."""


def strip_inline_sourcemaps(code: str) -> str:
    """Remove generic inline source map comments from code.

    Args:
        code: Module source text.

    Returns:
        The code without any well-formed inline source map comment.

    """
    removed_total = 0
    while True:
        code, removed = _GENERIC_TRAILER_RE.subn("", code)
        if not removed:
            break
        removed_total += removed
    if removed_total:
        logger.debug("Stripped %d foreign inline source map(s)", removed_total)
    return code


def encode_source_map(source_map: Mapping[str, Any]) -> str:
    """Serialize a source map to the trailer's base64 payload.

    Args:
        source_map: The source map to encode.

    Returns:
        Base64 text of the compact UTF-8 JSON encoding.

    """
    text = json.dumps(source_map, separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def with_inline_sourcemap(
    module: TransformedModule,
    options: InlineOptions,
) -> TransformedModule:
    """Append the module's source map to its code as a tagged trailer.

    Sources of the map are rewritten to absolute paths and any other
    inline source map comment is dropped, so the result carries exactly
    one trailer. Modules without a map, or whose code already carries the
    sentinel, are returned unchanged.

    Args:
        module: The transformed module. Updated in place.
        options: Project root and module path used to normalize sources.

    Returns:
        The same module instance.

    """
    if module.map is None or INLINE_SOURCEMAP_SENTINEL in module.code:
        return module

    source_map = dict(module.map)
    if "sources" in source_map:
        source_map["sources"] = normalize_sources(
            source_map["sources"],
            root=options.root,
            filepath=options.filepath,
        )

    code = strip_inline_sourcemaps(module.code)
    payload = encode_source_map(source_map)

    module.map = source_map
    module.code = (
        f"{code.rstrip()}\n\n{INLINE_SOURCEMAP_SENTINEL}\n"
        f"//# {INLINE_SOURCEMAP_URL};base64,{payload}\n"
    )
    logger.debug(
        "Inlined source map for %s (%d bytes payload)",
        options.filepath,
        len(payload),
    )
    return module


def extract_source_map(code: str) -> dict[str, Any] | None:
    """Decode the tagged inline source map trailer of some code.

    Args:
        code: Module source text.

    Returns:
        The decoded source map, or None if the code has no tagged trailer.

    Raises:
        SourceMapDecodeError: If the trailer payload is not valid base64
            or does not hold a JSON object.

    """
    matches = list(_TAGGED_TRAILER_RE.finditer(code))
    if not matches:
        return None

    # the trailer written by with_inline_sourcemap follows the sentinel
    tagged = [match for match in matches if match.group("sentinel")]
    match = (tagged or matches)[-1]
    payload = match.group("payload")
    try:
        text = base64.b64decode(payload, validate=True).decode("utf-8")
        source_map = json.loads(text)
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise SourceMapDecodeError(payload, f"invalid base64 payload: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SourceMapDecodeError(payload, f"invalid JSON: {exc}") from exc

    if not isinstance(source_map, dict):
        msg = f"expected a JSON object, got {type(source_map).__name__}"
        raise SourceMapDecodeError(payload, msg)
    return source_map
