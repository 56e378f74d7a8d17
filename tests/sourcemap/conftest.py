"""Shared fixtures for inline source map tests."""

from typing import Any

import pytest

from inlinemap.sourcemap.handler import SourceMapSupport
from inlinemap.sourcemap.inline import InlineOptions


@pytest.fixture
def options() -> InlineOptions:
    """Inline options for a module inside the /proj project."""
    return InlineOptions(root="/proj", filepath="/proj/src/app.js")


@pytest.fixture
def source_map() -> dict[str, Any]:
    """A small source map with one relative source."""
    return {
        "version": 3,
        "file": "app.js",
        "sources": ["main.js"],
        "sourcesContent": ["console.log('héllo')\n"],
        "names": [],
        "mappings": "AAAA",
    }


@pytest.fixture
def support() -> SourceMapSupport:
    """An isolated source map support instance."""
    return SourceMapSupport()
