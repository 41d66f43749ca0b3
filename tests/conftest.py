"""Shared fixtures for the converter tests."""

from __future__ import annotations

from typing import Callable

import pytest
from bs4 import Tag

from ingest.loader import parse_html


@pytest.fixture
def body() -> Callable[[str], Tag]:
    """Parse an HTML snippet and return its <body>."""
    return parse_html


@pytest.fixture
def first(body) -> Callable[[str], Tag]:
    """Parse a snippet and return the first element inside <body>."""

    def _first(html: str) -> Tag:
        return body(html).find(True)

    return _first
