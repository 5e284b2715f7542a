"""Shared pytest fixtures for extraction tests."""

from __future__ import annotations

from collections.abc import Callable
from textwrap import dedent
from typing import Any

import pytest

from vuedoc.core.config import ExtractionSettings
from vuedoc.core.logging import get_logger
from vuedoc.parser import EmissionChannel, extract


Extract = Callable[..., EmissionChannel]


def _settings(overrides: dict[str, Any]) -> ExtractionSettings | None:
    if not overrides:
        return None
    return ExtractionSettings(**overrides)


@pytest.fixture
def extract_script() -> Extract:
    """Return a helper extracting entries from an inline JavaScript script."""

    pytest.importorskip("tree_sitter_javascript")

    def _run(source: str, **overrides: Any) -> EmissionChannel:
        return extract(
            dedent(source),
            settings=_settings(overrides),
            logger=get_logger("test.extract"),
        )

    return _run


@pytest.fixture
def extract_typescript() -> Extract:
    """Return a helper extracting entries from an inline TypeScript script."""

    pytest.importorskip("tree_sitter_typescript")

    def _run(source: str, **overrides: Any) -> EmissionChannel:
        return extract(
            dedent(source),
            lang="ts",
            settings=_settings(overrides),
            logger=get_logger("test.extract"),
        )

    return _run


@pytest.fixture
def extract_template() -> Extract:
    """Return a helper extracting entries from inline component markup."""

    pytest.importorskip("tree_sitter_html")

    def _run(source: str, **overrides: Any) -> EmissionChannel:
        return extract(
            template=dedent(source),
            settings=_settings(overrides),
            logger=get_logger("test.extract"),
        )

    return _run
