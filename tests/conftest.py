"""Pytest configuration and fixtures for Stache tests."""

from collections.abc import Sequence

import pytest

from stache import (
    Configuration,
    ContentType,
    DictTokenSource,
    TemplateCompiler,
    TemplateRepository,
    TemplateToken,
)


@pytest.fixture
def compiler():
    """Create a compiler without a template repository."""
    return TemplateCompiler()


@pytest.fixture
def text_compiler():
    """Create a compiler producing text (non-HTML) templates."""
    return TemplateCompiler(ContentType.TEXT)


@pytest.fixture
def make_repository():
    """Build a TemplateRepository over a name -> tokens mapping."""

    def factory(
        templates: dict[str, Sequence[TemplateToken]],
        configuration: Configuration | None = None,
    ) -> TemplateRepository:
        return TemplateRepository(DictTokenSource(templates), configuration)

    return factory

