"""Tests for DOI identifier rules."""

from types import SimpleNamespace

import pytest

from doi_registry.core.exceptions import ValidationError
from doi_registry.services.identifiers import (
    build_doi,
    doi_url,
    mint_identifier,
    resolve_landing_page,
)


def make_config(**overrides):
    values = {
        "landing_page_template": "https://example.org/{{uuid}}",
        "public_url": "https://doi.org/",
        "pattern": "{{uuid}}",
        "prefix": "10.5072",
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def test_resolve_landing_page():
    """Test the suffix replaces the placeholder."""
    assert resolve_landing_page(make_config(), "abc-123") == "https://example.org/abc-123"


def test_resolve_landing_page_query_template():
    """Test placeholders in a query string."""
    config = make_config(landing_page_template="https://example.org/search?uuid={{uuid}}")

    assert resolve_landing_page(config, "abc") == "https://example.org/search?uuid=abc"


def test_resolve_landing_page_escapes_suffix():
    """Test characters unsafe in a URL are percent-encoded."""
    assert resolve_landing_page(make_config(), "a b#c") == "https://example.org/a%20b%23c"


def test_resolve_landing_page_empty_suffix():
    with pytest.raises(ValidationError):
        resolve_landing_page(make_config(), "")


def test_mint_identifier_deterministic():
    """Test the same seed always yields the same suffix."""
    config = make_config()

    first = mint_identifier(config, "0b1d-4c2e")
    second = mint_identifier(config, "0b1d-4c2e")
    other = mint_identifier(config, "7f3a-9e10")

    assert first == second == "0b1d-4c2e"
    assert other != first


def test_mint_identifier_pattern():
    """Test both placeholders in one pattern."""
    config = make_config(pattern="cat-{{id}}.{{uuid}}")

    assert mint_identifier(config, "abc", record_id=7) == "cat-7.abc"


def test_mint_identifier_requires_record_id():
    with pytest.raises(ValidationError) as exc_info:
        mint_identifier(make_config(pattern="cat-{{id}}"), "abc")

    assert exc_info.value.errors[0]["field"] == "record_id"


@pytest.mark.parametrize("seed", ["", "   ", "a b"])
def test_mint_identifier_bad_seed(seed):
    with pytest.raises(ValidationError):
        mint_identifier(make_config(), seed)


def test_build_doi_and_url():
    config = make_config(public_url="https://doi.org")

    assert build_doi(config, "abc") == "10.5072/abc"
    assert doi_url(config, "abc") == "https://doi.org/10.5072/abc"
