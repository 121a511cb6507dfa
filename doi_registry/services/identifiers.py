"""DOI identifier rules.

Pure functions: they read a DOI server configuration and never touch the
database or the network.
"""

from typing import Protocol
from urllib.parse import quote

from doi_registry.core.exceptions import ValidationError
from doi_registry.schemas.doi_server import ID_PLACEHOLDER, UUID_PLACEHOLDER

# Characters kept as-is when a suffix is placed in a URL path
_URL_SAFE = "-._~/:;()"


class IdentifierConfig(Protocol):
    """Fields of a DOI server the identifier rules read."""

    landing_page_template: str
    public_url: str
    pattern: str
    prefix: str


def resolve_landing_page(config: IdentifierConfig, identifier_suffix: str) -> str:
    """Substitute the suffix into the landing page template."""
    if not identifier_suffix:
        raise ValidationError.for_field("identifier_suffix", "must not be empty")
    return config.landing_page_template.replace(
        UUID_PLACEHOLDER, quote(identifier_suffix, safe=_URL_SAFE)
    )


def mint_identifier(
    config: IdentifierConfig,
    seed: str,
    record_id: int | None = None,
) -> str:
    """Build the DOI suffix for a record from the server pattern.

    ``{{uuid}}`` is replaced by ``seed`` (the metadata record UUID) and
    ``{{id}}`` by ``record_id`` (the catalog's internal record id).
    """
    seed = (seed or "").strip()
    if not seed:
        raise ValidationError.for_field("seed", "must not be empty")
    if any(c.isspace() for c in seed):
        raise ValidationError.for_field("seed", "must not contain whitespace")

    suffix = config.pattern
    if ID_PLACEHOLDER in suffix:
        if record_id is None:
            raise ValidationError.for_field(
                "record_id", f"required by pattern {config.pattern!r}"
            )
        suffix = suffix.replace(ID_PLACEHOLDER, str(record_id))
    return suffix.replace(UUID_PLACEHOLDER, seed)


def build_doi(config: IdentifierConfig, suffix: str) -> str:
    """Full DOI, ``<prefix>/<suffix>``."""
    return f"{config.prefix}/{suffix}"


def doi_url(config: IdentifierConfig, suffix: str) -> str:
    """Public resolver URL for the DOI."""
    base = config.public_url if config.public_url.endswith("/") else config.public_url + "/"
    return base + quote(build_doi(config, suffix), safe=_URL_SAFE)
