"""DOI server schemas for registry input and output."""

import re
from urllib.parse import urlparse

from pydantic import BaseModel, Field, SecretStr, field_validator

from doi_registry.models.doi_server import (
    DEFAULT_PATTERN,
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PASSWORD_MAX_LENGTH,
    PREFIX_MAX_LENGTH,
    URL_MAX_LENGTH,
    USERNAME_MAX_LENGTH,
)

UUID_PLACEHOLDER = "{{uuid}}"
ID_PLACEHOLDER = "{{id}}"
PATTERN_PLACEHOLDERS = (UUID_PLACEHOLDER, ID_PLACEHOLDER)

_PLACEHOLDER_RE = re.compile(r"\{\{[^{}]*\}\}")
_PREFIX_RE = re.compile(r"^10\.\d+(\.\d+)*$")


def _check_http_url(v: str) -> str:
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("must be an absolute http(s) URL")
    return v


def _check_password(v: SecretStr | None) -> SecretStr | None:
    if v is not None and len(v.get_secret_value()) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"must be at most {PASSWORD_MAX_LENGTH} characters")
    return v


class GroupDTO(BaseModel):
    """Publication group response schema."""

    id: int
    name: str

    model_config = {"from_attributes": True}


class DoiServerCreate(BaseModel):
    """DOI server creation and full update schema."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    api_url: str = Field(..., alias="apiUrl", max_length=URL_MAX_LENGTH)
    username: str | None = Field(None, max_length=USERNAME_MAX_LENGTH)
    password: SecretStr | None = None
    landing_page_template: str = Field(
        ..., alias="landingPageTemplate", max_length=URL_MAX_LENGTH
    )
    public_url: str = Field(..., alias="publicUrl", max_length=URL_MAX_LENGTH)
    pattern: str = Field(DEFAULT_PATTERN, min_length=1, max_length=URL_MAX_LENGTH)
    prefix: str = Field(..., min_length=1, max_length=PREFIX_MAX_LENGTH)
    publication_group_ids: set[int] = Field(
        default_factory=set, alias="publicationGroups"
    )

    model_config = {"populate_by_name": True, "str_strip_whitespace": True}

    @field_validator("api_url", "public_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _check_http_url(v)

    @field_validator("landing_page_template")
    @classmethod
    def validate_landing_page_template(cls, v: str) -> str:
        """Template needs the {{uuid}} placeholder and no other one."""
        unknown = [t for t in _PLACEHOLDER_RE.findall(v) if t != UUID_PLACEHOLDER]
        if unknown:
            raise ValueError(f"unknown placeholder(s): {', '.join(unknown)}")
        if UUID_PLACEHOLDER not in v:
            raise ValueError(f"must contain the {UUID_PLACEHOLDER} placeholder")
        _check_http_url(v.replace(UUID_PLACEHOLDER, "x"))
        return v

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Pattern needs at least one known placeholder and no unknown ones."""
        tokens = _PLACEHOLDER_RE.findall(v)
        unknown = [t for t in tokens if t not in PATTERN_PLACEHOLDERS]
        if unknown:
            raise ValueError(f"unknown placeholder(s): {', '.join(unknown)}")
        if not tokens:
            raise ValueError(
                f"must contain {UUID_PLACEHOLDER} or {ID_PLACEHOLDER}"
            )
        return v

    @field_validator("prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        if not _PREFIX_RE.match(v):
            raise ValueError("must be a DOI prefix like 10.1234")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: SecretStr | None) -> SecretStr | None:
        return _check_password(v)

    @field_validator("publication_group_ids", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return set() if v is None else v


class DoiServerCredentialsUpdate(BaseModel):
    """Credential pair update schema."""

    username: str | None = Field(None, max_length=USERNAME_MAX_LENGTH)
    password: SecretStr | None = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: SecretStr | None) -> SecretStr | None:
        return _check_password(v)


class DoiServerDTO(BaseModel):
    """DOI server response schema. The password is never included."""

    id: int
    name: str
    description: str | None = None
    api_url: str = Field(..., alias="apiUrl")
    username: str | None = None
    has_password: bool = Field(False, alias="hasPassword")
    landing_page_template: str = Field(..., alias="landingPageTemplate")
    public_url: str = Field(..., alias="publicUrl")
    pattern: str
    prefix: str
    publication_groups: list[GroupDTO] = Field(
        default_factory=list, alias="publicationGroups"
    )

    model_config = {"populate_by_name": True, "from_attributes": True}


class DoiRegistrationRequest(BaseModel):
    """Inputs a DOI provider client needs to register one DOI."""

    server_id: int
    api_url: str
    username: str | None = None
    password: SecretStr | None = None
    prefix: str
    suffix: str
    doi: str
    landing_page: str
    doi_url: str
