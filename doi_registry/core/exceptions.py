"""Registry error types."""

from typing import Any


class DoiRegistryError(Exception):
    """Base class for registry errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DoiRegistryError):
    """A field is missing or malformed."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(f"{field}: {message}", errors=[{"field": field, "message": message}])

    @classmethod
    def from_pydantic(cls, exc: Any) -> "ValidationError":
        """Convert a pydantic ValidationError."""
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())),
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        summary = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
        return cls(summary or "Invalid DOI server configuration", errors=errors)


class ConflictError(DoiRegistryError):
    """Uniqueness or referential integrity violation."""


class NotFoundError(DoiRegistryError):
    """Unknown id or name."""


class SecretDecryptionError(DoiRegistryError):
    """Stored secret cannot be decrypted with the configured key."""


class DoiProviderError(DoiRegistryError):
    """DOI provider API call failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
