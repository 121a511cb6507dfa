"""Encryption at rest for stored DOI server credentials."""

import base64
from functools import lru_cache

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from doi_registry.core.config import get_settings
from doi_registry.core.exceptions import SecretDecryptionError


def derive_key(secret_key: str, salt: str, iterations: int = 390_000) -> bytes:
    """Derive a Fernet key from the configured secret and salt."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt.encode("utf-8"),
        iterations=iterations,
    )
    return base64.urlsafe_b64encode(kdf.derive(secret_key.encode("utf-8")))


class SecretCipher:
    """Encrypt-on-write / decrypt-on-read for secret columns."""

    def __init__(self, key: bytes):
        self._fernet = Fernet(key)

    def __repr__(self) -> str:
        return "SecretCipher(<hidden>)"

    def encrypt(self, plain: str) -> str:
        """Encrypt a secret for storage."""
        return self._fernet.encrypt(plain.encode("utf-8")).decode("ascii")

    def decrypt(self, token: str) -> str:
        """Decrypt a stored secret."""
        try:
            return self._fernet.decrypt(token.encode("ascii")).decode("utf-8")
        except (InvalidToken, UnicodeError) as e:
            raise SecretDecryptionError(
                "Stored secret cannot be decrypted with the configured key"
            ) from e


@lru_cache
def get_cipher() -> SecretCipher:
    """Get cached cipher built from settings."""
    settings = get_settings()
    return SecretCipher(
        derive_key(
            settings.secret_key,
            settings.secret_salt,
            settings.secret_kdf_iterations,
        )
    )
