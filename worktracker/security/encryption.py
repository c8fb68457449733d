"""Symmetric encryption for personal data stored in the database."""
from __future__ import annotations

import base64
import hashlib
from typing import Optional

from cryptography.fernet import Fernet

from worktracker.config import settings


def derive_key(secret_key: str) -> bytes:
    """Fernet key derived from an arbitrary application secret."""
    return base64.urlsafe_b64encode(hashlib.sha256(secret_key.encode("utf-8")).digest())


class EncryptionService:
    """Encrypts and decrypts text with a single Fernet key.

    ``key`` must be 32 url-safe base64-encoded bytes, as produced by
    ``Fernet.generate_key()`` or ``derive_key()``.
    """

    def __init__(self, key: str):
        try:
            self._fernet = Fernet(key.encode("utf-8"))
        except ValueError as exc:
            raise ValueError("Invalid encryption key configured") from exc

    @classmethod
    def from_settings(cls) -> "EncryptionService":
        """Use ENCRYPTION_SECRET, or a key derived from SECRET_KEY when unset."""
        key = settings.ENCRYPTION_SECRET or derive_key(settings.SECRET_KEY).decode("ascii")
        return cls(key)

    def encrypt_text(self, text: Optional[str]) -> Optional[str]:
        if text is None:
            return None
        return self._fernet.encrypt(text.encode("utf-8")).decode("ascii")

    def decrypt_text(self, token: Optional[str]) -> Optional[str]:
        """Raises ``cryptography.fernet.InvalidToken`` for foreign values."""
        if not token:
            return token
        return self._fernet.decrypt(token.encode("utf-8")).decode("utf-8")


encryption_service = EncryptionService.from_settings()
