"""Column types shared by the models."""
from __future__ import annotations

import logging
import uuid

from cryptography.fernet import InvalidToken
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.types import String, TypeDecorator

from worktracker.security.encryption import encryption_service

logger = logging.getLogger(__name__)


class EncryptedString(TypeDecorator):
    """String stored as a Fernet token and decrypted on load.

    Values that are not valid tokens (rows written before encryption was
    switched on, or under another key) are returned as stored.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return encryption_service.encrypt_text(value)

    def process_result_value(self, value, dialect):
        try:
            return encryption_service.decrypt_text(value)
        except InvalidToken:
            logger.warning("Encrypted column holds a value that is not a valid token")
            return value


class GUID(TypeDecorator):
    """UUID column: native on PostgreSQL, 36-char text elsewhere (SQLite in tests)."""

    impl = String(36)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(PGUUID(as_uuid=True))
        return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
        return value if dialect.name == "postgresql" else str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))
