import secrets
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_id(prefix: str) -> str:
    """Short public identifier such as ``ord-1a2b3c4d``."""
    return f"{prefix}-{secrets.token_hex(4)}"


class CreatedAtMixin:
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
