"""Device ORM — persists the Device aggregate as one row of the devices table.

Invariants:
    - id is UUID primary key, assigned by the store (never by the entity constructor)
    - hardware_id is non-nullable and carries the only uniqueness constraint
    - metadata column is never NULL: server default '{}' and the codec encodes {} as "{}"
    - created_at/updated_at are timezone-aware UTC

Design Decisions:
    - ORM row separate from core.device.Device: the store maps between them, so the
      service never holds a session-bound object (ADR: DDD boundary)
    - Python attribute metadata_: DeclarativeBase reserves `metadata`; the SQL column
      keeps the name "metadata"
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import String, DateTime, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from devicehub.db.base import Base
from devicehub.db.types import JSONDocument


class DeviceRecord(Base):
    """Device row — one per registered device."""
    __tablename__ = "devices"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    hardware_id: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    name: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", server_default="",
    )
    metadata_: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSONDocument, nullable=False,
        default=dict, server_default=text("'{}'"),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
