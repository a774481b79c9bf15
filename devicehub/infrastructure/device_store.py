"""SQLAlchemy Device Store — DeviceStore adapter over an AsyncSession.

Invariants:
    - One store per AsyncSession; no state is kept between calls besides the session
    - save() writes id/created_at/updated_at back into the entity only after commit
    - delete() and save() of a missing id both raise NotFoundError (never a silent
      no-op, never a resurrecting insert)
    - IntegrityError -> ConflictError; any other SQLAlchemy failure or deadline -> StoreError,
      always chained to the original exception and rolled back
    - asyncio.CancelledError is never wrapped; session cleanup is left to the
      session owner (DatabaseSessionManager / get_db)

Design Decisions:
    - Entity <-> row mapping lives here, not in the ORM model: the service only
      ever sees core.device.Device (ADR: DDD boundary)
    - metadata deep-copied in both directions: entities never alias identity-map state
    - Per-operation deadline via asyncio.timeout: the request's cancellation
      reaches the driver and aborts outstanding I/O
"""

import asyncio
import copy
import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError, StatementError
from sqlalchemy.ext.asyncio import AsyncSession

from devicehub.core.device import Device
from devicehub.core.domain_types import DeviceId, HardwareId
from devicehub.core.errors import (
    ConflictError,
    DeviceHubError,
    DocumentCodecError,
    ErrorCategory,
    ErrorContext,
    NotFoundError,
    StoreError,
)
from devicehub.models.device import DeviceRecord

logger = logging.getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    """SQLite drops tzinfo on the way back; rows are always written in UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def _to_entity(record: DeviceRecord) -> Device:
    return Device(
        id=record.id,
        hardware_id=record.hardware_id,
        name=record.name,
        metadata=copy.deepcopy(record.metadata_),
        created_at=_as_utc(record.created_at),
        updated_at=_as_utc(record.updated_at),
    )


class SqlAlchemyDeviceStore:
    """DeviceStore backed by the devices table."""

    def __init__(self, db: AsyncSession, timeout_seconds: float | None = None):
        self.db = db
        self.timeout_seconds = timeout_seconds or None

    @asynccontextmanager
    async def _guard(self, context: ErrorContext) -> AsyncIterator[None]:
        """Apply the deadline and map SQLAlchemy failures onto the store taxonomy."""
        operation = context.operation or "unknown"
        try:
            async with asyncio.timeout(self.timeout_seconds):
                yield
        except DocumentCodecError as e:
            await self.db.rollback()
            logger.error(f"Store {operation} failed: {e}", extra=_extra(context))
            raise StoreError(e.message, operation, context=context) from e
        except DeviceHubError:
            await self.db.rollback()
            raise
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                f"Uniqueness violation during {operation}", extra=_extra(context),
            )
            raise ConflictError(context.hardware_id or "", context) from e
        except StatementError as e:
            await self.db.rollback()
            if isinstance(e.orig, DocumentCodecError):
                raise StoreError(
                    e.orig.message, operation, context=context,
                ) from e.orig
            logger.error(f"Store {operation} failed: {e}", extra=_extra(context))
            raise StoreError("Database statement failed", operation, context=context) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Store {operation} failed: {e}", extra=_extra(context))
            raise StoreError("Database operation failed", operation, context=context) from e
        except TimeoutError as e:
            await self.db.rollback()
            logger.error(
                f"Store {operation} exceeded {self.timeout_seconds}s deadline",
                extra=_extra(context),
            )
            raise StoreError(
                "Deadline exceeded", operation, ErrorCategory.TIMEOUT, context,
            ) from e

    async def save(self, device: Device) -> None:
        """Insert when device.id is None, otherwise replace the matching row."""
        context = ErrorContext(
            operation="save",
            device_id=str(device.id) if device.id else None,
            hardware_id=device.hardware_id,
        )
        now = datetime.now(timezone.utc)
        async with self._guard(context):
            if device.id is None:
                record = DeviceRecord(
                    id=uuid.uuid4(),
                    hardware_id=device.hardware_id,
                    name=device.name,
                    metadata_=copy.deepcopy(device.metadata),
                    created_at=now,
                    updated_at=now,
                )
                self.db.add(record)
            else:
                record = await self.db.get(DeviceRecord, device.id)
                if record is None:
                    raise NotFoundError("id", str(device.id), context)
                record.hardware_id = device.hardware_id
                record.name = device.name
                record.metadata_ = copy.deepcopy(device.metadata)
                record.updated_at = now
            await self.db.commit()

        created = device.id is None
        device.id = record.id
        device.created_at = _as_utc(record.created_at)
        device.updated_at = now
        context.device_id = str(record.id)
        logger.info(
            f"Device {'created' if created else 'updated'}: {record.id}",
            extra=_extra(context),
        )

    async def find_by_id(self, device_id: DeviceId) -> Device:
        context = ErrorContext(operation="find_by_id", device_id=str(device_id))
        async with self._guard(context):
            result = await self.db.execute(
                select(DeviceRecord).where(DeviceRecord.id == device_id),
            )
            record = result.scalar_one_or_none()
            if record is None:
                raise NotFoundError("id", str(device_id), context)
        return _to_entity(record)

    async def find_by_hardware_id(self, hardware_id: HardwareId) -> Device:
        context = ErrorContext(
            operation="find_by_hardware_id", hardware_id=hardware_id,
        )
        async with self._guard(context):
            result = await self.db.execute(
                select(DeviceRecord).where(DeviceRecord.hardware_id == hardware_id),
            )
            record = result.scalar_one_or_none()
            if record is None:
                raise NotFoundError("hardware_id", hardware_id, context)
        return _to_entity(record)

    async def find_all(self) -> list[Device]:
        context = ErrorContext(operation="find_all")
        async with self._guard(context):
            result = await self.db.execute(
                select(DeviceRecord).order_by(
                    DeviceRecord.created_at, DeviceRecord.id,
                ),
            )
            records = result.scalars().all()
        return [_to_entity(r) for r in records]

    async def delete(self, device_id: DeviceId) -> None:
        """Remove the row; a missing id raises NotFoundError."""
        context = ErrorContext(operation="delete", device_id=str(device_id))
        async with self._guard(context):
            result = await self.db.execute(
                delete(DeviceRecord).where(DeviceRecord.id == device_id),
            )
            if result.rowcount == 0:
                raise NotFoundError("id", str(device_id), context)
            await self.db.commit()
        logger.info(f"Device deleted: {device_id}", extra=_extra(context))


def _extra(context: ErrorContext) -> dict:
    return {
        "operation": context.operation,
        "device_id": context.device_id,
        "hardware_id": context.hardware_id,
    }
