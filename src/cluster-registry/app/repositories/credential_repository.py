"""Credential record data access."""

from __future__ import annotations

import time
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.database.models import CredentialRecordMixin
from shared.observability import get_logger, log_database_query

from ..errors import NotFoundError

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=CredentialRecordMixin)


class CredentialRepository:
    """Create/read access to the per-mechanism credential tables.

    Records are immutable once written, so there is no update.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, model: type[RecordT], **fields: Any) -> RecordT:
        """Insert a credential record and return it with its generated ID."""
        start = time.time()

        record = model(**fields)
        self.session.add(record)
        await self.session.commit()
        await self.session.refresh(record)

        log_database_query(
            logger,
            operation="insert",
            table=model.__tablename__,
            duration_ms=(time.time() - start) * 1000,
            rows_affected=1,
        )
        return record

    async def get(self, model: type[RecordT], record_id: UUID) -> RecordT:
        """Get a credential record by ID.

        Raises:
            NotFoundError: no record of this type has this ID
        """
        result = await self.session.execute(select(model).where(model.id == record_id))
        record = result.scalar_one_or_none()
        if record is None:
            raise NotFoundError(model.__name__, record_id)
        return record

    async def count(self, model: type[CredentialRecordMixin]) -> int:
        """Count records of one type."""
        result = await self.session.execute(select(func.count()).select_from(model))
        return result.scalar() or 0
