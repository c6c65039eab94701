"""Bounded log of generated advisories, most recent first."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from amar_foshol.config import get_settings
from amar_foshol.database.models import AdvisoryRecord
from amar_foshol.models.advisory import Advisory

logger = logging.getLogger(__name__)


class AdvisoryHistory:
    """Advisory history stored in the `advisory_history` table.

    After every write only the newest `limit` entries are kept.

    Example:
        ```python
        async with get_db() as session:
            history = AdvisoryHistory(session)
            await history.record_many(advisories, location="ঢাকা, ঢাকা")
            latest = await history.recent(5)
        ```
    """

    def __init__(self, session: AsyncSession, limit: int | None = None):
        """Initialize the history.

        Args:
            session: Database session
            limit: Entries to keep (default: ADVISORY_HISTORY_LIMIT)
        """
        self.session = session
        self.limit = limit if limit is not None else get_settings().advisory_history_limit

    async def record(self, advisory: Advisory, location: str | None = None) -> None:
        """Append one advisory."""
        await self.record_many([advisory], location=location)

    async def record_many(
        self, advisories: Iterable[Advisory], location: str | None = None
    ) -> int:
        """Append advisories in the given order.

        Returns:
            Number of advisories recorded
        """
        records = [AdvisoryRecord.from_advisory(a, location) for a in advisories]
        if not records:
            return 0

        self.session.add_all(records)
        await self.session.flush()
        await self._trim()
        await self.session.commit()

        logger.debug(f"Recorded {len(records)} advisories")
        return len(records)

    async def _trim(self) -> None:
        # id of the oldest entry that is still within the limit
        cutoff = await self.session.scalar(
            select(AdvisoryRecord.id)
            .order_by(AdvisoryRecord.id.desc())
            .offset(self.limit - 1)
            .limit(1)
        )
        if cutoff is not None:
            await self.session.execute(
                delete(AdvisoryRecord).where(AdvisoryRecord.id < cutoff)
            )

    async def recent(self, limit: int = 10) -> list[Advisory]:
        """Get the most recently recorded advisories, newest first."""
        result = await self.session.scalars(
            select(AdvisoryRecord).order_by(AdvisoryRecord.id.desc()).limit(limit)
        )
        return [record.to_advisory() for record in result]

    async def count(self) -> int:
        return await self.session.scalar(
            select(func.count()).select_from(AdvisoryRecord)
        ) or 0

    async def clear(self) -> int:
        """Delete all entries.

        Returns:
            Number of entries deleted
        """
        total = await self.count()
        await self.session.execute(delete(AdvisoryRecord))
        await self.session.commit()
        logger.info(f"Cleared {total} advisories from history")
        return total
