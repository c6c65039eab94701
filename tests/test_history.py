"""Tests for the advisory history log."""

import pytest

from amar_foshol.database.connection import create_tables, drop_tables
from amar_foshol.history import AdvisoryHistory
from amar_foshol.rules.engine import generate_advisories, generate_field_advisories


@pytest.fixture
def advisories(monsoon_forecast):
    """Four advisories: high_rain, combined_risk, high_humidity, ideal."""
    return generate_advisories(monsoon_forecast)


class TestAdvisoryHistory:
    """Tests for recording and reading advisories."""

    @pytest.mark.asyncio
    async def test_recent_is_newest_first(self, db_session, advisories):
        """Test entries come back most recent first."""
        history = AdvisoryHistory(db_session)
        for advisory in advisories:
            await history.record(advisory)

        recent = await history.recent()
        assert [a.id for a in recent] == [a.id for a in reversed(advisories)]

    @pytest.mark.asyncio
    async def test_round_trip_preserves_content(self, db_session, advisories):
        """Test stored advisories read back with the same content."""
        history = AdvisoryHistory(db_session)
        await history.record(advisories[0], location="ঢাকা, ঢাকা")

        (stored,) = await history.recent()
        assert stored.content() == advisories[0].content()
        assert stored.id == advisories[0].id

    @pytest.mark.asyncio
    async def test_record_many(self, db_session, advisories):
        """Test recording a batch keeps its order."""
        history = AdvisoryHistory(db_session)
        assert await history.record_many(advisories) == 4
        assert await history.record_many([]) == 0

        recent = await history.recent(2)
        assert [a.condition for a in recent] == ["ideal", "high_humidity"]

    @pytest.mark.asyncio
    async def test_trimmed_to_limit(self, db_session, advisories):
        """Test only the newest entries are kept."""
        history = AdvisoryHistory(db_session, limit=5)
        await history.record_many(advisories)
        await history.record_many(advisories)

        assert await history.count() == 5
        recent = await history.recent(10)
        assert len(recent) == 5
        assert recent[0].id == advisories[-1].id

    @pytest.mark.asyncio
    async def test_default_limit_from_settings(self, db_session, monkeypatch):
        """Test the limit defaults to ADVISORY_HISTORY_LIMIT."""
        monkeypatch.setenv("ADVISORY_HISTORY_LIMIT", "7")
        from amar_foshol.config import get_settings

        get_settings.cache_clear()
        assert AdvisoryHistory(db_session).limit == 7

    @pytest.mark.asyncio
    async def test_default_limit_is_100(self, db_session, monsoon_forecast):
        """Test the default cap of 100 entries."""
        history = AdvisoryHistory(db_session)
        for _ in range(26):
            await history.record_many(generate_advisories(monsoon_forecast))

        assert history.limit == 100
        assert await history.count() == 100

    @pytest.mark.asyncio
    async def test_clear(self, db_session, advisories):
        """Test clearing returns the number of deleted entries."""
        history = AdvisoryHistory(db_session)
        await history.record_many(advisories)

        assert await history.clear() == 4
        assert await history.recent() == []
        assert await history.clear() == 0

    @pytest.mark.asyncio
    async def test_field_advisories_round_trip(self, db_session, monsoon_forecast):
        """Test seasonal advisories keep their season-specific action."""
        field = generate_field_advisories(monsoon_forecast, 7)
        history = AdvisoryHistory(db_session)
        await history.record_many(field, location="ঢাকা, ঢাকা")

        recent = await history.recent()
        assert [a.content() for a in reversed(recent)] == [a.content() for a in field]
        assert recent[-1].action.startswith("Harvest rice immediately")

    @pytest.mark.asyncio
    async def test_recreated_tables_are_empty(self, db_session, advisories):
        """Test dropping and recreating the schema removes all entries."""
        history = AdvisoryHistory(db_session)
        await history.record_many(advisories)

        await drop_tables()
        await create_tables()

        assert await history.count() == 0
