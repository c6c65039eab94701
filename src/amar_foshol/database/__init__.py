"""Database layer for the advisory history."""

from amar_foshol.database.connection import (
    close_db,
    create_tables,
    drop_tables,
    get_db,
    get_db_session,
    init_db,
)
from amar_foshol.database.models import AdvisoryRecord, Base

__all__ = [
    "AdvisoryRecord",
    "Base",
    "close_db",
    "create_tables",
    "drop_tables",
    "get_db",
    "get_db_session",
    "init_db",
]
