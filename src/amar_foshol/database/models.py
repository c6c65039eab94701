"""Database models.

## Schema Overview

```
advisory_history
    one row per generated advisory, newest has the highest id
```
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from amar_foshol.models.advisory import Advisory, AdvisoryIcon, AdvisoryType


class Base(DeclarativeBase):
    """Base class for all database models."""


class AdvisoryRecord(Base):
    """A generated advisory kept in the history log."""

    __tablename__ = "advisory_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    advisory_id: Mapped[str] = mapped_column(String(64), nullable=False)
    condition: Mapped[str] = mapped_column(String(32), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    risk_level: Mapped[int] = mapped_column(Integer, nullable=False)
    affected_days: Mapped[int] = mapped_column(Integer, nullable=False)
    icon: Mapped[str] = mapped_column(String(16), nullable=False)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    action: Mapped[str] = mapped_column(Text, nullable=False)
    title_bn: Mapped[str] = mapped_column(String(255), nullable=False)
    message_bn: Mapped[str] = mapped_column(Text, nullable=False)
    action_bn: Mapped[str] = mapped_column(Text, nullable=False)

    # Where the forecast was for, when known
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    generated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (Index("ix_advisory_history_condition", "condition"),)

    @classmethod
    def from_advisory(
        cls, advisory: Advisory, location: str | None = None
    ) -> AdvisoryRecord:
        return cls(
            advisory_id=advisory.id,
            condition=advisory.condition,
            type=advisory.type.value,
            risk_level=advisory.risk_level,
            affected_days=advisory.affected_days,
            icon=advisory.icon.value,
            title=advisory.title,
            message=advisory.message,
            action=advisory.action,
            title_bn=advisory.title_bn,
            message_bn=advisory.message_bn,
            action_bn=advisory.action_bn,
            location=location,
            generated_at=advisory.timestamp,
        )

    def to_advisory(self) -> Advisory:
        return Advisory(
            id=self.advisory_id,
            type=AdvisoryType(self.type),
            title=self.title,
            message=self.message,
            action=self.action,
            title_bn=self.title_bn,
            message_bn=self.message_bn,
            action_bn=self.action_bn,
            risk_level=self.risk_level,
            affected_days=self.affected_days,
            condition=self.condition,
            icon=AdvisoryIcon(self.icon),
            timestamp=self.generated_at,
        )

    def __repr__(self) -> str:
        return f"<AdvisoryRecord {self.id} {self.condition}>"
