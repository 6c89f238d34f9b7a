"""
Agents Infrastructure Models
============================

SQLAlchemy ORM model for usage analytics.
"""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from askrexi.infrastructure.database import Base


class UsageLogModel(Base):
    """
    Database model for UsageRecord.

    Maps to the 'usage_logs' table.
    """
    __tablename__ = "usage_logs"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    domain: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    elapsed_ms: Mapped[int] = mapped_column(Integer, nullable=False)
    question_prefix: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
