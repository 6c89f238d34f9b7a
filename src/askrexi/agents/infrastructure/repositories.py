"""
Agents Infrastructure Repositories
==================================

SQLAlchemy-backed usage analytics sink.
"""

from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from askrexi.agents.application import IUsageAnalytics
from askrexi.agents.domain import UsageRecord
from askrexi.agents.infrastructure.models import UsageLogModel
from askrexi.core import UsageAnalyticsException


class SQLAlchemyUsageAnalytics(IUsageAnalytics):
    """
    Inserts one usage_logs row per routed question.

    Each record gets its own short-lived session; it runs after the answer
    has been returned, so it never shares a session with a request.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def record(self, record: UsageRecord) -> None:
        model = UsageLogModel(
            id=uuid4(),
            domain=record.domain,
            elapsed_ms=record.elapsed_ms,
            question_prefix=record.question_prefix,
            recorded_at=record.recorded_at,
        )

        try:
            async with self._session_factory() as session:
                session.add(model)
                await session.commit()
        except SQLAlchemyError as e:
            raise UsageAnalyticsException(f"Failed to store usage record: {e}") from e
