"""
AskRexi Test Configuration

Shared fixtures: composer, curated entries and reference records, routers
with and without stores, recording usage sinks and a SQLite-backed session
factory.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import List

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from askrexi.agents.application import IUsageAnalytics, build_router
from askrexi.agents.domain import (
    Personalizer, ResponseComposer, SessionContext, UsageRecord, UserPreferences
)
from askrexi.agents.infrastructure.models import UsageLogModel  # noqa: F401
from askrexi.config import ExpertiseLevel, ImpactLevel
from askrexi.core import UsageAnalyticsException
from askrexi.infrastructure.database import Base
from askrexi.knowledge.domain import AssessmentQuestion, KnowledgeEntry, RegulatoryUpdate
from askrexi.knowledge.infrastructure import InMemoryKnowledgeStore
from askrexi.knowledge.infrastructure.models import KnowledgeEntryModel  # noqa: F401


class RecordingUsageAnalytics(IUsageAnalytics):
    """Keeps every usage record in memory."""

    def __init__(self):
        self.records: List[UsageRecord] = []

    async def record(self, record: UsageRecord) -> None:
        self.records.append(record)


class FailingUsageAnalytics(IUsageAnalytics):
    """Sink that is always down."""

    def __init__(self):
        self.calls = 0

    async def record(self, record: UsageRecord) -> None:
        self.calls += 1
        raise UsageAnalyticsException("sink unavailable")


# ========== Domain Fixtures ==========

@pytest.fixture
def composer() -> ResponseComposer:
    return ResponseComposer()


@pytest.fixture
def personalizer() -> Personalizer:
    return Personalizer()


@pytest.fixture
def beginner_context() -> SessionContext:
    return SessionContext(preferences=UserPreferences(expertise_level=ExpertiseLevel.BEGINNER))


@pytest.fixture
def expert_context() -> SessionContext:
    return SessionContext(preferences=UserPreferences(expertise_level=ExpertiseLevel.EXPERT))


@pytest.fixture
def action_plan_entry() -> KnowledgeEntry:
    return KnowledgeEntry(
        id="kb-1",
        question="What is the FDA AI/ML Action Plan?",
        variations=("Explain the FDA action plan for AI/ML",),
        category="regulatory",
        subcategory="FDA Guidance",
        answer="Curated: the FDA AI/ML Action Plan sets out five actions for AI/ML-based SaMD.",
        action_items=("Read the action plan", "Map your models to it"),
        impact_level=ImpactLevel.HIGH,
        sources=("FDA AI/ML Action Plan",),
        keywords=("fda", "action plan"),
    )


@pytest.fixture
def knowledge_entries(action_plan_entry) -> List[KnowledgeEntry]:
    return [
        action_plan_entry,
        KnowledgeEntry(
            id="kb-2",
            question="What evidence does the data governance section need?",
            category="assessment",
            subcategory="Data Governance",
            answer="Curated: provide the data inventory, quality reports and access logs.",
            action_items=("Collect access logs",),
            impact_level=ImpactLevel.MEDIUM,
            sources=("Assessment Question Bank",),
            keywords=("data governance", "evidence"),
        ),
    ]


EXACT_QUESTION = "What validation evidence do auditors expect?"


@pytest.fixture
def crowded_entries() -> List[KnowledgeEntry]:
    """Thirty assessment entries sharing "validation", then the exact entry."""
    fillers = [
        KnowledgeEntry(
            question=f"Filler question {i}",
            answer=f"filler {i}",
            category="assessment",
            keywords=("validation",),
        )
        for i in range(30)
    ]
    exact = KnowledgeEntry(
        question=EXACT_QUESTION,
        answer="EXACT CURATED ANSWER",
        category="assessment",
        subcategory="Audit Evidence",
    )
    return fillers + [exact]


@pytest.fixture
def regulatory_updates() -> List[RegulatoryUpdate]:
    return [
        RegulatoryUpdate(
            id="ri-1",
            title="FDA draft guidance on AI-enabled device software",
            content="The FDA proposes lifecycle controls for machine learning models in devices.",
            source="fda",
            impact_level="HIGH",
            last_updated=datetime(2025, 1, 7, tzinfo=timezone.utc),
        ),
        RegulatoryUpdate(
            id="ri-2",
            title="EMA reflection paper adopted",
            content="Final reflection paper on AI across the medicinal product lifecycle and GDPR.",
            source="EMA",
            impact_level=ImpactLevel.CRITICAL,
            last_updated=datetime(2024, 9, 9, tzinfo=timezone.utc),
        ),
        RegulatoryUpdate(
            id="ri-3",
            title="Withdrawn FDA notice",
            content="Superseded notice on clinical decision support.",
            source="FDA",
            status="archived",
            last_updated=datetime(2025, 6, 1, tzinfo=timezone.utc),
        ),
        RegulatoryUpdate(
            id="ri-4",
            title="WHO guidance on ethics of AI for health",
            content="Six principles for the governance of artificial intelligence in health.",
            source="WHO",
            impact_level="unknown",
            last_updated=datetime(2024, 3, 1, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def assessment_questions() -> List[AssessmentQuestion]:
    return [
        AssessmentQuestion(
            id="aq-1",
            question_text="Describe the model validation protocol used before deployment",
            category="Model Validation",
            section_id="mv",
            section_title="Model Validation",
            guidance="Validation must use data independent of training",
            action_steps=("Define acceptance criteria", "Run the hold-out evaluation"),
            evidence_required=("Validation report", "Test dataset lineage"),
            responsible_roles=("Data Scientist", "QA Lead"),
            is_production_blocker=True,
        ),
        AssessmentQuestion(
            id="aq-2",
            question_text="Is there an SOP for data governance reviews?",
            category="Data Governance",
            section_id="dg",
        ),
        AssessmentQuestion(
            id="aq-3",
            question_text="Draft question on model validation sign-off",
            category="Model Validation",
            status="draft",
        ),
    ]


# ========== Router Fixtures ==========

@pytest.fixture
def usage() -> RecordingUsageAnalytics:
    return RecordingUsageAnalytics()


@pytest.fixture
def failing_usage() -> FailingUsageAnalytics:
    return FailingUsageAnalytics()


@pytest.fixture
def router(usage):
    """Router without a knowledge store."""
    return build_router(usage=usage)


@pytest.fixture
def curated_router(knowledge_entries, usage):
    """Router whose handlers consult an in-memory knowledge store."""
    return build_router(store=InMemoryKnowledgeStore(knowledge_entries), usage=usage)


# ========== Database Fixtures ==========

@pytest_asyncio.fixture
async def session_factory(tmp_path: Path):
    """Session factory over a fresh SQLite file with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'askrexi.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def empty_session_factory(tmp_path: Path):
    """Session factory over a SQLite file with no tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")

    yield async_sessionmaker(engine, expire_on_commit=False)

    await engine.dispose()
