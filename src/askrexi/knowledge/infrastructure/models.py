"""
Knowledge Infrastructure Models
===============================

SQLAlchemy ORM models for curated knowledge entries, regulatory intelligence
and the assessment question bank.
"""

from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from askrexi.config import ImpactLevel, RecordStatus
from askrexi.infrastructure.database import Base


class KnowledgeEntryModel(Base):
    """
    Database model for KnowledgeEntry.

    Maps to the 'knowledge_entries' table. search_text holds the lowercased
    question, variations and keywords for the token pre-filter.
    """
    __tablename__ = "knowledge_entries"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    question: Mapped[str] = mapped_column(Text, nullable=False)
    variations: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    subcategory: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    action_items: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    impact_level: Mapped[str] = mapped_column(String(20), nullable=False, default=ImpactLevel.MEDIUM)
    sources: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    keywords: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    search_text: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )


class RegulatoryUpdateModel(Base):
    """
    Database model for RegulatoryUpdate.

    Maps to the 'regulatory_intelligence' table. search_text holds the
    lowercased title and content.
    """
    __tablename__ = "regulatory_intelligence"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    source: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    impact_level: Mapped[str] = mapped_column(String(20), nullable=False, default=ImpactLevel.MEDIUM)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=RecordStatus.ACTIVE, index=True)
    search_text: Mapped[str] = mapped_column(Text, nullable=False, default="")

    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True
    )


class AssessmentQuestionModel(Base):
    """
    Database model for AssessmentQuestion.

    Maps to the 'assessment_questions' table.
    """
    __tablename__ = "assessment_questions"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    section_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    section_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    guidance: Mapped[str] = mapped_column(Text, nullable=False, default="")
    action_steps: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    evidence_required: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    responsible_roles: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    is_production_blocker: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=RecordStatus.APPROVED, index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
