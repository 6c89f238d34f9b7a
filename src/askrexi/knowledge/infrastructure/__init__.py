"""
Knowledge Infrastructure Layer
==============================

Contains:
- ORM models for curated entries and reference records
- In-memory and SQLAlchemy stores
"""

from askrexi.knowledge.infrastructure.models import (
    AssessmentQuestionModel,
    KnowledgeEntryModel,
    RegulatoryUpdateModel,
)
from askrexi.knowledge.infrastructure.repositories import (
    InMemoryAssessmentQuestionStore,
    InMemoryKnowledgeStore,
    InMemoryRegulatoryIntelligenceStore,
    SQLAlchemyAssessmentQuestionStore,
    SQLAlchemyKnowledgeStore,
    SQLAlchemyRegulatoryIntelligenceStore,
)

__all__ = [
    "AssessmentQuestionModel",
    "KnowledgeEntryModel",
    "RegulatoryUpdateModel",
    "InMemoryAssessmentQuestionStore",
    "InMemoryKnowledgeStore",
    "InMemoryRegulatoryIntelligenceStore",
    "SQLAlchemyAssessmentQuestionStore",
    "SQLAlchemyKnowledgeStore",
    "SQLAlchemyRegulatoryIntelligenceStore",
]
