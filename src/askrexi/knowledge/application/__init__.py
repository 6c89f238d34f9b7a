"""
Knowledge Application Layer
===========================

Contains:
- Store interfaces
- Time-bounded lookup services
"""

from askrexi.knowledge.application.services import (
    AssessmentQuestionLookupService,
    IAssessmentQuestionStore,
    IKnowledgeStore,
    IRegulatoryIntelligenceStore,
    KnowledgeLookupService,
    RegulatoryIntelligenceLookupService,
    bounded_lookup,
)

__all__ = [
    "AssessmentQuestionLookupService",
    "IAssessmentQuestionStore",
    "IKnowledgeStore",
    "IRegulatoryIntelligenceStore",
    "KnowledgeLookupService",
    "RegulatoryIntelligenceLookupService",
    "bounded_lookup",
]
