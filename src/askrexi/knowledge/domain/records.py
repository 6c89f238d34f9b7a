"""
Reference Record Matching
=========================

Search terms pulled from a question for the regulatory intelligence and
assessment question stores, and the predicates both store adapters apply
to candidate records.
"""

from typing import FrozenSet, Tuple

from askrexi.config import RecordStatus
from askrexi.knowledge.domain.entities import AssessmentQuestion, RegulatoryUpdate
from askrexi.knowledge.domain.matcher import contains_all, contains_any, contains_term

# "who" alone is an ordinary question word, so WHO needs its full name
AUTHORITY_MENTIONS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("FDA", ("fda", "food and drug administration")),
    ("EMA", ("ema", "european medicines agency")),
    ("ICH", ("ich", "international council for harmonisation")),
    ("WHO", ("world health organization",)),
)

REGULATORY_TOPIC_TERMS: Tuple[str, ...] = (
    "ai", "artificial intelligence", "machine learning", "clinical trial",
    "gdpr", "data protection", "samd", "gmlp", "compliance", "validation",
    "risk management",
)

ASSESSMENT_TERMS: Tuple[str, ...] = (
    "data governance", "model validation", "risk assessment",
    "quality assurance", "training", "competency", "evidence",
    "documentation", "validation", "verification", "testing", "protocol",
    "sop", "checklist", "audit", "inspection",
)


def regulatory_search_terms(normalized: str) -> Tuple[FrozenSet[str], Tuple[str, ...]]:
    """Authorities mentioned in the question and the topic terms it contains."""
    authorities = frozenset(
        authority for authority, mentions in AUTHORITY_MENTIONS
        if contains_any(normalized, mentions)
    )
    topics = tuple(term for term in REGULATORY_TOPIC_TERMS if contains_term(normalized, term))
    return authorities, topics


def assessment_search_terms(normalized: str) -> Tuple[str, ...]:
    return tuple(term for term in ASSESSMENT_TERMS if contains_term(normalized, term))


def update_matches(update: RegulatoryUpdate, authorities: FrozenSet[str], topics: Tuple[str, ...]) -> bool:
    """
    Active updates published by a mentioned authority, or whose title and
    content together carry every topic term.
    """
    if update.status != RecordStatus.ACTIVE:
        return False
    if update.source in authorities:
        return True
    return bool(topics) and contains_all(update.search_text, topics)


def assessment_matches(question: AssessmentQuestion, terms: Tuple[str, ...]) -> bool:
    """
    Approved questions whose text carries every term, or whose category is
    one of the terms.
    """
    if question.status != RecordStatus.APPROVED or not terms:
        return False
    if question.category.strip().lower() in terms:
        return True
    return contains_all(question.question_text, terms)
