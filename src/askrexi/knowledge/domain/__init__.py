"""
Knowledge Domain Layer
======================

Pure Python entities and matching logic, no I/O.
"""

from askrexi.knowledge.domain.entities import AssessmentQuestion, KnowledgeEntry, RegulatoryUpdate
from askrexi.knowledge.domain.matcher import (
    KnowledgeMatcher,
    STOPWORDS,
    contains_all,
    contains_any,
    contains_term,
    count_term,
    extract_tokens,
    is_direct_hit,
    normalize_question,
    shares_token,
    term_pattern,
)
from askrexi.knowledge.domain.records import (
    ASSESSMENT_TERMS,
    AUTHORITY_MENTIONS,
    REGULATORY_TOPIC_TERMS,
    assessment_matches,
    assessment_search_terms,
    regulatory_search_terms,
    update_matches,
)

__all__ = [
    "AssessmentQuestion",
    "KnowledgeEntry",
    "RegulatoryUpdate",
    "KnowledgeMatcher",
    "STOPWORDS",
    "contains_all",
    "contains_any",
    "contains_term",
    "count_term",
    "extract_tokens",
    "is_direct_hit",
    "normalize_question",
    "shares_token",
    "term_pattern",
    "ASSESSMENT_TERMS",
    "AUTHORITY_MENTIONS",
    "REGULATORY_TOPIC_TERMS",
    "assessment_matches",
    "assessment_search_terms",
    "regulatory_search_terms",
    "update_matches",
]
