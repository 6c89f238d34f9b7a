"""
Knowledge Application Services
==============================

Store interfaces and the time-bounded lookups used by the domain handlers:
curated entries for every handler, regulatory intelligence for the
regulatory handler and assessment questions for the assessment handler.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Awaitable, FrozenSet, List, Sequence, Tuple, TypeVar

from askrexi.knowledge.domain import (
    AssessmentQuestion,
    KnowledgeEntry,
    RegulatoryUpdate,
    assessment_search_terms,
    extract_tokens,
    normalize_question,
    regulatory_search_terms,
)
from askrexi.shared.infrastructure.logging import get_logger, log_latency

logger = get_logger(__name__)

T = TypeVar("T")


# ========== Repository Interfaces ==========

class IKnowledgeStore(ABC):
    """Interface for the external curated knowledge store."""

    @abstractmethod
    async def search(
        self,
        category: str,
        tokens: FrozenSet[str],
        limit: int,
        question: str = ""
    ) -> List[KnowledgeEntry]:
        """
        Candidate entries of a category sharing any token with the question.

        Entries whose question or a variation equals, contains or is
        contained in the normalized question come before the limit is
        applied.

        Raises:
            KnowledgeStoreException: store unreachable or failing
        """


class IRegulatoryIntelligenceStore(ABC):
    """Interface for the external regulatory intelligence store."""

    @abstractmethod
    async def search(
        self,
        authorities: FrozenSet[str],
        topics: Tuple[str, ...],
        limit: int
    ) -> List[RegulatoryUpdate]:
        """
        Active updates from any of the authorities, or carrying every topic
        term, newest first.

        Raises:
            KnowledgeStoreException: store unreachable or failing
        """


class IAssessmentQuestionStore(ABC):
    """Interface for the external assessment question bank."""

    @abstractmethod
    async def search(self, terms: Tuple[str, ...], limit: int) -> List[AssessmentQuestion]:
        """
        Approved questions carrying every term, or filed under a category
        named by one of them.

        Raises:
            KnowledgeStoreException: store unreachable or failing
        """


# ========== Application Services ==========

async def bounded_lookup(
    search: Awaitable[Sequence[T]],
    timeout_seconds: float,
    operation: str,
    **context
) -> List[T]:
    """
    Await a store search within a time bound.

    Every failure (timeout, connection error, bad rows) degrades to an empty
    list so the handler pipeline moves on.
    """
    try:
        with log_latency(logger, operation, **context):
            records = await asyncio.wait_for(search, timeout=timeout_seconds)
    except asyncio.TimeoutError:
        logger.warning(
            "Store lookup timed out",
            extra={"operation": operation, "timeout_seconds": timeout_seconds, **context}
        )
        return []
    except Exception as e:
        logger.warning(
            "Store lookup unavailable",
            extra={"operation": operation, "error": str(e), "error_type": type(e).__name__, **context}
        )
        return []

    return list(records)


class KnowledgeLookupService:
    """Time-bounded curated candidate lookup."""

    def __init__(self, store: IKnowledgeStore, timeout_seconds: float = 2.0, limit: int = 25):
        self._store = store
        self._timeout = timeout_seconds
        self._limit = limit

    async def candidates(self, category: str, question: str) -> List[KnowledgeEntry]:
        tokens = extract_tokens(question)
        if not tokens:
            return []

        return await bounded_lookup(
            self._store.search(category, tokens, self._limit, question=normalize_question(question)),
            self._timeout,
            "knowledge_lookup",
            category=category,
        )


class RegulatoryIntelligenceLookupService:
    """Time-bounded regulatory intelligence lookup."""

    def __init__(self, store: IRegulatoryIntelligenceStore, timeout_seconds: float = 2.0, limit: int = 5):
        self._store = store
        self._timeout = timeout_seconds
        self._limit = limit

    async def updates(self, question: str) -> List[RegulatoryUpdate]:
        authorities, topics = regulatory_search_terms(normalize_question(question))
        if not authorities and not topics:
            return []

        return await bounded_lookup(
            self._store.search(authorities, topics, self._limit),
            self._timeout,
            "regulatory_intelligence_lookup",
            authorities=sorted(authorities),
        )


class AssessmentQuestionLookupService:
    """Time-bounded assessment question lookup."""

    def __init__(self, store: IAssessmentQuestionStore, timeout_seconds: float = 2.0, limit: int = 3):
        self._store = store
        self._timeout = timeout_seconds
        self._limit = limit

    async def questions(self, question: str) -> List[AssessmentQuestion]:
        terms = assessment_search_terms(normalize_question(question))
        if not terms:
            return []

        return await bounded_lookup(
            self._store.search(terms, self._limit),
            self._timeout,
            "assessment_question_lookup",
            terms=list(terms),
        )
