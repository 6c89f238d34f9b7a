"""
Knowledge Infrastructure Repositories
=====================================

Concrete knowledge, regulatory intelligence and assessment question stores.
"""

from dataclasses import replace
from typing import Callable, FrozenSet, Iterable, List, Optional, Tuple, TypeVar
from uuid import uuid4

from sqlalchemy import Select, and_, case, func, literal, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from askrexi.config import RecordStatus
from askrexi.core import KnowledgeStoreException
from askrexi.knowledge.application import (
    IAssessmentQuestionStore,
    IKnowledgeStore,
    IRegulatoryIntelligenceStore,
)
from askrexi.knowledge.domain import (
    AssessmentQuestion,
    KnowledgeEntry,
    RegulatoryUpdate,
    assessment_matches,
    is_direct_hit,
    shares_token,
    update_matches,
)
from askrexi.knowledge.infrastructure.models import (
    AssessmentQuestionModel,
    KnowledgeEntryModel,
    RegulatoryUpdateModel,
)

T = TypeVar("T")

# Rows fetched per round trip while the SQL pre-filter is refined in Python
_PAGE_SIZE = 50


# ========== Curated Knowledge ==========

class InMemoryKnowledgeStore(IKnowledgeStore):
    """
    Knowledge store over a fixed tuple of entries.

    Built once and never mutated, so it is safe to share between requests.
    """

    def __init__(self, entries: Iterable[KnowledgeEntry] = ()):
        self._entries: Tuple[KnowledgeEntry, ...] = tuple(entries)

    def __len__(self) -> int:
        return len(self._entries)

    async def search(
        self,
        category: str,
        tokens: FrozenSet[str],
        limit: int,
        question: str = ""
    ) -> List[KnowledgeEntry]:
        matches = [
            entry for entry in self._entries
            if entry.category == category and shares_token(entry, tokens)
        ]
        if question:
            # Stable sort keeps insertion order within each group
            matches.sort(key=lambda entry: not is_direct_hit(entry, question))
        return matches[:limit]


class SQLAlchemyKnowledgeStore(IKnowledgeStore):
    """
    SQLAlchemy implementation of the knowledge store.

    Opens a short-lived session per search so concurrent requests never share
    one.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def search(
        self,
        category: str,
        tokens: FrozenSet[str],
        limit: int,
        question: str = ""
    ) -> List[KnowledgeEntry]:
        if not tokens:
            return []

        order = [KnowledgeEntryModel.created_at, KnowledgeEntryModel.id]
        if question:
            direct_hit = or_(
                KnowledgeEntryModel.search_text.contains(question, autoescape=True),
                literal(question).contains(
                    func.lower(func.rtrim(KnowledgeEntryModel.question, "?!. "))
                ),
            )
            order.insert(0, case((direct_hit, 0), else_=1))

        stmt = (
            select(KnowledgeEntryModel)
            .where(KnowledgeEntryModel.category == category)
            .where(or_(*[
                KnowledgeEntryModel.search_text.ilike(f"%{token}%")
                for token in sorted(tokens)
            ]))
            .order_by(*order)
            .limit(limit)
        )

        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                models = result.scalars().all()
        except SQLAlchemyError as e:
            raise KnowledgeStoreException(f"Knowledge search failed: {e}") from e

        try:
            return [self._to_entity(model) for model in models]
        except (TypeError, ValueError) as e:
            raise KnowledgeStoreException(f"Malformed knowledge entry: {e}") from e

    async def add(self, entry: KnowledgeEntry, session: Optional[AsyncSession] = None) -> KnowledgeEntry:
        """Persist an entry. Used by seeding and tests, never by the pipeline."""
        entry_id = uuid4()
        model = KnowledgeEntryModel(
            id=entry_id,
            question=entry.question,
            variations=list(entry.variations),
            category=entry.category,
            subcategory=entry.subcategory or None,
            answer=entry.answer,
            action_items=list(entry.action_items),
            impact_level=entry.impact_level,
            sources=list(entry.sources),
            keywords=list(entry.keywords),
            search_text=entry.search_text,
        )
        await _persist(self._session_factory, model, session, "knowledge entry")
        return replace(entry, id=str(entry_id))

    @staticmethod
    def _to_entity(model: KnowledgeEntryModel) -> KnowledgeEntry:
        return KnowledgeEntry(
            id=str(model.id),
            question=model.question,
            answer=model.answer,
            category=model.category,
            subcategory=model.subcategory or "",
            variations=tuple(model.variations or ()),
            action_items=tuple(model.action_items or ()),
            impact_level=model.impact_level,
            sources=tuple(model.sources or ()),
            keywords=tuple(model.keywords or ()),
        )


# ========== Regulatory Intelligence ==========

class InMemoryRegulatoryIntelligenceStore(IRegulatoryIntelligenceStore):
    """Regulatory intelligence over a fixed tuple of updates."""

    def __init__(self, updates: Iterable[RegulatoryUpdate] = ()):
        self._updates: Tuple[RegulatoryUpdate, ...] = tuple(updates)

    def __len__(self) -> int:
        return len(self._updates)

    async def search(
        self,
        authorities: FrozenSet[str],
        topics: Tuple[str, ...],
        limit: int
    ) -> List[RegulatoryUpdate]:
        matches = [
            update for update in self._updates
            if update_matches(update, authorities, topics)
        ]
        matches.sort(key=lambda update: update.last_updated, reverse=True)
        return matches[:limit]


class SQLAlchemyRegulatoryIntelligenceStore(IRegulatoryIntelligenceStore):
    """
    SQLAlchemy implementation of the regulatory intelligence store.

    SQL narrows rows by substring; the whole-phrase rule is applied to each
    page of results until enough updates match.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def search(
        self,
        authorities: FrozenSet[str],
        topics: Tuple[str, ...],
        limit: int
    ) -> List[RegulatoryUpdate]:
        conditions = []
        if authorities:
            conditions.append(RegulatoryUpdateModel.source.in_(sorted(authorities)))
        if topics:
            conditions.append(and_(*[
                RegulatoryUpdateModel.search_text.contains(topic, autoescape=True)
                for topic in topics
            ]))
        if not conditions:
            return []

        stmt = (
            select(RegulatoryUpdateModel)
            .where(RegulatoryUpdateModel.status == RecordStatus.ACTIVE)
            .where(or_(*conditions))
            .order_by(RegulatoryUpdateModel.last_updated.desc(), RegulatoryUpdateModel.id)
        )
        return await _first_matching(
            self._session_factory,
            stmt,
            self._to_entity,
            lambda update: update_matches(update, authorities, topics),
            limit,
            "regulatory intelligence",
        )

    async def add(self, update: RegulatoryUpdate, session: Optional[AsyncSession] = None) -> RegulatoryUpdate:
        """Persist an update. Used by seeding and tests, never by the pipeline."""
        update_id = uuid4()
        model = RegulatoryUpdateModel(
            id=update_id,
            title=update.title,
            content=update.content,
            source=update.source,
            impact_level=update.impact_level,
            status=update.status,
            search_text=update.search_text,
            last_updated=update.last_updated,
        )
        await _persist(self._session_factory, model, session, "regulatory update")
        return replace(update, id=str(update_id))

    @staticmethod
    def _to_entity(model: RegulatoryUpdateModel) -> RegulatoryUpdate:
        return RegulatoryUpdate(
            id=str(model.id),
            title=model.title,
            content=model.content,
            source=model.source,
            impact_level=model.impact_level,
            status=model.status,
            last_updated=model.last_updated,
        )


# ========== Assessment Questions ==========

class InMemoryAssessmentQuestionStore(IAssessmentQuestionStore):
    """Assessment question bank over a fixed tuple of questions."""

    def __init__(self, questions: Iterable[AssessmentQuestion] = ()):
        self._questions: Tuple[AssessmentQuestion, ...] = tuple(questions)

    def __len__(self) -> int:
        return len(self._questions)

    async def search(self, terms: Tuple[str, ...], limit: int) -> List[AssessmentQuestion]:
        matches = [q for q in self._questions if assessment_matches(q, terms)]
        return matches[:limit]


class SQLAlchemyAssessmentQuestionStore(IAssessmentQuestionStore):
    """SQLAlchemy implementation of the assessment question bank."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def search(self, terms: Tuple[str, ...], limit: int) -> List[AssessmentQuestion]:
        if not terms:
            return []

        text = func.lower(AssessmentQuestionModel.question_text)
        stmt = (
            select(AssessmentQuestionModel)
            .where(AssessmentQuestionModel.status == RecordStatus.APPROVED)
            .where(or_(
                and_(*[text.contains(term, autoescape=True) for term in terms]),
                func.lower(AssessmentQuestionModel.category).in_(terms),
            ))
            .order_by(AssessmentQuestionModel.created_at, AssessmentQuestionModel.id)
        )
        return await _first_matching(
            self._session_factory,
            stmt,
            self._to_entity,
            lambda question: assessment_matches(question, terms),
            limit,
            "assessment question",
        )

    async def add(self, question: AssessmentQuestion, session: Optional[AsyncSession] = None) -> AssessmentQuestion:
        """Persist a question. Used by seeding and tests, never by the pipeline."""
        question_id = uuid4()
        model = AssessmentQuestionModel(
            id=question_id,
            question_text=question.question_text,
            category=question.category,
            section_id=question.section_id,
            section_title=question.section_title,
            guidance=question.guidance,
            action_steps=list(question.action_steps),
            evidence_required=list(question.evidence_required),
            responsible_roles=list(question.responsible_roles),
            is_production_blocker=question.is_production_blocker,
            status=question.status,
        )
        await _persist(self._session_factory, model, session, "assessment question")
        return replace(question, id=str(question_id))

    @staticmethod
    def _to_entity(model: AssessmentQuestionModel) -> AssessmentQuestion:
        return AssessmentQuestion(
            id=str(model.id),
            question_text=model.question_text,
            category=model.category or "",
            section_id=model.section_id,
            section_title=model.section_title,
            guidance=model.guidance or "",
            action_steps=tuple(model.action_steps or ()),
            evidence_required=tuple(model.evidence_required or ()),
            responsible_roles=tuple(model.responsible_roles or ()),
            is_production_blocker=bool(model.is_production_blocker),
            status=model.status,
        )


# ========== Helpers ==========

async def _persist(
    session_factory: async_sessionmaker[AsyncSession],
    model,
    session: Optional[AsyncSession],
    label: str
) -> None:
    try:
        if session is not None:
            session.add(model)
            await session.flush()
        else:
            async with session_factory() as own_session:
                own_session.add(model)
                await own_session.commit()
    except SQLAlchemyError as e:
        raise KnowledgeStoreException(f"Failed to store {label}: {e}") from e


async def _first_matching(
    session_factory: async_sessionmaker[AsyncSession],
    stmt: Select,
    to_entity: Callable[..., T],
    predicate: Callable[[T], bool],
    limit: int,
    label: str
) -> List[T]:
    """Page through the ordered statement until `limit` rows pass the predicate."""
    found: List[T] = []
    offset = 0
    try:
        async with session_factory() as session:
            while len(found) < limit:
                result = await session.execute(stmt.offset(offset).limit(_PAGE_SIZE))
                models = result.scalars().all()
                for model in models:
                    entity = to_entity(model)
                    if predicate(entity):
                        found.append(entity)
                if len(models) < _PAGE_SIZE:
                    break
                offset += _PAGE_SIZE
    except SQLAlchemyError as e:
        raise KnowledgeStoreException(f"{label.capitalize()} search failed: {e}") from e
    except (TypeError, ValueError) as e:
        raise KnowledgeStoreException(f"Malformed {label}: {e}") from e

    return found[:limit]
