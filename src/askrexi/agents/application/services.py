"""
Agents Application Services
===========================

The Router: picks a domain handler for a question, finalizes confidence,
reroutes faults to the default domain and records usage.

Nothing raised below route() reaches the caller; every path ends in a
well-formed AgentResponse.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Set, Type

from askrexi.agents.application.handlers import (
    AnalyticsHandler, AssessmentHandler, DomainHandler,
    GeneralComplianceHandler, RegulatoryHandler
)
from askrexi.agents.domain import (
    AgentResponse, ConfidenceCalculator, DomainSelector, Fault, Personalizer,
    ResponseComposer, RoutingDecision, RoutingTable, SessionContext, UsageRecord
)
from askrexi.core import ConfigurationException, HandlerFaultException
from askrexi.knowledge.application import (
    AssessmentQuestionLookupService, IAssessmentQuestionStore, IKnowledgeStore,
    IRegulatoryIntelligenceStore, KnowledgeLookupService, RegulatoryIntelligenceLookupService
)
from askrexi.knowledge.domain import KnowledgeMatcher, normalize_question
from askrexi.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

HANDLER_TYPES: Sequence[Type[DomainHandler]] = (
    RegulatoryHandler,
    AssessmentHandler,
    AnalyticsHandler,
    GeneralComplianceHandler,
)


# ========== Collaborator Interfaces ==========

class IUsageAnalytics(ABC):
    """Interface for the usage analytics sink."""

    @abstractmethod
    async def record(self, record: UsageRecord) -> None:
        """
        Store one usage record.

        Raises:
            UsageAnalyticsException: sink unavailable
        """


# ========== Application Services ==========

class AgentRouter:
    """
    Entry point of the question pipeline.

    The routing table and handlers are fixed at construction and shared by
    all requests; route() keeps no per-request state on the instance apart
    from pending usage deliveries.
    """

    def __init__(
        self,
        table: RoutingTable,
        handlers: Sequence[DomainHandler],
        composer: ResponseComposer,
        usage: Optional[IUsageAnalytics] = None,
        question_prefix_length: int = 50,
    ):
        self._selector = DomainSelector(table)
        self._handlers: Dict[str, DomainHandler] = {handler.name: handler for handler in handlers}
        missing = [name for name in table.domain_names if name not in self._handlers]
        if missing:
            raise ConfigurationException(
                f"No handler for routing domains: {', '.join(missing)}",
                {"missing": missing}
            )
        self._composer = composer
        self._usage = usage
        self._prefix_length = question_prefix_length
        self._pending: Set[asyncio.Task] = set()

    @property
    def table(self) -> RoutingTable:
        return self._selector.table

    @property
    def handlers(self) -> List[DomainHandler]:
        """Handlers of the routing table, in declaration order."""
        return [self._handlers[name] for name in self.table.domain_names]

    def select_domain(self, question: Optional[str]) -> RoutingDecision:
        return self._selector.select(normalize_question(question))

    async def route(self, question: Optional[str], context: Optional[SessionContext] = None) -> AgentResponse:
        """
        Answer a question.

        Args:
            question: Free text; empty or None is answered, not rejected
            context: Optional caller context used for personalization

        Returns:
            AgentResponse with final confidence
        """
        start = time.perf_counter()
        text = question or ""

        decision = self.select_domain(text)
        logger.debug(
            "Question routed",
            extra={
                "domain": decision.domain,
                "reason": decision.reason,
                "matched_term": decision.matched_term,
            }
        )

        handler = self._handlers[decision.domain]
        try:
            outcome = await handler.handle(text, context)
        except Exception as e:
            outcome = Fault(error=HandlerFaultException(handler.name, "handle", e), step="handle")

        if isinstance(outcome, Fault):
            response = await self._fallback(text, context, handler, outcome)
        else:
            response = outcome.response.with_confidence(ConfidenceCalculator.calculate(outcome.response))

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        self._record_usage(response.agent_used, elapsed_ms, text)
        return response

    async def _fallback(
        self,
        question: str,
        context: Optional[SessionContext],
        failed: DomainHandler,
        fault: Fault,
    ) -> AgentResponse:
        default = self._handlers[self.table.default_domain]
        logger.error(
            "Domain handler faulted, using fallback domain",
            extra={
                "handler": failed.name,
                "step": fault.step,
                "error": str(fault.error),
                "fallback": default.name,
            }
        )

        try:
            response = await default.process(question, context)
        except Exception as e:
            logger.error(
                "Fallback domain handler failed",
                extra={"handler": default.name, "error": str(e)}
            )
            response = self._composer.error_response(default.name, default.label)

        return response.with_confidence(
            ConfidenceCalculator.FALLBACK,
            agent_used=f"{default.name}-fallback",
        )

    # ========== Usage Analytics ==========

    def _record_usage(self, domain: str, elapsed_ms: int, question: str) -> None:
        if self._usage is None:
            return
        try:
            record = UsageRecord(
                domain=domain,
                elapsed_ms=elapsed_ms,
                question_prefix=question[:self._prefix_length],
            )
            task = asyncio.create_task(self._deliver(record))
        except Exception as e:
            logger.warning("Usage record not scheduled", extra={"error": str(e)})
            return
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, record: UsageRecord) -> None:
        try:
            await self._usage.record(record)
        except Exception as e:
            logger.warning(
                "Usage analytics record failed",
                extra={"domain": record.domain, "error": str(e), "error_type": type(e).__name__}
            )

    async def drain(self) -> None:
        """Wait for usage records still being delivered."""
        pending = list(self._pending)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    @property
    def pending_usage(self) -> int:
        return len(self._pending)


def build_router(
    table: Optional[RoutingTable] = None,
    store: Optional[IKnowledgeStore] = None,
    usage: Optional[IUsageAnalytics] = None,
    lookup_timeout_seconds: float = 2.0,
    candidate_limit: int = 25,
    question_prefix_length: int = 50,
    intelligence_store: Optional[IRegulatoryIntelligenceStore] = None,
    question_store: Optional[IAssessmentQuestionStore] = None,
    regulatory_update_limit: int = 5,
    assessment_question_limit: int = 3,
) -> AgentRouter:
    """
    Wire the four domain handlers into a Router.

    A store left out skips its lookup step: curated lookup without `store`,
    regulatory intelligence without `intelligence_store`, the question bank
    without `question_store`. All lookups share one timeout.
    """
    composer = ResponseComposer()
    matcher = KnowledgeMatcher()
    personalizer = Personalizer()
    lookup = (
        KnowledgeLookupService(store, timeout_seconds=lookup_timeout_seconds, limit=candidate_limit)
        if store is not None else None
    )
    record_lookups: Dict[Type[DomainHandler], dict] = {
        RegulatoryHandler: {
            "intelligence": RegulatoryIntelligenceLookupService(
                intelligence_store, timeout_seconds=lookup_timeout_seconds, limit=regulatory_update_limit
            ) if intelligence_store is not None else None,
        },
        AssessmentHandler: {
            "question_bank": AssessmentQuestionLookupService(
                question_store, timeout_seconds=lookup_timeout_seconds, limit=assessment_question_limit
            ) if question_store is not None else None,
        },
    }

    handlers = [
        handler_type(
            composer, lookup=lookup, matcher=matcher, personalizer=personalizer,
            **record_lookups.get(handler_type, {})
        )
        for handler_type in HANDLER_TYPES
    ]
    return AgentRouter(
        table or RoutingTable(),
        handlers,
        composer,
        usage=usage,
        question_prefix_length=question_prefix_length,
    )
