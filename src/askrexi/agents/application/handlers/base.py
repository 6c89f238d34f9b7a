"""
Domain Handler Base
===================

Shared pipeline of the four domain handlers.

Steps run in order and the first Matched outcome wins:
1. curated lookup in the knowledge store
2. topic specialist delegation
3. the handler's own trigger branches
then a clarifying answer when nothing matched. The regulatory and assessment
handlers insert a reference-record step after the curated lookup.

A step that raises becomes a Fault; handle() returns it to the caller,
process() turns it into the well-formed error answer.
"""

from typing import Awaitable, Callable, List, Optional, Tuple, Type

from askrexi.agents.application.specialists import TopicSpecialist
from askrexi.agents.domain import (
    AgentResponse, DomainCapability, Fault, HandlerOutcome, Matched, NoMatch,
    Personalizer, ResponseComposer, SessionContext, StepOutcome, TopicBranch,
    first_firing
)
from askrexi.core import HandlerFaultException
from askrexi.knowledge.application import KnowledgeLookupService
from askrexi.knowledge.domain import KnowledgeMatcher, contains_any, normalize_question
from askrexi.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

Step = Callable[[str, str], Awaitable[StepOutcome]]


class DomainHandler:
    """
    Base class for domain handlers.

    Subclasses declare:
    - name: domain name used for routing and agent_used
    - label: wording used in clarifying and error answers
    - category: response category of branch answers and curated lookups
    - capability: static DomainCapability
    - branches: the handler's own trigger branches
    - specialist_types: TopicSpecialist classes in declaration order
    - topic_routes: (terms, specialist name) pairs checked after authority
      terms and before ratio scoring
    """

    name: str = ""
    label: str = ""
    category: str = ""
    capability: DomainCapability
    branches: Tuple[TopicBranch, ...] = ()
    specialist_types: Tuple[Type[TopicSpecialist], ...] = ()
    topic_routes: Tuple[Tuple[Tuple[str, ...], str], ...] = ()

    def __init__(
        self,
        composer: ResponseComposer,
        lookup: Optional[KnowledgeLookupService] = None,
        matcher: Optional[KnowledgeMatcher] = None,
        personalizer: Optional[Personalizer] = None,
    ):
        self._composer = composer
        self._lookup = lookup
        self._matcher = matcher or KnowledgeMatcher()
        self._personalizer = personalizer or Personalizer()
        self._specialists: Tuple[TopicSpecialist, ...] = tuple(cls() for cls in self.specialist_types)

    @property
    def specialists(self) -> Tuple[TopicSpecialist, ...]:
        return self._specialists

    def get_capabilities(self) -> DomainCapability:
        return self.capability

    # ========== Pipeline ==========

    def pipeline(self) -> List[Tuple[str, Step]]:
        """Named steps in execution order."""
        return [
            ("curated", self._lookup_curated),
            ("specialist", self._delegate),
            ("branches", self._match_branches),
        ]

    async def handle(self, question: str, context: Optional[SessionContext] = None) -> HandlerOutcome:
        normalized = normalize_question(question)

        for step_name, step in self.pipeline():
            try:
                outcome = await step(question, normalized)
                if isinstance(outcome, Matched):
                    return Matched(self._personalize(outcome.response, context))
            except Exception as e:
                return self._fault(step_name, e)
            if isinstance(outcome, Fault):
                return outcome

        return Matched(self._composer.clarification(self.name, self.label))

    async def process(self, question: str, context: Optional[SessionContext] = None) -> AgentResponse:
        """Always returns an answer; faults become the error answer."""
        outcome = await self.handle(question, context)
        if isinstance(outcome, Fault):
            return self._composer.error_response(self.name, self.label)
        return outcome.response

    # ========== Steps ==========

    async def _lookup_curated(self, question: str, normalized: str) -> StepOutcome:
        if self._lookup is None:
            return NoMatch(step="curated")

        candidates = await self._lookup.candidates(self.category, question)
        entry = self._matcher.match(question, candidates)
        if entry is None:
            return NoMatch(step="curated")
        return Matched(self._composer.from_entry(entry, self.name))

    async def _delegate(self, question: str, normalized: str) -> StepOutcome:
        specialist = self.select_specialist(normalized)
        if specialist is None:
            return NoMatch(step="specialist")
        return specialist.answer(normalized, self._composer, self.name, self.category)

    async def _match_branches(self, question: str, normalized: str) -> StepOutcome:
        branch = first_firing(self.branches, normalized)
        if branch is None:
            return NoMatch(step="branches")
        return Matched(self._composer.from_branch(branch, self.name, self.category))

    # ========== Specialist Selection ==========

    def select_specialist(self, normalized_question: str) -> Optional[TopicSpecialist]:
        """
        Authority names first, then topic routes, then the best keyword
        ratio. Ties go to the specialist declared first; a zero best ratio
        selects nobody.
        """
        for specialist in self._specialists:
            if specialist.mentions_authority(normalized_question):
                return specialist

        for terms, specialist_name in self.topic_routes:
            if contains_any(normalized_question, terms):
                specialist = self._specialist_named(specialist_name)
                if specialist is not None:
                    return specialist

        best: Optional[TopicSpecialist] = None
        best_score = 0.0
        for specialist in self._specialists:
            score = specialist.keyword_score(normalized_question)
            if score > best_score:
                best, best_score = specialist, score
        return best

    def _specialist_named(self, name: str) -> Optional[TopicSpecialist]:
        for specialist in self._specialists:
            if specialist.name == name:
                return specialist
        return None

    # ========== Helpers ==========

    def _personalize(self, response: AgentResponse, context: Optional[SessionContext]) -> AgentResponse:
        text = self._personalizer.personalize(response.answer, context)
        if text == response.answer:
            return response
        return response.with_answer(text)

    def _fault(self, step: str, error: Exception) -> Fault:
        fault = HandlerFaultException(self.name, step, error)
        logger.error(
            "Domain handler step failed",
            extra={
                "handler": self.name,
                "step": step,
                "error": str(error),
                "error_type": type(error).__name__,
            }
        )
        return Fault(error=fault, step=step)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, specialists={[s.name for s in self._specialists]})"
