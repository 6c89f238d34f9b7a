"""
Topic Specialist Base
=====================

A specialist owns one narrow topic inside a domain (one regulatory
authority, for instance) as an ordered list of trigger branches.
"""

from typing import Tuple

from askrexi.agents.domain import (
    DomainCapability, Matched, NoMatch, ResponseComposer, StepOutcome,
    TopicBranch, first_firing
)
from askrexi.knowledge.domain import contains_any, contains_term


class TopicSpecialist:
    """
    Base class for topic specialists.

    Subclasses declare their data as class attributes:
    - name: identifier reported as sub_agent_used
    - capability: keywords used for ratio scoring
    - authority_terms: names that select this specialist outright
    - branches: answers checked in declared order
    """

    name: str = ""
    capability: DomainCapability
    authority_terms: Tuple[str, ...] = ()
    branches: Tuple[TopicBranch, ...] = ()

    def mentions_authority(self, normalized_question: str) -> bool:
        return contains_any(normalized_question, self.authority_terms)

    def keyword_score(self, normalized_question: str) -> float:
        """Share of this specialist's keywords present in the question."""
        keywords = self.capability.keywords
        if not keywords:
            return 0.0
        matched = sum(1 for keyword in keywords if contains_term(normalized_question, keyword))
        return matched / len(keywords)

    def answer(
        self,
        normalized_question: str,
        composer: ResponseComposer,
        domain: str,
        category: str,
    ) -> StepOutcome:
        branch = first_firing(self.branches, normalized_question)
        if branch is None:
            return NoMatch(step=self.name)
        return Matched(composer.from_branch(branch, domain, category, sub_agent=self.name))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, branches={len(self.branches)})"
