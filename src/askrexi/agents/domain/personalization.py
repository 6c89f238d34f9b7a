"""
Answer Personalization
======================

Literal phrase substitutions driven by the session context.

Each table is an ordered list of (phrase, replacement) pairs applied once.
Matching is case-insensitive and whole-phrase. Every transform is idempotent:
beginner simplifications remove the phrase they look for, expert expansions
skip a phrase already followed by its parenthetical, and area substitutions
remove the generic wording.
"""

import re
from typing import Optional, Sequence, Tuple

from askrexi.config import ExpertiseLevel
from askrexi.agents.domain.entities import SessionContext

Substitution = Tuple[str, str]

BEGINNER_SIMPLIFICATIONS: Tuple[Substitution, ...] = (
    ("regulatory compliance", "following rules and regulations"),
    ("pharmaceutical", "drug and medicine"),
    ("clinical validation", "testing in real medical settings"),
    ("algorithmic transparency", "being able to explain how the AI works"),
    ("data governance", "managing and protecting data properly"),
)

EXPERT_EXPANSIONS: Tuple[Substitution, ...] = (
    ("FDA guidelines", "FDA guidelines (21 CFR Part 11, ICH E6(R3))"),
    ("data quality", "data quality (completeness, accuracy, consistency, validity)"),
    ("model validation", "model validation (cross-validation, hold-out testing, bias assessment)"),
)

THERAPEUTIC_AREA_PHRASES: Tuple[Substitution, ...] = (
    ("your organization", "{area} organizations"),
    ("your therapeutic area", "{area}"),
)


def _phrase_regex(phrase: str, suffix: str = "") -> "re.Pattern[str]":
    return re.compile(
        rf"(?<![A-Za-z0-9]){re.escape(phrase)}(?![A-Za-z0-9]){suffix}",
        re.IGNORECASE,
    )


class Personalizer:
    """Applies expertise and therapeutic-area substitutions to answer text."""

    def __init__(
        self,
        simplifications: Sequence[Substitution] = BEGINNER_SIMPLIFICATIONS,
        expansions: Sequence[Substitution] = EXPERT_EXPANSIONS,
        area_phrases: Sequence[Substitution] = THERAPEUTIC_AREA_PHRASES,
    ):
        self._simplifications = tuple(
            (_phrase_regex(phrase), replacement) for phrase, replacement in simplifications
        )
        # An expansion already present is left alone
        self._expansions = tuple(
            (_phrase_regex(phrase, r"(?! \()"), replacement) for phrase, replacement in expansions
        )
        self._area_phrases = tuple(
            (_phrase_regex(phrase), replacement) for phrase, replacement in area_phrases
        )

    @staticmethod
    def _apply(text: str, table) -> str:
        for pattern, replacement in table:
            text = pattern.sub(lambda _match: replacement, text)
        return text

    def simplify(self, text: str) -> str:
        return self._apply(text, self._simplifications)

    def elaborate(self, text: str) -> str:
        return self._apply(text, self._expansions)

    def localize(self, text: str, therapeutic_area: str) -> str:
        for pattern, replacement in self._area_phrases:
            text = pattern.sub(lambda _match: replacement.format(area=therapeutic_area), text)
        return text

    def personalize(self, text: str, context: Optional[SessionContext]) -> str:
        """Apply every transform the context asks for, in a fixed order."""
        if context is None:
            return text

        if context.expertise_level == ExpertiseLevel.BEGINNER:
            text = self.simplify(text)
        elif context.expertise_level == ExpertiseLevel.EXPERT:
            text = self.elaborate(text)

        area = (context.therapeutic_area or "").strip()
        if area:
            text = self.localize(text, area)

        return text
