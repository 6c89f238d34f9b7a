"""
Knowledge Domain Entities
=========================

Curated question/answer records and the regulatory and assessment reference
records maintained outside the core and read here.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from askrexi.config import ImpactLevel, IMPACT_LEVELS, RecordStatus


@dataclass(frozen=True)
class KnowledgeEntry:
    """
    Curated Q&A record.

    Immutable from the core's perspective; seeding and maintenance happen
    elsewhere. Sources are citation labels such as "FDA AI/ML Action Plan".
    """
    question: str
    answer: str
    category: str
    subcategory: str = ""
    variations: Tuple[str, ...] = field(default_factory=tuple)
    action_items: Tuple[str, ...] = field(default_factory=tuple)
    impact_level: str = ImpactLevel.MEDIUM
    sources: Tuple[str, ...] = field(default_factory=tuple)
    keywords: Tuple[str, ...] = field(default_factory=tuple)
    id: Optional[str] = None

    def __post_init__(self):
        """Validate entry and freeze list inputs into tuples."""
        if not self.question.strip():
            raise ValueError("Knowledge entry question must not be empty")
        if not self.answer.strip():
            raise ValueError("Knowledge entry answer must not be empty")
        if self.impact_level not in IMPACT_LEVELS:
            raise ValueError(f"impact_level must be one of {IMPACT_LEVELS}")
        for name in ("variations", "action_items", "sources", "keywords"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @property
    def search_text(self) -> str:
        """Lowercased text the candidate pre-filter looks at."""
        return " ".join(
            [self.question, *self.variations, *self.keywords]
        ).lower()


@dataclass(frozen=True)
class RegulatoryUpdate:
    """
    Regulatory intelligence record: a guidance, notice or publication from
    an authority such as FDA, EMA, ICH or WHO.

    Unknown impact levels read as medium.
    """
    title: str
    content: str
    source: str
    last_updated: datetime
    impact_level: str = ImpactLevel.MEDIUM
    status: str = RecordStatus.ACTIVE
    id: Optional[str] = None

    def __post_init__(self):
        if not self.title.strip():
            raise ValueError("Regulatory update title must not be empty")
        if not self.content.strip():
            raise ValueError("Regulatory update content must not be empty")
        object.__setattr__(self, "source", self.source.strip().upper())
        level = (self.impact_level or "").lower()
        object.__setattr__(self, "impact_level", level if level in IMPACT_LEVELS else ImpactLevel.MEDIUM)

    @property
    def search_text(self) -> str:
        return f"{self.title} {self.content}".lower()


@dataclass(frozen=True)
class AssessmentQuestion:
    """
    Approved assessment question with its guidance.

    A production blocker must be resolved before an AI system goes live.
    """
    question_text: str
    category: str = ""
    section_id: Optional[str] = None
    section_title: Optional[str] = None
    guidance: str = ""
    action_steps: Tuple[str, ...] = field(default_factory=tuple)
    evidence_required: Tuple[str, ...] = field(default_factory=tuple)
    responsible_roles: Tuple[str, ...] = field(default_factory=tuple)
    is_production_blocker: bool = False
    status: str = RecordStatus.APPROVED
    id: Optional[str] = None

    def __post_init__(self):
        if not self.question_text.strip():
            raise ValueError("Assessment question text must not be empty")
        for name in ("action_steps", "evidence_required", "responsible_roles"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
