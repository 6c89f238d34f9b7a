"""
Agents Domain Entities
======================

Request context, capability descriptors and the answer envelope.

All of them are immutable: a request's context is owned by the caller and
never changed by the pipeline, and capabilities are shared by every request.
"""

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from askrexi.config import (
    ExpertiseLevel, MessageRole, ResponseStyle,
    IMPACT_LEVELS, MESSAGE_ROLES, SOURCE_TYPES, EXPERTISE_LEVELS, RESPONSE_STYLES
)


@dataclass(frozen=True)
class ConversationMessage:
    """One prior turn of the conversation, read-only."""
    role: MessageRole
    content: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if self.role not in MESSAGE_ROLES:
            raise ValueError(f"role must be one of {MESSAGE_ROLES}")


@dataclass(frozen=True)
class UserPreferences:
    """How the reader wants answers shaped."""
    response_style: Optional[ResponseStyle] = None
    expertise_level: Optional[ExpertiseLevel] = None
    focus_areas: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.response_style is not None and self.response_style not in RESPONSE_STYLES:
            raise ValueError(f"response_style must be one of {RESPONSE_STYLES}")
        if self.expertise_level is not None and self.expertise_level not in EXPERTISE_LEVELS:
            raise ValueError(f"expertise_level must be one of {EXPERTISE_LEVELS}")
        object.__setattr__(self, "focus_areas", tuple(self.focus_areas))


@dataclass(frozen=True)
class SessionContext:
    """
    Optional caller context for a single question.

    Only the preferences and therapeutic area influence the answer text;
    the remaining fields travel along for the surrounding application.
    """
    user_id: Optional[str] = None
    organization_id: Optional[str] = None
    therapeutic_area: Optional[str] = None
    persona: Optional[str] = None
    assessment_id: Optional[str] = None
    conversation_history: Tuple[ConversationMessage, ...] = field(default_factory=tuple)
    preferences: Optional[UserPreferences] = None

    def __post_init__(self):
        object.__setattr__(self, "conversation_history", tuple(self.conversation_history))

    @property
    def expertise_level(self) -> Optional[str]:
        return self.preferences.expertise_level if self.preferences else None


@dataclass(frozen=True)
class DomainCapability:
    """Static descriptor of a domain handler or topic specialist."""
    domain: str
    subdomains: Tuple[str, ...]
    keywords: Tuple[str, ...]
    expertise: Tuple[str, ...]


@dataclass(frozen=True)
class Source:
    """Citation supporting an answer."""
    type: str
    title: str
    content: str
    url: Optional[str] = None

    def __post_init__(self):
        if self.type not in SOURCE_TYPES:
            raise ValueError(f"source type must be one of {SOURCE_TYPES}")


@dataclass(frozen=True)
class AgentResponse:
    """
    Structured answer returned for every question.

    Always carries a non-empty answer and a confidence in [0, 1].
    agent_used names the domain handler; sub_agent_used names the topic
    specialist when one answered.
    """
    answer: str
    category: str
    subcategory: str
    sources: Tuple[Source, ...]
    action_items: Tuple[str, ...]
    impact_level: str
    related_questions: Tuple[str, ...]
    confidence: float
    agent_used: str
    sub_agent_used: Optional[str] = None

    def __post_init__(self):
        """Validate the envelope invariants."""
        if not self.answer or not self.answer.strip():
            raise ValueError("Answer must not be empty")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError("Confidence must be between 0 and 1")
        if self.impact_level not in IMPACT_LEVELS:
            raise ValueError(f"impact_level must be one of {IMPACT_LEVELS}")
        for name in ("sources", "action_items", "related_questions"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def with_answer(self, answer: str) -> "AgentResponse":
        return replace(self, answer=answer)

    def with_confidence(self, confidence: float, agent_used: Optional[str] = None) -> "AgentResponse":
        """Copy with the final confidence and, optionally, a new producer name."""
        return replace(self, confidence=confidence, agent_used=agent_used or self.agent_used)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for name in ("sources", "action_items", "related_questions"):
            data[name] = list(data[name])
        return data


@dataclass(frozen=True)
class UsageRecord:
    """Observability record emitted once per routed question."""
    domain: str
    elapsed_ms: int
    question_prefix: str
    recorded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
