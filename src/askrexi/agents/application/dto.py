"""
Agents Application DTOs
=======================

Data Transfer Objects for the AskRexi API layer.

These Pydantic models handle validation of incoming questions and
serialization of composed answers. Domain entities stay plain dataclasses.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from askrexi.agents.domain import (
    AgentResponse, ConversationMessage, DomainCapability, SessionContext, UserPreferences
)


# ========== Type Aliases for Literals ==========
ExpertiseLevelStr = Literal["beginner", "intermediate", "expert"]
ResponseStyleStr = Literal["detailed", "concise", "conversational"]
MessageRoleStr = Literal["user", "assistant"]
ImpactLevelStr = Literal["low", "medium", "high", "critical"]


# ========== Request DTOs ==========

class PreferencesDTO(BaseModel):
    """Reader preferences used to personalize answers."""
    response_style: Optional[ResponseStyleStr] = None
    expertise_level: Optional[ExpertiseLevelStr] = None
    focus_areas: List[str] = Field(default_factory=list)


class ConversationMessageDTO(BaseModel):
    """One prior conversation turn."""
    role: MessageRoleStr
    content: str
    timestamp: Optional[datetime] = None


class SessionContextDTO(BaseModel):
    """Optional caller context for a question."""
    user_id: Optional[str] = None
    organization_id: Optional[str] = None
    therapeutic_area: Optional[str] = Field(None, description="Therapeutic area, e.g. oncology")
    persona: Optional[str] = None
    assessment_id: Optional[str] = None
    conversation_history: List[ConversationMessageDTO] = Field(default_factory=list)
    preferences: Optional[PreferencesDTO] = None

    def to_domain(self) -> SessionContext:
        """Convert to domain entity."""
        history = []
        for message in self.conversation_history:
            if message.timestamp is not None:
                history.append(ConversationMessage(
                    role=message.role, content=message.content, timestamp=message.timestamp
                ))
            else:
                history.append(ConversationMessage(role=message.role, content=message.content))

        preferences = None
        if self.preferences is not None:
            preferences = UserPreferences(
                response_style=self.preferences.response_style,
                expertise_level=self.preferences.expertise_level,
                focus_areas=tuple(self.preferences.focus_areas),
            )

        return SessionContext(
            user_id=self.user_id,
            organization_id=self.organization_id,
            therapeutic_area=self.therapeutic_area,
            persona=self.persona,
            assessment_id=self.assessment_id,
            conversation_history=tuple(history),
            preferences=preferences,
        )


class AskRequest(BaseModel):
    """Request model for a question. Empty questions are answered, not rejected."""
    question: Optional[str] = Field(default="", description="Free-text question")
    context: Optional[SessionContextDTO] = Field(None, description="Optional session context")


# ========== Response DTOs ==========

class SourceDTO(BaseModel):
    """Citation supporting an answer."""
    type: str
    title: str
    content: str
    url: Optional[str] = None


class AgentResponseDTO(BaseModel):
    """Serialized AgentResponse."""
    answer: str
    category: str
    subcategory: str
    sources: List[SourceDTO] = Field(default_factory=list)
    action_items: List[str] = Field(default_factory=list)
    impact_level: ImpactLevelStr
    related_questions: List[str] = Field(default_factory=list)
    confidence: float = Field(..., ge=0.0, le=1.0)
    agent_used: str = Field(..., description="Domain handler that produced the answer")
    sub_agent_used: Optional[str] = Field(None, description="Topic specialist, when one answered")

    @classmethod
    def from_entity(cls, response: AgentResponse) -> "AgentResponseDTO":
        return cls(**response.to_dict())


class AskResponse(BaseModel):
    """Response model for a question."""
    success: bool = True
    data: AgentResponseDTO


class SpecialistCapabilityDTO(BaseModel):
    """Capability descriptor of a topic specialist."""
    name: str
    subdomains: List[str]
    keywords: List[str]
    expertise: List[str]


class CapabilityDTO(BaseModel):
    """Capability descriptor of a domain handler."""
    domain: str
    subdomains: List[str]
    keywords: List[str]
    expertise: List[str]
    specialists: List[SpecialistCapabilityDTO] = Field(default_factory=list)

    @classmethod
    def from_capability(
        cls,
        capability: DomainCapability,
        specialists: Optional[List[DomainCapability]] = None,
    ) -> "CapabilityDTO":
        return cls(
            domain=capability.domain,
            subdomains=list(capability.subdomains),
            keywords=list(capability.keywords),
            expertise=list(capability.expertise),
            specialists=[
                SpecialistCapabilityDTO(
                    name=specialist.domain,
                    subdomains=list(specialist.subdomains),
                    keywords=list(specialist.keywords),
                    expertise=list(specialist.expertise),
                )
                for specialist in specialists or []
            ],
        )


class CapabilitiesResponse(BaseModel):
    """Response model for the capabilities listing."""
    success: bool = True
    data: List[CapabilityDTO]
