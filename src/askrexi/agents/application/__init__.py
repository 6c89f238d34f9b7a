"""
Agents Application Layer
========================

Contains:
- Topic specialists and domain handlers
- The Router and its usage analytics interface
- DTOs for API serialization

This layer depends on the domain layer and collaborator interfaces,
but not on concrete infrastructure implementations.
"""

from askrexi.agents.application.specialists import (
    TopicSpecialist,
    FDASpecialist,
    EMASpecialist,
    ICHSpecialist,
    GeneralRegulatorySpecialist,
)
from askrexi.agents.application.handlers import (
    DomainHandler,
    RegulatoryHandler,
    AssessmentHandler,
    AnalyticsHandler,
    GeneralComplianceHandler,
)
from askrexi.agents.application.services import (
    AgentRouter,
    IUsageAnalytics,
    build_router,
    HANDLER_TYPES,
)
from askrexi.agents.application.dto import (
    AskRequest,
    AskResponse,
    AgentResponseDTO,
    SessionContextDTO,
    PreferencesDTO,
    ConversationMessageDTO,
    SourceDTO,
    CapabilityDTO,
    SpecialistCapabilityDTO,
    CapabilitiesResponse,
)

__all__ = [
    # Specialists
    "TopicSpecialist",
    "FDASpecialist",
    "EMASpecialist",
    "ICHSpecialist",
    "GeneralRegulatorySpecialist",
    # Handlers
    "DomainHandler",
    "RegulatoryHandler",
    "AssessmentHandler",
    "AnalyticsHandler",
    "GeneralComplianceHandler",
    # Services
    "AgentRouter",
    "IUsageAnalytics",
    "build_router",
    "HANDLER_TYPES",
    # DTOs
    "AskRequest",
    "AskResponse",
    "AgentResponseDTO",
    "SessionContextDTO",
    "PreferencesDTO",
    "ConversationMessageDTO",
    "SourceDTO",
    "CapabilityDTO",
    "SpecialistCapabilityDTO",
    "CapabilitiesResponse",
]
