"""
Agents Domain Layer
===================

Entities, routing value objects, personalization and response composition.
No I/O happens here.
"""

from askrexi.agents.domain.entities import (
    AgentResponse,
    ConversationMessage,
    DomainCapability,
    SessionContext,
    Source,
    UsageRecord,
    UserPreferences,
)
from askrexi.agents.domain.value_objects import (
    ConfidenceCalculator,
    DomainKeywords,
    DomainSelector,
    Fault,
    HandlerOutcome,
    Matched,
    NoMatch,
    PriorityRule,
    RoutingDecision,
    RoutingReason,
    RoutingTable,
    StepOutcome,
    TopicBranch,
    first_firing,
)
from askrexi.agents.domain.personalization import Personalizer
from askrexi.agents.domain.composer import ResponseComposer

__all__ = [
    "AgentResponse",
    "ConversationMessage",
    "DomainCapability",
    "SessionContext",
    "Source",
    "UsageRecord",
    "UserPreferences",
    "ConfidenceCalculator",
    "DomainKeywords",
    "DomainSelector",
    "Fault",
    "HandlerOutcome",
    "Matched",
    "NoMatch",
    "PriorityRule",
    "RoutingDecision",
    "RoutingReason",
    "RoutingTable",
    "StepOutcome",
    "TopicBranch",
    "first_firing",
    "Personalizer",
    "ResponseComposer",
]
