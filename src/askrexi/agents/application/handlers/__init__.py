"""
Domain Handlers
===============

One handler per routing domain.
"""

from askrexi.agents.application.handlers.base import DomainHandler
from askrexi.agents.application.handlers.regulatory import RegulatoryHandler
from askrexi.agents.application.handlers.assessment import AssessmentHandler
from askrexi.agents.application.handlers.analytics import AnalyticsHandler
from askrexi.agents.application.handlers.general import GeneralComplianceHandler, out_of_scope_topic

__all__ = [
    "DomainHandler",
    "RegulatoryHandler",
    "AssessmentHandler",
    "AnalyticsHandler",
    "GeneralComplianceHandler",
    "out_of_scope_topic",
]
