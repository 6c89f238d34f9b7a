"""
Agents Infrastructure Layer
===========================

Contains:
- ORM model for usage records
- Routing table loader
- Usage analytics sinks (log and database)
"""

from askrexi.agents.infrastructure.models import UsageLogModel
from askrexi.agents.infrastructure.external import LoggingUsageAnalytics, RoutingConfigManager
from askrexi.agents.infrastructure.repositories import SQLAlchemyUsageAnalytics

__all__ = [
    "UsageLogModel",
    "LoggingUsageAnalytics",
    "RoutingConfigManager",
    "SQLAlchemyUsageAnalytics",
]
