"""
Topic Specialists
=================

Narrow-topic answerers consulted by the regulatory domain handler.
"""

from askrexi.agents.application.specialists.base import TopicSpecialist
from askrexi.agents.application.specialists.fda import FDASpecialist
from askrexi.agents.application.specialists.ema import EMASpecialist
from askrexi.agents.application.specialists.ich import ICHSpecialist
from askrexi.agents.application.specialists.general_regulatory import GeneralRegulatorySpecialist

__all__ = [
    "TopicSpecialist",
    "FDASpecialist",
    "EMASpecialist",
    "ICHSpecialist",
    "GeneralRegulatorySpecialist",
]
