"""
Agents Interfaces Layer
=======================

Interface adapters (controllers) for the question endpoint.

This is the outermost layer - handles HTTP requests/responses and
delegates to the Router.
"""

from askrexi.agents.interfaces.controllers import askrexi_router

__all__ = ["askrexi_router"]
