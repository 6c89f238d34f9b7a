"""
Shared Kernel Module
====================

Shared infrastructure used by every bounded context (knowledge and agents).

Architecture Pattern: Modular Monolith
- Each module (knowledge, agents) is a bounded context
- Shared kernel contains only generic infrastructure

DO NOT add routing or answer logic to the shared kernel.
"""
