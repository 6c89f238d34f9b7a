"""
AskRexi
=======

Regulatory compliance question answering: routes a free-text question to a
domain handler, matches it against curated knowledge, delegates to topic
specialists and composes a structured, scored answer.
"""

__version__ = "1.0.0"
