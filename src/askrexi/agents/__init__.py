"""
Agents Module
=============

Bounded Context for question routing and answer composition.

Responsibilities:
- Route a question to one of the regulatory, assessment, analytics or
  general compliance domain handlers
- Delegate regulatory questions to FDA, EMA, ICH and general regulatory
  topic specialists
- Compose scored, personalized answers with sources and action items
- Emit usage analytics without affecting the answer
"""
