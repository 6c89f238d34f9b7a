"""
Knowledge Module
================

Bounded Context for curated compliance Q&A and the regulatory and
assessment reference records.

Responsibilities:
- Represent curated knowledge entries and reference records
- Pre-filter and score entries against a question
- Query the external stores within a time bound
"""
