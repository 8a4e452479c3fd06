"""Core Layer — pure admission rules, no IO, no logging, no settings.

Invariants:
    - No module in core/ imports from services/ or infrastructure/
    - All functions are pure and deterministic; rule checks return errors, never raise

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
