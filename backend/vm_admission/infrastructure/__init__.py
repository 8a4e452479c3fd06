"""Infrastructure Layer — cross-cutting concerns (structured logging).

Invariants:
    - Infrastructure never imports from core/ domain logic
"""
