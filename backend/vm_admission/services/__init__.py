"""Services Layer — admission entry points around the pure core.

Invariants:
    - Services own logging and result shaping; rule logic stays in core/
"""
