"""Pydantic Schemas — frozen VirtualMachine spec snapshots.

Invariants:
    - Schemas validate shape at the system boundary; admission rules live in core/
    - Domain types from core/ used for enum fields
"""
