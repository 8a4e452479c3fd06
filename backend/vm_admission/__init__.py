"""VM Admission Package — VirtualMachine spec validation and immutability enforcement.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
