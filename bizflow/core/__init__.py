"""Core Layer - pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/ or infrastructure/
    - Collaborators with side effects are reached only through boundary_protocols

Design Decisions:
    - Functional core separated from imperative shell
"""
