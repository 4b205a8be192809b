"""Core Layer — pure marketplace logic, no IO, no async, no locking.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - State transitions mutate only the entities passed in

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""
