"""Infrastructure Layer — persistence, credentials and cross-cutting concerns.

Invariants:
    - Infrastructure depends on core types and errors, never on services/ or api/
    - All file IO failures mapped to StorageError (core/errors.py)

Design Decisions:
    - Thin adapters behind core protocols (ADR: ExMA single responsibility)
"""
