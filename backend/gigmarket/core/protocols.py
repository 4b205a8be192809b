"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Credential storage is reached only through CredentialVerifier
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy (ADR: ExMA anti-pattern)
    - encode/verify pair: a salted-hash implementation can replace the placeholder
      without touching the order or dispute state machines
"""

from typing import Protocol


class CredentialVerifier(Protocol):
    """Contract for turning a password into a stored secret and checking it."""
    def encode(self, password: str) -> str: ...
    def verify(self, password: str, stored: str) -> bool: ...
