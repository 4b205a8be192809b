"""Credential Verifier — placeholder implementation of core.protocols.CredentialVerifier.

Invariants:
    - encode() output is what gets stored on the User record
    - verify() compares in constant time

Design Decisions:
    - Plaintext storage kept for compatibility with existing data files; swap in a
      salted-hash verifier by passing another CredentialVerifier to create_app()
"""

import hmac


class PlaintextCredentialVerifier:
    """Stores the password as given. Not suitable for production data."""

    def encode(self, password: str) -> str:
        return password

    def verify(self, password: str, stored: str) -> bool:
        return hmac.compare_digest(password.encode("utf-8"), stored.encode("utf-8"))
