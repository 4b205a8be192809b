"""Session Registry — opaque bearer token → user id, for the lifetime of the process.

Invariants:
    - Tokens never expire and are never persisted; a restart invalidates all of them
    - One user may hold many tokens (one per login)
    - Registry is safe to share across request threads (internal lock)

Design Decisions:
    - Explicit component injected via app state, not a module-level dict
      (ADR: testable in isolation, one registry per app instance)
    - token_factory injectable: tests can issue deterministic tokens
"""

import secrets
import threading
from typing import Callable

from gigmarket.core.domain_types import UserId


def _default_token() -> str:
    return secrets.token_urlsafe(24)


class SessionRegistry:
    """In-memory credential table."""

    def __init__(self, token_factory: Callable[[], str] = _default_token):
        self._token_factory = token_factory
        self._tokens: dict[str, UserId] = {}
        self._lock = threading.Lock()

    def issue(self, user_id: UserId) -> str:
        """Create a fresh token bound to user_id."""
        with self._lock:
            token = self._token_factory()
            while token in self._tokens:
                token = self._token_factory()
            self._tokens[token] = user_id
            return token

    def resolve(self, token: str | None) -> UserId | None:
        if not token:
            return None
        with self._lock:
            return self._tokens.get(token)

    def revoke(self, token: str) -> bool:
        with self._lock:
            return self._tokens.pop(token, None) is not None

    def revoke_user(self, user_id: str) -> int:
        """Drop every token held by user_id. Returns how many were removed."""
        with self._lock:
            stale = [t for t, uid in self._tokens.items() if uid == user_id]
            for token in stale:
                del self._tokens[token]
            return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)
