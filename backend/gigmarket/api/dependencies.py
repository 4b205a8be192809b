"""Request Dependencies — marketplace lookup and bearer-token identity resolution.

Invariants:
    - current_user raises UnauthenticatedError (401) for a missing/unknown token
    - require(op) pre-checks role-only permissions before the body is validated,
      so a wrong role answers 403 even when the body is incomplete
    - Ownership permissions are evaluated by the handlers, where the resource is loaded
    - Dependencies and routes that touch the record store are plain def: FastAPI runs
      them in its threadpool, so store IO never blocks the event loop and the store
      lock serializes real threads

Design Decisions:
    - HTTPBearer(auto_error=False): the guard, not FastAPI, decides the 401 shape
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gigmarket.core.authorization import PERMISSIONS, Operation, authorize, resolve_user
from gigmarket.models.user import User
from gigmarket.services.marketplace import Marketplace

bearer_scheme = HTTPBearer(auto_error=False)


def get_marketplace(request: Request) -> Marketplace:
    return request.app.state.marketplace


async def get_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    return credentials.credentials if credentials else None


def current_user(
    token: str | None = Depends(get_token),
    marketplace: Marketplace = Depends(get_marketplace),
) -> User:
    return resolve_user(token, marketplace.sessions, marketplace.accounts.find_user)


def require(operation: Operation):
    """Dependency factory: authenticated caller allowed to attempt operation."""
    permission = PERMISSIONS[operation]

    def dependency(user: User = Depends(current_user)) -> User:
        if not permission.requires_ownership:
            authorize(user, operation)
        return user

    return dependency
