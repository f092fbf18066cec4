from typing import Iterator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .auth import AdminPrincipal, Principal, UserPrincipal, principal_from_token
from .config import Settings
from .errors import AuthError


# Dependency to get DB session per request from the store the app was built with
def get_db(request: Request) -> Iterator[Session]:
    yield from request.app.state.store.session()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def bearer_token(request: Request) -> str:
    auth = request.headers.get("authorization")
    if not auth or not auth.lower().startswith("bearer "):
        raise AuthError("Access token required", 401)
    parts = auth.split(None, 1)
    if len(parts) < 2 or not parts[1].strip():
        raise AuthError("Access token required", 401)
    return parts[1].strip()


def get_principal(request: Request, settings: Settings = Depends(get_settings)) -> Principal:
    return principal_from_token(bearer_token(request), settings.jwt_secret)


def current_user(principal: Principal = Depends(get_principal)) -> UserPrincipal:
    if not isinstance(principal, UserPrincipal):
        raise AuthError("User access required", 403)
    return principal


def current_admin(principal: Principal = Depends(get_principal)) -> AdminPrincipal:
    # the role is checked on every request, not only at login
    if not isinstance(principal, AdminPrincipal) or principal.role != "admin":
        raise AuthError("Admin access required", 403)
    return principal
