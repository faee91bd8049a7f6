"""
Restaurant API — Request dependencies (auth + role checks)
"""
from typing import Any

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError

from restaurant_api.core.notifier import Notifier
from restaurant_api.core.permissions import Role, is_allowed
from restaurant_api.core.security import decode_token


def _bearer_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    return auth_header.split(" ", 1)[1]


def get_optional_user(request: Request) -> dict[str, Any] | None:
    """Decoded claims when a valid Bearer token is present, otherwise None."""
    token = _bearer_token(request)
    if token is None:
        return None
    try:
        return decode_token(token)
    except JWTError:
        return None


def get_current_user(request: Request) -> dict[str, Any]:
    token = _bearer_token(request)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        claims = decode_token(token)
    except JWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid or expired token: {exc}",
            headers={"WWW-Authenticate": "Bearer"},
        )
    request.state.user = claims
    return claims


def require_roles(*roles: Role):
    """
    Dependency factory: authenticate, then evaluate `is_allowed` once for
    this request. No roles means any authenticated user.
    """

    def dependency(user: dict[str, Any] = Depends(get_current_user)) -> dict[str, Any]:
        if not is_allowed(user.get("role"), roles):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
        return user

    return dependency


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier
