from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from notekeeper.errors import InvalidToken
from notekeeper.services.auth_service import AuthService
from notekeeper.services.note_service import NoteService

bearer = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_note_service(request: Request) -> NoteService:
    return request.app.state.note_service


def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    auth: AuthService = Depends(get_auth_service),
) -> str:
    """Resolve ``Authorization: Bearer <token>`` to the caller's user id."""
    if creds is None or creds.scheme.lower() != "bearer":
        raise InvalidToken("Not authorized, no token")
    return auth.authenticate(creds.credentials)
