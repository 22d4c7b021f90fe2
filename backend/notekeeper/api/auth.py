from __future__ import annotations

from fastapi import APIRouter, Depends

from notekeeper.api.deps import get_auth_service, get_current_user
from notekeeper.models.auth import AuthResponse, LoginRequest, MeResponse, SignupRequest, UserOut
from notekeeper.services.auth_service import AuthResult, AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(user=UserOut(**result.user.profile()), token=result.token)


@router.post("/signup", response_model=AuthResponse)
def signup(req: SignupRequest, auth: AuthService = Depends(get_auth_service)) -> AuthResponse:
    return _auth_response(auth.signup(name=req.name, email=req.email, password=req.password))


@router.post("/login", response_model=AuthResponse)
def login(req: LoginRequest, auth: AuthService = Depends(get_auth_service)) -> AuthResponse:
    return _auth_response(auth.login(email=req.email, password=req.password))


@router.get("/me", response_model=MeResponse)
def me(
    user_id: str = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
) -> MeResponse:
    return MeResponse(user=UserOut(**auth.current_user(user_id).profile()))
