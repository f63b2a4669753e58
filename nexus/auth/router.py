from fastapi import APIRouter, Depends, Request

from ..config import settings
from ..schemas.auth import (
    AdminHintRequest,
    AdminHintResponse,
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    SessionResponse,
)
from ..schemas.records import UserPublic
from ..services import auth_flow, password_reset
from ..services.password_reset import ResetCodeStore
from ..storage.gateway import PersistenceGateway, get_gateway
from .security import create_session_token, get_current_session


router = APIRouter(prefix="/auth", tags=["auth"])


def get_reset_codes(request: Request) -> ResetCodeStore:
    return request.app.state.reset_codes


@router.post("/login", response_model=SessionResponse)
def login(req: LoginRequest, gateway: PersistenceGateway = Depends(get_gateway)):
    user = auth_flow.login(gateway, req.username, req.password).public()
    return SessionResponse(access_token=create_session_token(user), user=user)


@router.post("/register", response_model=UserPublic, status_code=201)
def register(req: RegisterRequest, gateway: PersistenceGateway = Depends(get_gateway)):
    user = auth_flow.register(gateway, req.username, req.email, req.password, req.full_name)
    return user.public()


@router.get("/me", response_model=UserPublic)
def me(user: UserPublic = Depends(get_current_session)):
    return user


@router.post("/logout")
def logout(user: UserPublic = Depends(get_current_session)):
    # Sessions are stateless; the client drops its token
    return {"status": "ok"}


# Password reset
@router.post("/password/forgot", response_model=ForgotPasswordResponse)
def password_forgot(
    req: ForgotPasswordRequest,
    gateway: PersistenceGateway = Depends(get_gateway),
    codes: ResetCodeStore = Depends(get_reset_codes),
):
    pending = password_reset.request_reset(gateway, codes, req.email)
    return ForgotPasswordResponse(email=req.email, code=pending.code, expires_in=codes.ttl_seconds)


@router.post("/password/reset")
def password_reset_submit(
    req: ResetPasswordRequest,
    gateway: PersistenceGateway = Depends(get_gateway),
    codes: ResetCodeStore = Depends(get_reset_codes),
):
    password_reset.reset_password(gateway, codes, req.email, req.code, req.new_password, req.confirm_password)
    return {"status": "ok"}


@router.post("/admin-hint", response_model=AdminHintResponse)
def admin_hint(req: AdminHintRequest):
    return AdminHintResponse(**password_reset.reveal_admin_credentials(req.answer, settings))
