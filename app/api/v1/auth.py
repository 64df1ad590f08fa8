"""
Authentication endpoints: login, registration, token refresh and the
password flows.
"""
from fastapi import APIRouter, status

from app.api.deps import AuthServiceDep, CurrentPrincipal, RegistrationServiceDep
from app.schemas.auth import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    RegisterRequest,
    TokenPair,
)
from app.schemas.common.response import SuccessResponse
from app.schemas.user import UserSummary

router = APIRouter(prefix="/auth")


@router.post("/login", response_model=SuccessResponse[LoginResponse])
def login(data: LoginRequest, service: AuthServiceDep):
    return SuccessResponse.create(service.login(data), "Login successful")


@router.post(
    "/register",
    response_model=SuccessResponse[UserSummary],
    status_code=status.HTTP_201_CREATED,
)
def register(data: RegisterRequest, service: RegistrationServiceDep):
    return SuccessResponse.create(service.register(data), "User registered successfully")


@router.post("/refresh", response_model=SuccessResponse[TokenPair])
def refresh(data: RefreshTokenRequest, service: AuthServiceDep):
    return SuccessResponse.create(service.refresh(data.refresh_token), "Token refreshed successfully")


@router.post("/forgot-password", response_model=SuccessResponse[None])
def forgot_password(data: ForgotPasswordRequest, service: AuthServiceDep):
    return SuccessResponse.create(message=service.forgot_password(data.email))


@router.post("/logout", response_model=SuccessResponse[None])
def logout(principal: CurrentPrincipal, service: AuthServiceDep):
    # Tokens are stateless; the client discards them.
    service.logout(principal.user_id)
    return SuccessResponse.create(message="Logged out successfully")


@router.get("/me", response_model=SuccessResponse[UserSummary])
def me(principal: CurrentPrincipal, service: AuthServiceDep):
    return SuccessResponse.create(service.me(principal.user_id))


@router.post("/change-password", response_model=SuccessResponse[None])
def change_password(
    data: ChangePasswordRequest,
    principal: CurrentPrincipal,
    service: AuthServiceDep,
):
    service.change_password(principal.user_id, data)
    return SuccessResponse.create(message="Password changed successfully")
