"""Authentication routes."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...deps import AuthServiceDependency
from ...schemas import ApiResponse, AuthPayload, LoginRequest, RegisterRequest, UserPublic, envelope
from ...services import AuthResult

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_payload(result: AuthResult) -> AuthPayload:
    return AuthPayload(user=UserPublic.model_validate(result.user), token=result.token)


@router.post(
    "/register",
    response_model=ApiResponse[AuthPayload],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
)
async def register(payload: RegisterRequest, auth: AuthServiceDependency) -> ApiResponse[AuthPayload]:
    result = await auth.register(email=payload.email, password=payload.password, name=payload.name)
    return envelope(_auth_payload(result.unwrap()))


@router.post("/login", response_model=ApiResponse[AuthPayload], summary="Log in with email and password")
async def login(payload: LoginRequest, auth: AuthServiceDependency) -> ApiResponse[AuthPayload]:
    result = await auth.login(email=payload.email, password=payload.password)
    return envelope(_auth_payload(result.unwrap()))
