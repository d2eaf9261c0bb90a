# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for account operations backed by Supabase Auth:
# - sign-up (email confirmation required before the first login)
# - login / logout
# - resending the confirmation email
# - inspecting the current token
# =============================================================================

import logging

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from app.auth.dependencies import get_current_user
from app.auth.models import (
    AuthSession,
    AuthUser,
    LoginRequest,
    ResendConfirmationRequest,
    SignupRequest,
    SignupResult,
    UserResponse,
)
from core.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/signup", response_model=SignupResult, status_code=status.HTTP_201_CREATED)
async def sign_up(body: SignupRequest) -> SignupResult:
    """
    Create an account.

    The user must confirm their email before logging in; no session is
    returned here.

    Raises:
        409: Email already registered
        422: Passwords do not match or password too short
    """
    return await run_in_threadpool(
        AuthService.sign_up, body.email, body.password, body.confirm_password
    )


@router.post("/login", response_model=AuthSession)
async def login(body: LoginRequest) -> AuthSession:
    """
    Log in with email and password.

    Raises:
        401: Invalid credentials
    """
    return await run_in_threadpool(AuthService.sign_in, body.email, body.password)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(user: AuthUser = Depends(get_current_user)) -> None:
    """Revoke the current session."""
    await run_in_threadpool(AuthService.sign_out, user.access_token)
    logger.info(f"User {user.id} logged out")


@router.post("/resend-confirmation")
async def resend_confirmation(body: ResendConfirmationRequest) -> dict:
    """Send the sign-up confirmation email again."""
    await run_in_threadpool(AuthService.resend_confirmation, body.email)
    return {"sent": True, "email": body.email.strip()}


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current authenticated user.

    Raises:
        401: If not authenticated
    """
    return UserResponse(id=user.id, email=user.email)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
