# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data: the user resolved from a bearer
# token, the request bodies of the auth endpoints and their results.
# =============================================================================

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database. The raw token is kept so profile
    queries can run as this user.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: str | None = None
    access_token: str = Field(default="", repr=False)


# =============================================================================
# Request Bodies
# =============================================================================

class SignupRequest(BaseModel):
    """Body of POST /auth/signup."""
    email: str = Field(..., description="Email address to register")
    password: str = Field(..., description="New password")
    confirm_password: str = Field(..., description="Must equal password")


class LoginRequest(BaseModel):
    """Body of POST /auth/login."""
    email: str
    password: str


class ResendConfirmationRequest(BaseModel):
    """Body of POST /auth/resend-confirmation."""
    email: str


# =============================================================================
# Results
# =============================================================================

class SignupResult(BaseModel):
    """
    Outcome of a sign-up.

    The account exists but the user is not signed in until they confirm
    their email and log in.
    """
    user_id: str | None = None
    email: str
    confirmation_required: bool = True
    message: str = "Please check your email to confirm your account, then log in."


class AuthSession(BaseModel):
    """Tokens returned by a successful login."""
    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None
    expires_at: int | None = None
    user_id: str
    email: str | None = None


class UserResponse(BaseModel):
    """Response of GET /auth/me."""
    id: UUID
    email: str | None = None
