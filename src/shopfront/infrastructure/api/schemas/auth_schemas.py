"""Pydantic schemas for authentication endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request body for user registration."""

    username: str = Field(..., min_length=3, max_length=64, description="Login name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=8, max_length=1024, description="User's password")


class LoginRequest(BaseModel):
    """Request body for login."""

    username: str = Field(..., min_length=1, description="Username or email address")
    password: str = Field(..., max_length=1024, description="User's password")


class UserResponse(BaseModel):
    """Public user information. The password hash is never included."""

    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Login name")
    email: str = Field(..., description="User's email address")
    created_at: datetime = Field(..., description="When the user was created")

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Response for successful authentication (login/register)."""

    token: str = Field(..., description="Signed bearer token")
    token_type: str = Field(default="Bearer", description="Authorization scheme")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse = Field(..., description="User information")


class ErrorResponse(BaseModel):
    """Generic error body."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")


class ConflictErrorResponse(ErrorResponse):
    """Response for conflict errors (duplicate resources)."""

    field: str = Field(..., description="Field that caused the conflict")
