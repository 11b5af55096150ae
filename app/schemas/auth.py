"""
Pydantic models for Auth request validation.
"""

from typing import Optional
from pydantic import BaseModel, Field, EmailStr


class SignupRequest(BaseModel):
    """Request body for account creation."""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class LoginRequest(BaseModel):
    """Request body for login."""
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class ForgotPasswordRequest(BaseModel):
    """Request body for requesting a password reset token."""
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Request body for completing a password reset."""
    token: str = Field(..., min_length=1, max_length=256, description="Raw reset token")
    password: str = Field(..., min_length=1, max_length=128, description="New password")


class UserResponse(BaseModel):
    """Account fields returned to the account owner."""
    id: str
    name: str
    email: str
    tier: str
    currency: Optional[str] = None
    createdAt: Optional[str] = None
