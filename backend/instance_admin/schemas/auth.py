"""
Authentication request/response schemas.
"""
from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
    """Signup request body."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class LoginRequest(BaseModel):
    """Login credentials, sent as form fields or JSON."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


class MessageResponse(BaseModel):
    """Plain acknowledgement or error message."""
    message: str = Field(..., description="Human readable message")
