"""Pydantic schemas for authentication results."""

from pydantic import BaseModel


class RegisterResponse(BaseModel):
    """Response model for user registration."""
    user_id: str
    username: str


class LoginResponse(BaseModel):
    """Response model for user login."""
    token: str
    user_id: str
    username: str
