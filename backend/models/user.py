"""User models for authentication and the sign-in / sign-up form."""
from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime
from enum import Enum


class AuthTab(str, Enum):
    SIGN_IN = "signin"
    SIGN_UP = "signup"


class SignInRequest(BaseModel):
    """Schema for sign-in."""
    email: EmailStr
    password: str


class SignUpRequest(BaseModel):
    """Schema for sign-up. The confirmation is checked before the provider is contacted."""
    email: EmailStr
    password: str
    confirm_password: str


class UserResponse(BaseModel):
    """Schema for user response."""
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    created_at: Optional[datetime] = None


class AuthError(BaseModel):
    """Error shape returned by the auth provider."""
    message: str
    code: Optional[str] = None
    status: Optional[int] = None


class AuthResult(BaseModel):
    """Success/error shape of a sign-in or sign-up call."""
    user: Optional[UserResponse] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    error: Optional[AuthError] = None


class AuthResponse(BaseModel):
    """Schema returned by the auth endpoints."""
    success: bool
    message: Optional[str] = None
    active_tab: AuthTab = AuthTab.SIGN_IN
    code: Optional[str] = None
    user: Optional[UserResponse] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
