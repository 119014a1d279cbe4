"""
Thin wrapper around Supabase Auth.

Calls never raise: provider failures are returned in AuthResult.error so the
form flow can decide what to show.
"""
import asyncio
from typing import Any, Optional

from core.supabase import get_supabase
from models.user import AuthError, AuthResult, UserResponse

# Error codes Supabase Auth uses for an email that is already registered
USER_EXISTS_CODES = {"user_already_exists", "email_exists"}
USER_EXISTS_CODE = "user_already_exists"


def is_user_exists_error(error: Optional[AuthError]) -> bool:
    return error is not None and error.code in USER_EXISTS_CODES


def to_user_response(user: Any) -> UserResponse:
    user_metadata = getattr(user, 'user_metadata', None) or {}
    return UserResponse(
        id=str(user.id),
        email=getattr(user, 'email', None),
        full_name=user_metadata.get("full_name"),
        created_at=getattr(user, 'created_at', None)
    )


def _to_auth_error(error: Exception) -> AuthError:
    return AuthError(
        message=getattr(error, 'message', None) or str(error) or "Authentication failed",
        code=getattr(error, 'code', None),
        status=getattr(error, 'status', None)
    )


def _to_auth_result(auth_response: Any) -> AuthResult:
    user = getattr(auth_response, 'user', None)
    session = getattr(auth_response, 'session', None)
    return AuthResult(
        user=to_user_response(user) if user else None,
        access_token=getattr(session, 'access_token', None),
        refresh_token=getattr(session, 'refresh_token', None),
        expires_in=getattr(session, 'expires_in', None)
    )


class AuthService:
    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = get_supabase()
        return self._client

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """Sign in with email and password"""
        try:
            auth_response = await asyncio.to_thread(
                lambda: self.client.auth.sign_in_with_password({
                    "email": email,
                    "password": password
                })
            )
        except Exception as e:
            print(f"❌ Sign-in failed: {e}")
            return AuthResult(error=_to_auth_error(e))

        if not getattr(auth_response, 'user', None):
            return AuthResult(error=AuthError(message="Invalid login credentials", code="invalid_credentials"))

        return _to_auth_result(auth_response)

    async def sign_up(self, email: str, password: str) -> AuthResult:
        """Register a new account; Supabase sends the confirmation email"""
        try:
            auth_response = await asyncio.to_thread(
                lambda: self.client.auth.sign_up({
                    "email": email,
                    "password": password
                })
            )
        except Exception as e:
            print(f"❌ Sign-up failed: {e}")
            return AuthResult(error=_to_auth_error(e))

        user = getattr(auth_response, 'user', None)
        if not user:
            return AuthResult(error=AuthError(message="User registration failed"))

        # With email confirmation enabled Supabase answers a duplicate sign-up
        # with a placeholder user that has no identities instead of an error.
        identities = getattr(user, 'identities', None)
        if identities is not None and len(identities) == 0:
            return AuthResult(error=AuthError(
                message="User already registered",
                code=USER_EXISTS_CODE,
                status=422
            ))

        return _to_auth_result(auth_response)
