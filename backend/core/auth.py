"""Authentication dependencies for bearer-token verification."""
import asyncio
from typing import Optional
from fastapi import HTTPException, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from core.supabase import get_supabase

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


async def _lookup_user(token: str):
    """
    Resolve a Supabase access token to its user.

    Raises:
        HTTPException: If the token is invalid or the provider is unreachable
    """
    try:
        user_response = await asyncio.to_thread(lambda: get_supabase().auth.get_user(token))
    except Exception as e:
        raise HTTPException(
            status_code=401,
            detail=f"Could not validate credentials: {str(e)}"
        )

    if not user_response or not user_response.user:
        raise HTTPException(
            status_code=401,
            detail="Invalid authentication credentials"
        )

    return user_response.user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Security(security)
):
    """
    Dependency to get the current authenticated user from the bearer token.

    Args:
        credentials: Bearer token from request header

    Returns:
        User object from Supabase auth

    Raises:
        HTTPException: If token is invalid or user not found
    """
    return await _lookup_user(credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security)
):
    """
    Optional authentication - returns user if authenticated, None otherwise.
    Used by the session endpoint, which works both authenticated and unauthenticated.
    """
    if not credentials:
        return None

    try:
        return await _lookup_user(credentials.credentials)
    except HTTPException:
        return None
