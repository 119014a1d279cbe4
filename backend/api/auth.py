"""Authentication API endpoints."""
from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.responses import JSONResponse

from core.auth import get_current_user
from models.user import (
    AuthResponse,
    AuthTab,
    SignInRequest,
    SignUpRequest,
    UserResponse
)
from services.auth_form_service import AuthForm
from services.auth_service import AuthService, to_user_response

router = APIRouter(prefix="/auth", tags=["Authentication"])


def get_auth_service() -> AuthService:
    return AuthService()


def _success_response(form: AuthForm, message=None) -> AuthResponse:
    result = form.result
    return AuthResponse(
        success=True,
        message=message,
        active_tab=form.active_tab,
        user=result.user,
        access_token=result.access_token,
        refresh_token=result.refresh_token,
        expires_in=result.expires_in
    )


@router.post("/signin", response_model=AuthResponse)
async def sign_in(
    credentials: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Sign in with email and password.

    Args:
        credentials: User login credentials (email, password)
        auth_service: Auth provider wrapper

    Returns:
        AuthResponse with tokens and user data

    Raises:
        HTTPException: 401 with the provider's message if sign-in fails
    """
    form = AuthForm(auth_service)
    form.open()
    form.email = credentials.email
    form.password = credentials.password

    await form.submit_sign_in()

    if form.alert:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=form.alert
        )

    return _success_response(form)


@router.post("/signup", response_model=AuthResponse)
async def sign_up(
    user_data: SignUpRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a new user.

    A mismatched confirmation is rejected before the provider is called. An
    already registered email answers 409 and tells the client to switch to the
    sign-in tab.

    Raises:
        HTTPException: 400 on mismatch or provider error
    """
    form = AuthForm(auth_service)
    form.open()
    form.change_tab(AuthTab.SIGN_UP)
    form.email = user_data.email
    form.password = user_data.password
    form.confirm_password = user_data.confirm_password

    result = await form.submit_sign_up()

    if result is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=form.alert
        )

    if form.user_exists_message:
        return _conflict_response(form, result.error.code)

    if result.error:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Registration failed: {form.alert}"
        )

    return _success_response(form, message=form.alert)


def _conflict_response(form: AuthForm, code):
    body = AuthResponse(
        success=False,
        message=form.user_exists_message,
        active_tab=form.active_tab,
        code=code
    )
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=body.model_dump(mode="json"))


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user = Depends(get_current_user)
):
    """
    Get current authenticated user information.

    Args:
        current_user: Current authenticated user from the bearer token

    Returns:
        UserResponse with user data
    """
    return to_user_response(current_user)
