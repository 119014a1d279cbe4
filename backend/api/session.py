from fastapi import APIRouter, Depends, Response

from config.settings import settings
from core.auth import get_optional_user
from core.theme import THEME_COOKIE, THEME_COOKIE_MAX_AGE, get_theme
from models.session import AppMetadata, SessionResponse, Theme, ThemeUpdate
from services.auth_service import to_user_response

router = APIRouter(prefix="/session", tags=["session"])

@router.get("", response_model=SessionResponse)
async def get_session(
    theme: Theme = Depends(get_theme),
    current_user = Depends(get_optional_user)
):
    """App metadata plus the theme and auth context the UI shell is rendered with"""
    return SessionResponse(
        app=AppMetadata(
            title=settings.PROJECT_NAME,
            description=settings.DESCRIPTION,
            version=settings.VERSION
        ),
        theme=theme,
        user=to_user_response(current_user) if current_user else None
    )

@router.post("/theme")
async def set_theme(update: ThemeUpdate, response: Response):
    """Persist the selected theme in a cookie"""
    response.set_cookie(
        key=THEME_COOKIE,
        value=update.theme.value,
        max_age=THEME_COOKIE_MAX_AGE,
        samesite="lax"
    )
    return {"theme": update.theme.value}
