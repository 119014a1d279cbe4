"""Theme context shared by the UI shell."""
from typing import Optional
from fastapi import Cookie

from config.settings import settings
from models.session import Theme

THEME_COOKIE = "theme"
THEME_COOKIE_MAX_AGE = 60 * 60 * 24 * 365  # 1 year


def get_theme(theme: Optional[str] = Cookie(default=None)) -> Theme:
    """Dependency resolving the current theme from the cookie, falling back to the default."""
    try:
        return Theme(theme)
    except ValueError:
        return Theme(settings.DEFAULT_THEME)
