from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List
from urllib.parse import urlparse

class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # API Settings
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "Fixtral - AI Photoshop Assistant"
    DESCRIPTION: str = "Automate image edits from Reddit's r/PhotoshopRequest using AI"
    VERSION: str = "1.0.0"

    # Server Settings
    PORT: int = 8000

    # Auth provider - Supabase
    SUPABASE_URL: Optional[str] = None
    SUPABASE_KEY: Optional[str] = None

    # External APIs
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_IMAGE_MODEL: str = "gemini-2.5-flash-image-preview"

    # Image download
    IMAGE_FETCH_TIMEOUT: float = 30.0  # seconds
    IMAGE_FETCH_USER_AGENT: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

    # Fallback processing
    FALLBACK_JPEG_QUALITY: int = 90

    # Hosts the image proxy may serve from
    ALLOWED_IMAGE_DOMAINS: List[str] = [
        "i.redd.it",
        "preview.redd.it",
        "external-preview.redd.it",
        "b.thumbs.redditmedia.com",
        "a.thumbs.redditmedia.com",
        "imgur.com",
        "i.imgur.com",
    ]

    # CORS Settings
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173"
    ]

    # UI
    DEFAULT_THEME: str = "dark"

    def missing_settings(self) -> List[str]:
        """Return the names of required settings that are not configured."""
        required_fields = ["GEMINI_API_KEY", "SUPABASE_URL", "SUPABASE_KEY"]
        return [field for field in required_fields if not getattr(self, field, None)]

    def is_allowed_image_host(self, url: str) -> bool:
        """Check that a URL is http(s) and points at one of the allowed image hosts."""
        try:
            parsed = urlparse(url)
        except ValueError:
            return False
        if parsed.scheme not in ("http", "https"):
            return False
        return (parsed.hostname or "").lower() in self.ALLOWED_IMAGE_DOMAINS

# Global settings instance
settings = Settings()
