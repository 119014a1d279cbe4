from pydantic import BaseModel
from typing import Optional
from enum import Enum

from models.user import UserResponse

class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

class AppMetadata(BaseModel):
    title: str
    description: str
    version: str

class SessionResponse(BaseModel):
    app: AppMetadata
    theme: Theme
    user: Optional[UserResponse] = None

class ThemeUpdate(BaseModel):
    theme: Theme
