from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from enum import Enum

class EditMethod(str, Enum):
    GOOGLE_GEMINI = "google_gemini"
    SHARP_FALLBACK = "sharp_fallback"
    TEXT_RESPONSE = "text_response"

class EditRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    change_summary: Optional[str] = Field(default=None, alias="changeSummary")

    def is_complete(self) -> bool:
        return bool(self.image_url) and bool(self.change_summary)

class EditResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool
    edited: str  # Data URL, or Gemini's text when no image could be produced
    method: EditMethod
    has_image_data: bool = Field(alias="hasImageData")
    generated_images: List[str] = Field(default_factory=list, alias="generatedImages")
    timestamp: str
    note: Optional[str] = None
    error: Optional[str] = None

class EditErrorResponse(BaseModel):
    ok: bool = False
    error: str
    timestamp: str
