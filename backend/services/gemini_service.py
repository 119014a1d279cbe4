import base64
from typing import Any, List, Optional

from google import genai
from google.genai import types

from config.settings import settings


class GeminiConfigError(Exception):
    """Raised when Gemini is called without an API key."""


class GeminiService:
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_IMAGE_MODEL
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if not self.api_key:
            raise GeminiConfigError("Gemini API key not configured")
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate_edit(self, instruction: str, image_bytes: bytes, mime_type: str) -> Any:
        """Send the instruction and image to Gemini and return the raw response"""
        client = self._get_client()
        image_part = types.Part.from_bytes(data=image_bytes, mime_type=mime_type)

        return await client.aio.models.generate_content(
            model=self.model,
            contents=[instruction, image_part]
        )


def _response_parts(response: Any) -> List[Any]:
    candidates = getattr(response, 'candidates', None) or []
    if not candidates:
        return []
    content = getattr(candidates[0], 'content', None)
    if content is None:
        return []
    return list(getattr(content, 'parts', None) or [])


def _to_base64(data: Any) -> Optional[str]:
    if isinstance(data, (bytes, bytearray)):
        return base64.b64encode(bytes(data)).decode('ascii')
    if isinstance(data, str) and data:
        # Already base64 encoded
        return data
    return None


def extract_generated_images(response: Any) -> List[str]:
    """Collect every inline image of the first candidate as a data URL"""
    parts = _response_parts(response)
    if parts:
        print(f"📦 Found {len(parts)} parts in response")

    images = []
    for part in parts:
        text = getattr(part, 'text', None)
        inline = getattr(part, 'inline_data', None)
        if text:
            print(f"📝 Text response: {text}")
        elif inline is not None:
            encoded = _to_base64(getattr(inline, 'data', None))
            if not encoded:
                continue
            mime_type = getattr(inline, 'mime_type', None) or 'image/png'
            images.append(f"data:{mime_type};base64,{encoded}")
            print(f"✅ Generated image: {mime_type}, size: {len(encoded)} chars")
    return images


def extract_text(response: Any) -> Optional[str]:
    """Join the text parts of the first candidate, if any"""
    texts = [part.text for part in _response_parts(response) if getattr(part, 'text', None)]
    return "".join(texts) if texts else None
