"""
Edit execution: download the source image, ask Gemini for an edited version,
and fall back to a re-encoded copy of the original (or Gemini's text) when no
image comes back.
"""
import asyncio
from datetime import datetime, timezone
from typing import Optional

from config.settings import settings
from models.edit import EditMethod, EditResponse
from services.gemini_service import GeminiService, extract_generated_images, extract_text
from services.image_fetch_service import ImageFetchService
from services.image_processing import (
    ImageProcessingError,
    describe_image,
    normalize_image,
    reencode_jpeg,
    to_data_url,
)

FALLBACK_NOTE = "Used fallback image processing - Gemini did not generate new image"
NO_IMAGE_TEXT = "No image could be generated"
FALLBACK_FAILED_ERROR = "Both Gemini and fallback processing failed"


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-01T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class EditService:
    def __init__(
        self,
        fetch_service: Optional[ImageFetchService] = None,
        gemini_service: Optional[GeminiService] = None,
        fallback_quality: Optional[int] = None
    ):
        self.fetch_service = fetch_service or ImageFetchService()
        self.gemini_service = gemini_service or GeminiService()
        self.fallback_quality = fallback_quality or settings.FALLBACK_JPEG_QUALITY

    async def execute_edit(self, image_url: str, change_summary: str) -> EditResponse:
        """
        Run one edit request end to end.

        Args:
            image_url: URL of the source image
            change_summary: Free-text edit instruction

        Returns:
            EditResponse describing which path produced the result

        Raises:
            ImageFetchError: If the image cannot be downloaded
            GeminiConfigError: If no Gemini API key is configured
            Exception: Anything raised by the Gemini client
        """
        print(f"🎨 Executing edit with Google Gemini ({self.gemini_service.model})...")
        print(f"Image URL: {image_url}")
        print(f"Change Summary: {change_summary}")

        # Step 1: Download the image
        print("📥 Downloading image...")
        fetched = await self.fetch_service.download_image(image_url)
        print(f"✅ Downloaded image, size: {len(fetched.content)} bytes")
        print(f"📄 Content-Type: {fetched.content_type}")

        # Step 2: Normalize with Pillow, keep the original bytes if that fails
        try:
            info = await asyncio.to_thread(describe_image, fetched.content)
            print(f"🖼️ Image info: {info['format']} {info['width']}x{info['height']} {info['bands']} channels")
            processed_image = await asyncio.to_thread(normalize_image, fetched.content)
        except ImageProcessingError as e:
            print(f"❌ Image processing error: {e}")
            processed_image = fetched.content

        # Step 3: Send to Gemini
        print("🤖 Sending to Google Gemini...")
        response = await self.gemini_service.generate_edit(
            change_summary,
            processed_image,
            fetched.content_type
        )
        print("✅ Received response from Google Gemini")

        # Step 4: Collect generated images
        generated_images = extract_generated_images(response)

        if not generated_images:
            print("⚠️ No images were generated, trying fallback processing...")
            return await self._fallback(fetched.content, response)

        print(f"🎉 Success! Generated {len(generated_images)} image(s)")
        return EditResponse(
            ok=True,
            edited=generated_images[0],
            method=EditMethod.GOOGLE_GEMINI,
            has_image_data=True,
            generated_images=generated_images,
            timestamp=utc_timestamp()
        )

    async def _fallback(self, original_image: bytes, response) -> EditResponse:
        try:
            print("🔧 Applying fallback image processing with Pillow...")
            fallback_bytes = await asyncio.to_thread(reencode_jpeg, original_image, self.fallback_quality)
            fallback_image = to_data_url(fallback_bytes, "image/jpeg")
            print("✅ Fallback processing completed")

            return EditResponse(
                ok=True,
                edited=fallback_image,
                method=EditMethod.SHARP_FALLBACK,
                has_image_data=True,
                generated_images=[fallback_image],
                timestamp=utc_timestamp(),
                note=FALLBACK_NOTE
            )
        except ImageProcessingError as e:
            print(f"❌ Fallback processing failed: {e}")

            return EditResponse(
                ok=True,
                edited=extract_text(response) or NO_IMAGE_TEXT,
                method=EditMethod.TEXT_RESPONSE,
                has_image_data=False,
                generated_images=[],
                timestamp=utc_timestamp(),
                error=FALLBACK_FAILED_ERROR
            )
