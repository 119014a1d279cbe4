"""
Unit tests for Gemini response parsing and client setup
"""
import base64
import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

from services.gemini_service import (
    GeminiConfigError,
    GeminiService,
    extract_generated_images,
    extract_text,
)


@pytest.mark.unit
class TestExtractGeneratedImages:

    def test_bytes_are_base64_encoded(self, gemini):
        response = gemini.response(gemini.image(b"abc", "image/webp"))

        assert extract_generated_images(response) == [
            "data:image/webp;base64," + base64.b64encode(b"abc").decode()
        ]

    def test_base64_strings_are_used_as_is(self, gemini):
        response = gemini.response(gemini.image("YWJj", "image/png"))

        assert extract_generated_images(response) == ["data:image/png;base64,YWJj"]

    def test_text_parts_are_skipped(self, gemini):
        response = gemini.response(gemini.text("hello"), gemini.image(b"x"), gemini.text("bye"))

        assert len(extract_generated_images(response)) == 1

    def test_empty_inline_data_is_skipped(self, gemini):
        response = gemini.response(gemini.image(None), gemini.image(b""))

        assert extract_generated_images(response) == []

    @pytest.mark.parametrize("response", [
        None,
        SimpleNamespace(candidates=None),
        SimpleNamespace(candidates=[]),
        SimpleNamespace(candidates=[SimpleNamespace(content=None)]),
        SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=None))]),
    ])
    def test_missing_fields_yield_no_images(self, response):
        assert extract_generated_images(response) == []

    def test_only_first_candidate_is_used(self, gemini):
        response = SimpleNamespace(candidates=[
            SimpleNamespace(content=SimpleNamespace(parts=[gemini.text("no image here")])),
            SimpleNamespace(content=SimpleNamespace(parts=[gemini.image(b"ignored")])),
        ])

        assert extract_generated_images(response) == []


@pytest.mark.unit
class TestExtractText:

    def test_joins_text_parts(self, gemini):
        response = gemini.response(gemini.text("Sorry, "), gemini.image(b"x"), gemini.text("no edit."))

        assert extract_text(response) == "Sorry, no edit."

    def test_returns_none_without_text(self, gemini):
        assert extract_text(gemini.response(gemini.image(b"x"))) is None
        assert extract_text(None) is None


@pytest.mark.unit
@pytest.mark.asyncio
class TestGeminiService:

    async def test_missing_api_key_raises(self):
        service = GeminiService(api_key="")

        with pytest.raises(GeminiConfigError):
            await service.generate_edit("brighten", b"img", "image/jpeg")

    async def test_generate_edit_sends_instruction_and_image(self):
        fake_client = MagicMock()
        fake_client.aio.models.generate_content = AsyncMock(return_value="response")

        with patch('services.gemini_service.genai.Client', return_value=fake_client) as mock_client:
            service = GeminiService(api_key="test-key", model="test-model")
            result = await service.generate_edit("brighten", b"img", "image/jpeg")

        assert result == "response"
        mock_client.assert_called_once_with(api_key="test-key")

        kwargs = fake_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "test-model"
        instruction, image_part = kwargs["contents"]
        assert instruction == "brighten"
        assert image_part.inline_data.data == b"img"
        assert image_part.inline_data.mime_type == "image/jpeg"
