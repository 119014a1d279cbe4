from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from models.edit import EditRequest, EditErrorResponse
from services.edit_service import EditService, utc_timestamp

router = APIRouter(prefix="/edit", tags=["edit"])

def get_edit_service():
    return EditService()

@router.post("")
async def execute_edit(request: Request):
    """Edit an image with Google Gemini, falling back to local processing when no image is returned"""
    try:
        body = await request.json()
        if not isinstance(body, dict):
            body = {}
        try:
            edit_request = EditRequest.model_validate(body)
        except ValidationError:
            edit_request = EditRequest()

        if not edit_request.is_complete():
            return JSONResponse(
                status_code=400,
                content={"error": "Image URL and change summary are required"}
            )

        edit_service = get_edit_service()
        result = await edit_service.execute_edit(edit_request.image_url, edit_request.change_summary)

        return JSONResponse(content=result.model_dump(mode="json", by_alias=True, exclude_none=True))

    except Exception as e:
        print(f"❌ Edit execution error: {e}")
        error_response = EditErrorResponse(
            error=str(e) or "Failed to execute edit",
            timestamp=utc_timestamp()
        )
        return JSONResponse(status_code=500, content=error_response.model_dump())

@router.get("/health")
async def check_gemini_config():
    """Check if Gemini is properly configured"""
    gemini_service = get_edit_service().gemini_service
    has_key = bool(gemini_service.api_key)

    return {
        "configured": has_key,
        "model": gemini_service.model,
        "message": "Gemini API key configured" if has_key else "Gemini API key not set"
    }
