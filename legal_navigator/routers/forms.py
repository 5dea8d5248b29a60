"""Form document endpoints"""
from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import Response
import logging

from legal_navigator.config import get_settings
from legal_navigator.dependencies import get_turn_processor
from legal_navigator.models.forms import GeneratePdfRequest
from legal_navigator.services.pdf_service import render_appearance_form
from legal_navigator.services.turn_processor import TurnProcessor

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_class=Response)
async def generate_pdf(
    request: GeneratePdfRequest,
    processor: TurnProcessor = Depends(get_turn_processor)
):
    """Render the collected form data as a downloadable PDF (PUBLIC endpoint)"""
    if request.form_data is None:
        raise HTTPException(status_code=400, detail="Form data is required")

    try:
        pdf_bytes = render_appearance_form(request.form_data)
    except Exception as e:
        logger.error(f"PDF generation error: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    if request.conversation_id:
        try:
            processor.record_pdf_generated(request.conversation_id)
        except Exception as e:
            # Download still succeeds when the flag update fails
            logger.error(f"Failed to mark PDF generated for {request.conversation_id}: {e}")

    filename = get_settings().pdf_filename
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
