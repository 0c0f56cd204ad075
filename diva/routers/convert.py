"""
Markdown → DOCX conversion endpoint.

Routes
------
POST /api/convert-to-docx  — generated Markdown + form metadata → .docx download
"""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Response

from diva.exceptions import SerializationError, ValidationError
from diva.models.document import DocumentType, InputMode
from diva.models.schemas import ConvertToDocxRequest, DocInput, ErrorResponse
from diva.services.docx_writer import DOCX_MEDIA_TYPE, render_docx
from diva.services.transcoder import Transcoder
from diva.utils.helpers import build_docx_filename

logger = logging.getLogger(__name__)

router = APIRouter()


def build_guide_response(
    markdown: str,
    form: DocInput,
    document_type: Optional[DocumentType] = None,
    input_mode: InputMode = InputMode.MARKDOWN,
    today: Optional[date] = None,
) -> Response:
    """
    Transcode *markdown*, serialize it and wrap it as a download.

    Raises:
        SerializationError: transcoding or packaging failed.
    """
    doc_type = document_type or form.document_type
    metadata = form.to_metadata(doc_type)

    try:
        document = Transcoder(mode=input_mode).transcode(markdown, metadata, today=today)
    except Exception as exc:
        logger.error("build_guide_response: transcoding failed — %s", exc, exc_info=True)
        raise SerializationError("Failed to convert to DOCX", [str(exc)]) from exc

    payload = render_docx(document)
    filename = build_docx_filename(metadata.application_name, doc_type.value, today)
    logger.info("Built %s (%d bytes)", filename, len(payload))

    return Response(
        content=payload,
        media_type=DOCX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Cache-Control": "no-cache",
        },
    )


# ---------------------------------------------------------------------------
# POST /convert-to-docx
# ---------------------------------------------------------------------------

@router.post(
    "/convert-to-docx",
    response_class=Response,
    responses={
        200: {"content": {DOCX_MEDIA_TYPE: {}}},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def convert_to_docx(request: ConvertToDocxRequest):
    """
    Convert generated Markdown into a styled Word document.

    ``markdown`` and ``formData`` must both be present; ``documentType``
    falls back to the form's own document type.
    """
    if not request.markdown or request.form_data is None:
        raise ValidationError("Markdown content and form data are required")

    return build_guide_response(
        request.markdown,
        request.form_data,
        document_type=request.document_type,
        input_mode=request.input_mode,
    )
