"""
Guide generation endpoints.

Routes
------
POST /api/generate-markdown  — form fields → prompt → LLM → {markdown, timestamp}
POST /api/generate           — same, then converted straight to a .docx download
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response

from diva.exceptions import ValidationError
from diva.models.document import InputMode
from diva.models.schemas import DocInput, ErrorResponse, GenerateMarkdownResponse
from diva.routers.convert import build_guide_response
from diva.services.docx_writer import DOCX_MEDIA_TYPE
from diva.services.llm_client import OpenAITextGenerator, get_text_generator
from diva.services.prompts import generate_doc_prompt, validate_doc_input

logger = logging.getLogger(__name__)

router = APIRouter()


async def _generate_markdown(data: DocInput, generator: OpenAITextGenerator) -> str:
    errors = validate_doc_input(data)
    if errors:
        raise ValidationError(errors[0], errors)

    prompt = generate_doc_prompt(data)
    logger.info(
        "Generating %s for '%s' (prompt: %d chars)",
        data.document_type.value,
        data.app_name,
        len(prompt),
    )
    return await generator.generate(prompt)


# ---------------------------------------------------------------------------
# POST /generate-markdown
# ---------------------------------------------------------------------------

@router.post(
    "/generate-markdown",
    response_model=GenerateMarkdownResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_markdown(
    data: DocInput,
    generator: OpenAITextGenerator = Depends(get_text_generator),
):
    """Ask the text-generation provider to write the guide as Markdown."""
    markdown = await _generate_markdown(data, generator)
    return GenerateMarkdownResponse(markdown=markdown, timestamp=datetime.now(timezone.utc))


# ---------------------------------------------------------------------------
# POST /generate: one-shot generation + conversion
# ---------------------------------------------------------------------------

@router.post(
    "/generate",
    response_class=Response,
    responses={
        200: {"content": {DOCX_MEDIA_TYPE: {}}},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def generate_document(
    data: DocInput,
    generator: OpenAITextGenerator = Depends(get_text_generator),
):
    """
    Generate the guide and return it as a .docx in a single call.

    The completion is transcoded in raw mode: leading ``#`` runs are
    stripped so headings written with Markdown markers still render.
    """
    text = await _generate_markdown(data, generator)
    return build_guide_response(text, data, input_mode=InputMode.RAW)
