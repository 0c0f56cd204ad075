"""
Pydantic schemas for request/response validation.

Request models accept the camelCase keys the browser form posts
(``appName``, ``companyName``, ``formData`` ...) as well as snake_case.
"""
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime

from diva.models.document import DocumentMetadata, DocumentType, InputMode
from diva.utils.helpers import split_developers


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Questionnaire
class QuestionnaireAnswers(_CamelModel):
    """Yes/no answers that decide which optional guide sections are requested."""

    include_mobile_frontend: bool = False
    is_containerized: bool = False
    include_api_testing: bool = False
    consumes_external_apis: bool = False


# Form
class DocInput(_CamelModel):
    """Everything the form collects about the project."""

    # Basic Information
    app_name: Optional[str] = None
    description: Optional[str] = None
    company_name: Optional[str] = None

    # Tools & Technologies
    backend_tech: Optional[str] = None
    frontend_web_tech: Optional[str] = None
    frontend_mobile_tech: Optional[str] = None
    database: Optional[str] = None
    build_tool: Optional[str] = None
    version_control: Optional[str] = None
    containerization_tool: Optional[str] = None
    ai_integration: Optional[str] = None
    testing_tool: Optional[str] = None
    ide: Optional[str] = None

    # Step by Step Instructions
    github_instructions: Optional[str] = None
    database_instructions: Optional[str] = None
    external_api_instructions: Optional[str] = None
    backend_instructions: Optional[str] = None
    frontend_web_instructions: Optional[str] = None
    frontend_mobile_instructions: Optional[str] = None
    api_testing_instructions: Optional[str] = None

    # Team Information
    developers: Optional[str] = None
    project_manager: Optional[str] = None

    document_type: DocumentType = DocumentType.DEV_SETUP
    questionnaire: QuestionnaireAnswers = Field(default_factory=QuestionnaireAnswers)

    def to_metadata(self, document_type: Optional[DocumentType] = None) -> DocumentMetadata:
        """Title-page metadata for this form."""
        return DocumentMetadata(
            application_name=(self.app_name or "").strip(),
            document_type=document_type or self.document_type,
            institution_name=self.company_name,
            developers=tuple(split_developers(self.developers)),
            supervisor_name=self.project_manager,
        )


class GenerateMarkdownResponse(BaseModel):
    """Schema for generated Markdown."""

    markdown: str
    timestamp: datetime


class ConvertToDocxRequest(_CamelModel):
    """
    Schema for Markdown → DOCX conversion.

    ``markdown`` and ``form_data`` are optional here so the route can answer
    a missing pair with its own 400 message instead of a generic 422.
    """

    markdown: Optional[str] = None
    form_data: Optional[DocInput] = None
    document_type: Optional[DocumentType] = None
    input_mode: InputMode = InputMode.MARKDOWN


# Errors
class ErrorResponse(BaseModel):
    """Body returned for every handled error."""

    error: str
    details: List[str] = Field(default_factory=list)


# Health
class HealthCheckResponse(BaseModel):
    """Schema for health check response."""

    status: str
    llm_provider: str
    model: str
    timestamp: datetime
