"""Document tree and schema models for DIVA."""
from diva.models.document import (
    Alignment,
    BorderStyle,
    Cell,
    DocumentMetadata,
    DocumentType,
    InputMode,
    OutputDocument,
    PageBreak,
    Paragraph,
    Row,
    Span,
    Table,
)
from diva.models.schemas import (
    ConvertToDocxRequest,
    DocInput,
    ErrorResponse,
    GenerateMarkdownResponse,
    HealthCheckResponse,
    QuestionnaireAnswers,
)

__all__ = [
    # Document tree
    "Alignment",
    "BorderStyle",
    "Cell",
    "DocumentMetadata",
    "DocumentType",
    "InputMode",
    "OutputDocument",
    "PageBreak",
    "Paragraph",
    "Row",
    "Span",
    "Table",
    # Pydantic schemas
    "ConvertToDocxRequest",
    "DocInput",
    "ErrorResponse",
    "GenerateMarkdownResponse",
    "HealthCheckResponse",
    "QuestionnaireAnswers",
]
