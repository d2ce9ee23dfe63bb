from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from core.data_uri import DataUriError, decode_data_uri

PDF_MIME_TYPE = "application/pdf"


class QuestionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pdf_data_uri: str = Field(
        ...,
        alias="pdfDataUri",
        min_length=1,
        description=(
            "The PDF document, as a data URI that must include a MIME type and use Base64 "
            "encoding. Expected format: 'data:<mimetype>;base64,<encoded_data>'."
        ),
    )
    question: str = Field(..., min_length=1, description="The question about the PDF content.")

    @field_validator("pdf_data_uri")
    @classmethod
    def must_be_pdf_data_uri(cls, value: str) -> str:
        try:
            decoded = decode_data_uri(value)
        except DataUriError as exc:
            raise PydanticCustomError("invalid_data_uri", "{reason}", {"reason": str(exc)})
        if decoded.mime_type != PDF_MIME_TYPE:
            raise PydanticCustomError(
                "invalid_file_type",
                "expected an application/pdf data URI, got {mime_type}",
                {"mime_type": decoded.mime_type},
            )
        if not decoded.data:
            raise PydanticCustomError("empty_document", "the PDF data URI carries no bytes")
        return value

    @field_validator("question")
    @classmethod
    def must_not_be_blank(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("blank_question", "question must not be blank")
        return value


class AnswerResponse(BaseModel):
    answer: str = Field(..., description="The answer to the question.")
