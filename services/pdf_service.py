import logging
from typing import Any, Dict, Mapping, Sequence, Union

from pydantic import ValidationError

from core.data_uri import decode_data_uri
from core.errors import InvalidFileType, InvalidOutput, MissingInput, ModelInvocationFailure, PdfQnaError
from schemas.pdf_qa import PDF_MIME_TYPE, AnswerResponse, QuestionRequest

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_PDF = (
    "You are an AI assistant that answers questions based on the content of a PDF document. "
    "The PDF is attached to this message."
)
ANSWER_FORMAT_HINT = 'Reply with a JSON object of the form {"answer": "<your answer>"}.'

# validation error types raised by QuestionRequest that mean "wrong file"
_FILE_ERROR_TYPES = {"invalid_file_type", "invalid_data_uri", "empty_document"}


def request_error(errors: Sequence[Dict[str, Any]]) -> PdfQnaError:
    """Map QuestionRequest validation errors onto the gateway error kinds.

    Takes the ``errors()`` list of a pydantic ``ValidationError`` or of
    FastAPI's ``RequestValidationError``.
    """
    detail = "; ".join(
        f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in errors
    )
    if any(err["type"] in _FILE_ERROR_TYPES for err in errors):
        return InvalidFileType(detail)
    return MissingInput(detail)


class PdfQuestionAnswering:
    """Answers one question about one PDF with a single model call."""

    def __init__(self, llm_client: Any):
        self.llm_client = llm_client

    async def answer(
        self, request: Union[QuestionRequest, Mapping[str, Any]]
    ) -> AnswerResponse:
        if not isinstance(request, QuestionRequest):
            try:
                request = QuestionRequest.model_validate(request)
            except ValidationError as exc:
                raise request_error(exc.errors()) from exc

        pdf = decode_data_uri(request.pdf_data_uri)
        logger.info(
            "Answering question (%d chars) about a %d-byte PDF",
            len(request.question),
            len(pdf.data),
        )

        try:
            raw = await self.llm_client.generate_answer(
                system_prompt=SYSTEM_PROMPT_PDF,
                user_messages=[
                    f"Question: {request.question}",
                    ANSWER_FORMAT_HINT,
                    "Answer:",
                ],
                documents=[(pdf.data, PDF_MIME_TYPE)],
                response_schema=AnswerResponse,
            )
        except PdfQnaError:
            raise
        except Exception as e:
            logger.exception("Model client failed")
            raise ModelInvocationFailure(f"Model call failed: {e}") from e
        return self.parse_output(raw)

    @staticmethod
    def parse_output(raw: Any) -> AnswerResponse:
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            raise InvalidOutput("Model returned no content")
        try:
            if isinstance(raw, (str, bytes)):
                return AnswerResponse.model_validate_json(raw)
            return AnswerResponse.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Model output did not match the answer schema: %s", exc)
            raise InvalidOutput(f"Model output did not match the answer schema: {exc}") from exc
