import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from core.data_uri import encode_data_uri
from core.errors import FileReadFailure, InvalidFileType
from core.llm_client import LLMClient, get_llm_client
from schemas.pdf_qa import PDF_MIME_TYPE, AnswerResponse, QuestionRequest
from services.pdf_service import PdfQuestionAnswering

logger = logging.getLogger(__name__)

router = APIRouter()


def get_pdf_qa_service(llm_client: LLMClient = Depends(get_llm_client)) -> PdfQuestionAnswering:
    return PdfQuestionAnswering(llm_client)


@router.post(
    "/ask",
    response_model=AnswerResponse,
    summary="Ask about a PDF",
    description="Send the PDF as a base64 data URI together with a question and get the model's answer.",
)
async def ask_pdf(
    req: QuestionRequest,
    service: PdfQuestionAnswering = Depends(get_pdf_qa_service),
):
    return await service.answer(req)


@router.post(
    "",
    response_model=AnswerResponse,
    summary="Upload a PDF and ask",
    description="Upload a PDF (multipart/form-data) with a `question` field in one request.",
)
async def upload_and_ask(
    file: UploadFile = File(...),
    question: str = Form(...),
    service: PdfQuestionAnswering = Depends(get_pdf_qa_service),
):
    if file.content_type != PDF_MIME_TYPE:
        raise InvalidFileType(f"Expected {PDF_MIME_TYPE}, got {file.content_type or 'no content type'}")
    try:
        file_bytes = await file.read()
    except OSError as e:
        logger.exception("Failed to read upload %s", file.filename)
        raise FileReadFailure(f"Could not read {file.filename}: {e}") from e

    return await service.answer(
        {
            "pdfDataUri": encode_data_uri(file_bytes, PDF_MIME_TYPE),
            "question": question,
        }
    )
