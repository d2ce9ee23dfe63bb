import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import settings
from core.errors import PdfQnaError
from core.logging_config import setup_logging
from routers.pdf_router import router as pdf_router
from services.pdf_service import request_error

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="PDF Insight API",
    description="Upload a PDF and ask questions about its content.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(pdf_router, prefix="/pdf-qa", tags=["pdf-qa"])


@app.exception_handler(PdfQnaError)
async def pdf_qna_error_handler(request: Request, exc: PdfQnaError):
    logger.warning("%s on %s: %s", exc.kind, request.url.path, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "ok": False,
            "kind": exc.kind,
            "error": exc.title,
            "detail": str(exc),
        },
    )


# body validation runs before the gateway; answer with the same error kinds
@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return await pdf_qna_error_handler(request, request_error(exc.errors()))


@app.get("/")
def root():
    return {
        "name": "PDF Insight API",
        "desc": "Upload a PDF document and ask questions about its content",
        "version": app.version,
        "ok": True,
    }


@app.get("/health")
def health():
    return {"status": "ok"}
