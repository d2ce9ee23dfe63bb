"""Upload/ask state for one user of the PDF Q&A page.

``PdfQnaSession`` holds everything the page shows and enforces the rules
between states; rendering lives in ``ui/streamlit_app.py``. The gateway is
any callable taking a ``QuestionRequest`` and returning an ``AnswerResponse``
(``GatewayClient.ask`` in production, a stub in tests).

Each submission is tagged with a sequence number. A response only lands if
its number is still the latest, so an answer that arrives after a newer
question (or after the PDF was removed) is dropped.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

from core.data_uri import encode_data_uri
from schemas.pdf_qa import PDF_MIME_TYPE, AnswerResponse, QuestionRequest

logger = logging.getLogger(__name__)

Gateway = Callable[[QuestionRequest], AnswerResponse]


class SurfaceState(str, Enum):
    EMPTY = "empty"
    UPLOADING = "uploading"
    UPLOADED = "uploaded"
    ASKING = "asking"
    ANSWERED = "answered"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    destructive: bool = False


@dataclass(frozen=True)
class PendingAsk:
    sequence: int
    request: QuestionRequest


class PdfQnaSession:
    def __init__(self, gateway: Gateway):
        self.gateway = gateway
        self.state = SurfaceState.EMPTY
        self.pdf_name: Optional[str] = None
        self.pdf_data_uri: Optional[str] = None
        self.question = ""
        self.answer = ""
        self._notifications: List[Notification] = []
        self._sequence = 0

    # --- indicators -----------------------------------------------------

    @property
    def has_document(self) -> bool:
        return self.pdf_data_uri is not None

    @property
    def is_uploading(self) -> bool:
        return self.state == SurfaceState.UPLOADING

    @property
    def is_loading(self) -> bool:
        return self.state == SurfaceState.ASKING

    @property
    def can_ask(self) -> bool:
        return self.has_document and not self.is_loading

    def notify(self, title: str, description: str, destructive: bool = False) -> None:
        self._notifications.append(Notification(title, description, destructive))

    def pop_notifications(self) -> List[Notification]:
        pending, self._notifications = self._notifications, []
        return pending

    # --- document -------------------------------------------------------

    def load_file(self, file: Any) -> bool:
        """Accept an uploaded file (``name``, ``type``, ``getvalue()``).

        Only the declared MIME type is checked; the bytes are not sniffed.
        """
        if file is None:
            return False
        if getattr(file, "type", None) != PDF_MIME_TYPE:
            self.notify("Invalid File Type", "Please upload a PDF file.", destructive=True)
            return False

        previous_state = self.state
        self.state = SurfaceState.UPLOADING
        try:
            data = file.getvalue()
            if not data:
                raise OSError("file is empty")
            data_uri = encode_data_uri(data, PDF_MIME_TYPE)
        except Exception:
            logger.exception("Failed to read %s", getattr(file, "name", "upload"))
            self.state = previous_state
            self.notify("File Read Error", "There was an error reading the file.", destructive=True)
            return False

        # a new document makes any answer (and pending request) about the old one stale
        self._sequence += 1
        self.pdf_name = file.name
        self.pdf_data_uri = data_uri
        self.answer = ""
        self.state = SurfaceState.UPLOADED
        self.notify("PDF Uploaded", f"{file.name} is ready for questions.")
        return True

    def remove_document(self) -> None:
        self._sequence += 1
        self.pdf_name = None
        self.pdf_data_uri = None
        self.question = ""
        self.answer = ""
        self.state = SurfaceState.EMPTY
        self.notify("PDF Removed", "You can now upload a new PDF.")

    # --- asking ---------------------------------------------------------

    def set_question(self, text: str) -> None:
        self.question = text or ""

    def begin_ask(self) -> Optional[PendingAsk]:
        if not self.has_document:
            self.notify("No PDF Uploaded", "Please upload a PDF to ask questions.", destructive=True)
            return None
        if not self.question.strip():
            self.notify("No Question Asked", "Please enter a question.", destructive=True)
            return None

        self._sequence += 1
        self.state = SurfaceState.ASKING
        request = QuestionRequest(pdfDataUri=self.pdf_data_uri, question=self.question)
        return PendingAsk(sequence=self._sequence, request=request)

    def is_current(self, pending: PendingAsk) -> bool:
        return pending.sequence == self._sequence

    def finish_ask(self, pending: PendingAsk, result: AnswerResponse) -> bool:
        if not self.is_current(pending):
            logger.info("Dropping stale answer for request #%d", pending.sequence)
            return False
        self.answer = result.answer
        self.state = SurfaceState.ANSWERED
        return True

    def fail_ask(self, pending: PendingAsk, error: BaseException) -> bool:
        if not self.is_current(pending):
            logger.info("Dropping stale failure for request #%d: %s", pending.sequence, error)
            return False
        logger.error("Question #%d failed: %s", pending.sequence, error)
        self.state = SurfaceState.ERROR
        self.notify("An Error Occurred", "Failed to get an answer. Please try again.", destructive=True)
        return True

    def submit(self) -> bool:
        """Ask the current question. Returns True when an answer was shown."""
        pending = self.begin_ask()
        if pending is None:
            return False
        try:
            result = self.gateway(pending.request)
        except Exception as e:
            self.fail_ask(pending, e)
            return False
        return self.finish_ask(pending, result)
