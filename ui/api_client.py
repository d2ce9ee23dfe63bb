import logging
from typing import Optional

import requests
from pydantic import ValidationError

from core.config import settings
from core.errors import InvalidOutput, ModelInvocationFailure, PdfQnaError, error_from_kind
from schemas.pdf_qa import AnswerResponse, QuestionRequest

logger = logging.getLogger(__name__)


class GatewayClient:
    """Calls the PDF Insight API on behalf of the Streamlit page."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        http: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout_seconds = timeout_seconds or settings.API_TIMEOUT_SECONDS
        self.http = http or requests.Session()

    def ask(self, request: QuestionRequest) -> AnswerResponse:
        url = f"{self.base_url}/pdf-qa/ask"
        try:
            response = self.http.post(
                url,
                json=request.model_dump(by_alias=True),
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            logger.error("POST %s failed: %s", url, e)
            raise ModelInvocationFailure(f"Could not reach {url}: {e}") from e

        if response.status_code >= 400:
            raise self._error_from_response(response)

        try:
            return AnswerResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise InvalidOutput(f"Unexpected answer payload from {url}: {e}") from e

    @staticmethod
    def _error_from_response(response: requests.Response) -> PdfQnaError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        detail = body.get("detail") or f"HTTP {response.status_code}"
        if not isinstance(detail, str):
            # FastAPI's 422 body lists the failing fields
            detail = str(detail)
        if body.get("kind"):
            return error_from_kind(body["kind"], detail)
        return ModelInvocationFailure(f"API returned HTTP {response.status_code}: {detail}")
