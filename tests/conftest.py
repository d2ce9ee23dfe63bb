""" Shared fixtures: a tiny PDF, its data URI and a scripted stand-in for the model client. """
import base64

import pytest

from schemas.pdf_qa import AnswerResponse

SAMPLE_PDF = (
    b"%PDF-1.4\n1 0 obj<</Type/Catalog/Pages 2 0 R>>endobj\n"
    b"2 0 obj<</Type/Pages/Kids[]/Count 0>>endobj\n"
    b"trailer<</Root 1 0 R>>\n%%EOF\n"
)


class FakeLLMClient:
    """Records every call and replies with ``reply`` (or raises ``error``)."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def generate_answer(self, system_prompt, user_messages, documents=None, response_schema=None):
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_messages": user_messages,
                "documents": documents,
                "response_schema": response_schema,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply


class StubGateway:
    """Stands in for GatewayClient.ask on the UI side."""

    def __init__(self, answer="Annual Report 2023", error=None):
        self.answer = answer
        self.error = error
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return AnswerResponse(answer=self.answer)


class FakeUpload:
    """Mimics the streamlit UploadedFile surface the session reads."""

    def __init__(self, name, type, data=SAMPLE_PDF, read_error=None):
        self.name = name
        self.type = type
        self.size = len(data)
        self._data = data
        self._read_error = read_error

    def getvalue(self):
        if self._read_error is not None:
            raise self._read_error
        return self._data


@pytest.fixture
def sample_pdf():
    return SAMPLE_PDF


@pytest.fixture
def pdf_data_uri():
    return "data:application/pdf;base64," + base64.b64encode(SAMPLE_PDF).decode("ascii")
