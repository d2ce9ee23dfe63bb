""" Tests for core/llm_client.py, with the genai SDK replaced by a fake. """
import asyncio
from types import SimpleNamespace

import pytest

from core.errors import ModelInvocationFailure
from core.llm_client import LLMClient
from schemas.pdf_qa import AnswerResponse


def make_fake_genai(response=None, error=None, delay=0.0):
    """Build an object shaped like genai.Client exposing ``aio.models.generate_content``."""
    calls = []

    async def generate_content(model, contents, config=None):
        calls.append({"model": model, "contents": contents, "config": config})
        if delay:
            await asyncio.sleep(delay)
        if error is not None:
            raise error
        return response

    client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content)))
    return client, calls


def test_sends_document_part_then_prompt_text():
    fake, calls = make_fake_genai(response=SimpleNamespace(text='{"answer": "ok"}'))
    llm = LLMClient(api_key="k", model_name="gemini-test", timeout_seconds=5, client=fake)

    text = asyncio.run(
        llm.generate_answer(
            system_prompt="SYSTEM",
            user_messages=["Question: Q?"],
            documents=[(b"%PDF-1.4", "application/pdf")],
            response_schema=AnswerResponse,
        )
    )

    assert text == '{"answer": "ok"}'
    call = calls[0]
    assert call["model"] == "gemini-test"
    pdf_part, prompt = call["contents"]
    assert pdf_part.inline_data.data == b"%PDF-1.4"
    assert pdf_part.inline_data.mime_type == "application/pdf"
    assert prompt == "SYSTEM\n\nQuestion: Q?"
    assert call["config"].response_mime_type == "application/json"


def test_plain_text_call_has_no_config():
    fake, calls = make_fake_genai(response=SimpleNamespace(text="hello"))
    llm = LLMClient(api_key="k", model_name="m", client=fake)
    assert asyncio.run(llm.generate_answer("S", ["Q"])) == "hello"
    assert calls[0]["config"] is None
    assert calls[0]["contents"] == ["S\n\nQ"]


def test_missing_text_returns_none():
    fake, _ = make_fake_genai(response=SimpleNamespace())
    llm = LLMClient(api_key="k", model_name="m", client=fake)
    assert asyncio.run(llm.generate_answer("S", ["Q"])) is None


def test_sdk_error_becomes_model_invocation_failure():
    boom = RuntimeError("503 UNAVAILABLE")
    fake, _ = make_fake_genai(error=boom)
    llm = LLMClient(api_key="k", model_name="m", client=fake)
    with pytest.raises(ModelInvocationFailure) as info:
        asyncio.run(llm.generate_answer("S", ["Q"]))
    assert info.value.__cause__ is boom
    assert "503 UNAVAILABLE" in str(info.value)


def test_slow_model_times_out():
    fake, _ = make_fake_genai(response=SimpleNamespace(text="late"), delay=1.0)
    llm = LLMClient(api_key="k", model_name="m", timeout_seconds=0.01, client=fake)
    with pytest.raises(ModelInvocationFailure, match="timed out"):
        asyncio.run(llm.generate_answer("S", ["Q"]))
