import asyncio
import logging
from functools import lru_cache
from typing import Any, List, Optional, Sequence, Tuple

from google import genai
from google.genai import types

from core.config import settings
from core.errors import ModelInvocationFailure

logger = logging.getLogger(__name__)

# (raw bytes, mime type) pairs sent inline next to the prompt text
Document = Tuple[bytes, str]


class LLMClient:
    def __init__(
        self,
        api_key: str,
        model_name: str,
        timeout_seconds: Optional[float] = None,
        client: Optional[Any] = None,
    ):
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds
        self._client = client if client is not None else genai.Client(api_key=api_key or None)

    def build_contents(
        self,
        system_prompt: str,
        user_messages: List[str],
        documents: Optional[Sequence[Document]] = None,
    ) -> list:
        parts: list = [
            types.Part.from_bytes(data=data, mime_type=mime_type)
            for data, mime_type in (documents or [])
        ]
        parts.append("\n\n".join([system_prompt, *user_messages]))
        return parts

    async def generate_answer(
        self,
        system_prompt: str,
        user_messages: List[str],
        documents: Optional[Sequence[Document]] = None,
        response_schema: Optional[Any] = None,
    ) -> Optional[str]:
        """
        system_prompt: role instructions, placed before the messages
        user_messages: question and context lines, in order
        documents: files attached inline (e.g. the PDF)
        response_schema: when set, the model is asked for JSON of that shape
        return: raw text of the model response (may be None)
        """
        config = None
        if response_schema is not None:
            config = types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=response_schema,
            )

        contents = self.build_contents(system_prompt, user_messages, documents)
        try:
            resp = await asyncio.wait_for(
                self._client.aio.models.generate_content(
                    model=self.model_name,
                    contents=contents,
                    config=config,
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error("Model %s timed out after %ss", self.model_name, self.timeout_seconds)
            raise ModelInvocationFailure(
                f"Model call timed out after {self.timeout_seconds}s"
            ) from e
        except Exception as e:
            logger.exception("Model %s call failed", self.model_name)
            raise ModelInvocationFailure(f"Model call failed: {e}") from e

        return getattr(resp, "text", None)


@lru_cache(maxsize=1)
def get_llm_client() -> LLMClient:
    try:
        return LLMClient(
            api_key=settings.GEMINI_API_KEY,
            model_name=settings.LLM_MODEL_NAME,
            timeout_seconds=settings.LLM_TIMEOUT_SECONDS,
        )
    except Exception as e:
        # genai.Client refuses to start without GEMINI_API_KEY / GOOGLE_API_KEY
        raise ModelInvocationFailure(f"Could not initialise the Gemini client: {e}") from e
