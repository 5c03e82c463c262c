"""
llm.py — Single-word answers from a text-generation provider
=============================================================
The /bfhl AI operation only needs one thing from the model: a one-word
answer to a short question. AnswerProvider captures that as a single
coroutine so tests can swap in a stub; OpenAIAnswerProvider is the
production implementation against the OpenAI Responses API.

One request per question, no retries. Provider failures (non-2xx,
timeout, connection error) surface as UpstreamError.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from .config import Settings
from .errors import UpstreamError

logger = logging.getLogger("bfhl.llm")

MAX_QUESTION_CHARS = 600
MAX_OUTPUT_TOKENS = 16
ERROR_BODY_CHARS = 200

_INSTRUCTION = "Answer in ONE word only (no punctuation, no extra words). Question: "


class AnswerProvider(Protocol):
    async def single_word(self, question: str) -> str:
        ...


def first_word(text: str) -> str:
    parts = text.strip().split()
    return parts[0] if parts else ""


def extract_output_text(payload: Any) -> str:
    """Pull the generated text out of a Responses API payload.

    SDKs expose a convenience ``output_text`` field; the raw REST body
    carries the text in output[].content[] parts of type "output_text".
    """
    if not isinstance(payload, dict):
        return ""
    text = payload.get("output_text")
    if isinstance(text, str) and text.strip():
        return text

    chunks = []
    for item in payload.get("output") or []:
        if not isinstance(item, dict):
            continue
        for part in item.get("content") or []:
            if isinstance(part, dict) and part.get("type") == "output_text":
                chunks.append(str(part.get("text") or ""))
    return "".join(chunks)


class OpenAIAnswerProvider:
    """Asks an OpenAI model for a one-word answer."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4.1-mini",
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIAnswerProvider":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout=settings.openai_timeout_seconds,
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    async def single_word(self, question: str) -> str:
        q = (question or "").strip()
        if not q:
            return ""
        clipped = q[:MAX_QUESTION_CHARS]

        payload = {
            "model": self.model,
            "input": f"{_INSTRUCTION}{clipped}",
            "max_output_tokens": MAX_OUTPUT_TOKENS,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(
                    f"{self.base_url}/responses", json=payload, headers=self._headers()
                )
        except httpx.TimeoutException:
            logger.warning("OpenAI request timed out after %.1fs", self.timeout)
            raise UpstreamError(
                "OpenAI API timed out",
                details={"provider": "openai", "reason": "timeout"},
            )
        except httpx.HTTPError as exc:
            logger.warning("OpenAI request failed: %s", exc)
            raise UpstreamError(
                "OpenAI API unreachable",
                details={"provider": "openai", "reason": type(exc).__name__},
            )

        if resp.is_error:
            try:
                body = resp.text
            except Exception:
                body = ""
            logger.warning("OpenAI returned HTTP %d", resp.status_code)
            raise UpstreamError(
                "OpenAI API error",
                details={
                    "provider": "openai",
                    "http_status": resp.status_code,
                    "body": body[:ERROR_BODY_CHARS],
                },
            )

        try:
            data = resp.json()
        except ValueError:
            logger.warning("OpenAI returned a non-JSON body")
            return ""
        return first_word(extract_output_text(data))
