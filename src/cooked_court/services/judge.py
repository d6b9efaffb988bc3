"""Client for the AI judge that scores and roasts submissions.

The judge is a Gemini ``generateContent`` call made over plain HTTP. Any
failure is raised as :class:`JudgeError`; :func:`judge_or_fallback` turns
those failures into a randomized stand-in result so callers can treat the
judge as always succeeding.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Final

import httpx
from pydantic import ValidationError

from cooked_court.core.settings import settings
from cooked_court.schemas.judge import JudgmentResult

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION: Final[str] = """
You are the "Judge of Being Cooked". Your job is to analyze stories and optional images of bad luck, failure, and embarrassment.
You act like a sarcastic, ruthless Gen Z internet commenter.

For each submission:
1. Assign a "cooked_score" from 0 to 100 based on how bad the situation is.
   - 0-20: Barely cooked. Minor inconvenience.
   - 21-50: Medium rare. It hurts, but you'll live.
   - 51-80: Well done. This is bad.
   - 81-100: Congratulations, you are burnt to a crisp. Absolute disaster.
2. Provide a "verdict". This should be a savage, funny, short roast (max 25 words).
   - IMPORTANT: DO NOT use generic responses. You MUST reference specific details from the user's story or image.
   - Use Gen Z slang naturally (e.g., "skill issue", "caught in 4k", "it's joever", "emotional damage", "cooked").
   - If an image is provided, analyze it and roast the visual details specifically.

Return the result in JSON format.
"""

RESPONSE_SCHEMA: Final[dict[str, Any]] = {
    "type": "OBJECT",
    "properties": {
        "cooked_score": {
            "type": "INTEGER",
            "description": "The level of disaster from 0 to 100",
        },
        "verdict": {
            "type": "STRING",
            "description": "A short sarcastic roast or comment",
        },
    },
    "required": ["cooked_score", "verdict"],
}

BLIND_VERDICT: Final[str] = "AI is blind right now, but you look cooked."
IMAGE_MIME_TYPE: Final[str] = "image/jpeg"


class JudgeError(RuntimeError):
    """Raised when the AI judge cannot produce a usable result."""


@dataclass(frozen=True)
class JudgeConfig:
    """Immutable configuration for judge calls."""

    api_key: str | None
    model: str
    base_url: str
    timeout_seconds: float


def load_judge_config() -> JudgeConfig:
    """Build configuration object from global settings."""
    return JudgeConfig(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout_seconds=float(settings.judge_timeout_seconds),
    )


def strip_data_uri(image_base64: str) -> str:
    """Drop a ``data:image/...;base64,`` prefix if present."""
    _, sep, data = image_base64.partition(",")
    return data if sep and data else image_base64


def build_request_body(story: str, image_base64: str | None = None) -> dict[str, Any]:
    """Return the ``generateContent`` request payload for a submission."""
    parts: list[dict[str, Any]] = [{"text": story}]
    if image_base64:
        parts.append(
            {
                "inlineData": {
                    "mimeType": IMAGE_MIME_TYPE,
                    "data": strip_data_uri(image_base64),
                }
            }
        )
    return {
        "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
        "contents": [{"role": "user", "parts": parts}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }


def parse_response(payload: Any) -> JudgmentResult:
    """Extract the JSON judgment from a ``generateContent`` response body."""
    try:
        parts = payload["candidates"][0]["content"]["parts"]
        text = "".join(part.get("text", "") for part in parts)
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        raise JudgeError("Malformed response from AI") from exc

    if not text.strip():
        raise JudgeError("No response from AI")

    try:
        return JudgmentResult.model_validate_json(text)
    except ValidationError as exc:
        raise JudgeError(f"AI returned an invalid judgment: {exc.error_count()} error(s)") from exc


class JudgeClient:
    """HTTP client wrapper for the Gemini judge."""

    def __init__(
        self,
        config: JudgeConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_judge_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return bool(self.config.api_key)

    async def _ensure_client(self) -> httpx.AsyncClient:
        if not self.enabled:
            raise JudgeError("Gemini API key not configured")

        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url,
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                )
        return self._client

    async def judge(self, story: str, image_base64: str | None = None) -> JudgmentResult:
        """Ask the model to score and roast a story.

        Raises:
            JudgeError: On missing configuration, transport failure, a non-2xx
                status or a response that does not contain a judgment.
        """
        client = await self._ensure_client()
        path = f"/models/{self.config.model}:generateContent"
        try:
            response = await client.post(
                path,
                json=build_request_body(story, image_base64),
                headers={"x-goog-api-key": self.config.api_key or ""},
            )
        except httpx.HTTPError as exc:
            raise JudgeError(f"Judge request failed: {exc}") from exc

        if response.is_error:
            raise JudgeError(f"Judge responded with {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise JudgeError("Judge returned a non-JSON body") from exc

        result = parse_response(payload)
        logger.debug("Judge scored story at %d", result.cooked_score)
        return result

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""
        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None


def blind_fallback() -> JudgmentResult:
    """Randomized stand-in used when the judge is unavailable."""
    return JudgmentResult(cooked_score=random.randrange(100), verdict=BLIND_VERDICT)


async def judge_or_fallback(
    client: JudgeClient,
    story: str,
    image_base64: str | None = None,
) -> JudgmentResult:
    """Return the judge's result, or a randomized fallback on any judge failure."""
    try:
        return await client.judge(story, image_base64)
    except JudgeError as exc:
        logger.warning("Judge unavailable, using fallback verdict: %s", exc)
        return blind_fallback()


class _JudgeClientSingleton:
    """Singleton wrapper for JudgeClient."""

    _instance: JudgeClient | None = None

    @classmethod
    def get_instance(cls) -> JudgeClient:
        """Get or create the singleton JudgeClient instance."""
        if cls._instance is None:
            cls._instance = JudgeClient()
        return cls._instance


def get_judge_client() -> JudgeClient:
    """Return a singleton judge client instance."""
    return _JudgeClientSingleton.get_instance()
