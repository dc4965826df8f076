"""Code generation through a chat-completion API."""

import httpx
import structlog

from motia_studio.errors import GenerationError
from motia_studio.models import Language, ProjectFile, normalize_language

from .client import CompletionClient
from .fallback import fallback_files
from .parser import GeneratedFileParser
from .prompts import SYSTEM_PROMPT, build_prompt

logger = structlog.get_logger(__name__)

KEY_HELP_URL = "https://console.groq.com"


class LLMCodeGenerator:
    """Generates project files with one completion call.

    A response without any ``===FILE:===`` block falls back to the minimal
    skeleton for the language. Provider failures become :class:`GenerationError`.
    """

    def __init__(self, client: CompletionClient):
        self.client = client

    async def generate_code(
        self,
        description: str,
        language: Language,
        features: list[str] | None = None,
    ) -> list[ProjectFile]:
        language = normalize_language(language)
        if not self.client.api_key:
            raise GenerationError(
                "GROQ_API_KEY is not configured. Please add it to your .env file. "
                f"Get an API key from {KEY_HELP_URL}",
                reason="credentials",
            )

        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(description, language, features)},
        ]

        try:
            text = await self.client.complete(messages)
        except httpx.HTTPStatusError as e:
            logger.error(
                "completion_request_failed",
                status=e.response.status_code,
                body=e.response.text[:500],
            )
            raise _status_error(e.response) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("completion_request_failed", error=str(e))
            raise GenerationError(
                f"Failed to generate code: {str(e) or type(e).__name__}. "
                "Check your GROQ_API_KEY and internet connection."
            ) from e

        if not text.strip():
            raise GenerationError(
                "No content generated by the completion API. Please try again."
            )

        files = GeneratedFileParser.parse(text, language)
        if not files:
            logger.warning("completion_parse_failed", preview=text[:500])
            return fallback_files(description, language)

        logger.info("code_generated", files=len(files), language=language.value)
        return files


def _status_error(response: httpx.Response) -> GenerationError:
    status = response.status_code
    detail = _error_detail(response)

    if status in (401, 403):
        return GenerationError(
            "Invalid API key. Please check your GROQ_API_KEY and get a valid key from "
            f"{KEY_HELP_URL}",
            reason="credentials",
        )
    lowered = detail.lower()
    if status == 429 or "rate limit" in lowered or "quota" in lowered:
        return GenerationError(
            "Completion API rate limit exceeded. Please try again later.",
            reason="rate_limit",
        )
    return GenerationError(
        f"Failed to generate code: completion API error ({status}): {detail}. "
        "Check your GROQ_API_KEY and internet connection."
    )


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.reason_phrase or response.text[:200]
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error
    return response.reason_phrase
