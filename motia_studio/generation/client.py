"""Chat-completion client for OpenAI-compatible APIs (Groq by default)."""

from __future__ import annotations

import httpx
import structlog

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.1-8b-instant"


class CompletionClient:
    """Minimal async client for ``POST /chat/completions``.

    The API key may be empty; callers check ``api_key`` before calling so
    they can report a credential problem instead of an HTTP error.
    """

    def __init__(
        self,
        api_key: str = "",
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.7,
        max_tokens: int = 4000,
        timeout: float = 60.0,
    ) -> None:
        self.api_key = api_key.strip()
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    async def complete(self, messages: list[dict[str, str]]) -> str:
        """Send chat messages and return the first choice's content.

        Returns:
            The completion text, possibly empty.

        Raises:
            httpx.HTTPStatusError: On non-2xx responses.
            httpx.HTTPError: On transport errors.
            ValueError: On a response body without choices.
        """
        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.base_url}/chat/completions",
                json=payload,
                headers=headers,
            )
            response.raise_for_status()

        data = response.json()
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            logger.error(
                "completion_response_parse_failed",
                response_keys=list(data.keys()) if isinstance(data, dict) else None,
            )
            raise ValueError("Invalid completion response format") from exc

        usage = data.get("usage", {}) if isinstance(data, dict) else {}
        logger.debug(
            "completion_received",
            model=self.model,
            total_tokens=usage.get("total_tokens"),
            chars=len(content or ""),
        )
        return content or ""
