"""LLM client for OpenAI-compatible chat completion endpoints."""

from __future__ import annotations

from typing import Any, MutableMapping, Sequence

import httpx


class LLMError(Exception):
    """Raised when an LLM request fails."""


Message = MutableMapping[str, str]


class LLMClient:
    """Minimal REST client for ``/chat/completions``."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        default_model: str,
        timeout_s: float = 60.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.default_model = default_model
        self.timeout_s = timeout_s

    def chat(
        self,
        messages: Sequence[Message],
        model: str | None = None,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> str:
        """Send chat messages and return the assistant text (possibly empty)."""
        payload: dict[str, Any] = {
            "model": model or self.default_model,
            "messages": list(messages),
        }
        if temperature is not None:
            payload["temperature"] = temperature
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        try:
            response = httpx.post(
                f"{self.base_url}/chat/completions",
                json=payload,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.api_key}",
                },
                timeout=self.timeout_s,
            )
            response.raise_for_status()
            return self._extract_text(response.json())
        except httpx.RequestError as exc:
            raise LLMError(f"connection error: {exc}") from exc
        except httpx.HTTPStatusError as exc:
            raise LLMError(
                f"API returned {exc.response.status_code}: {exc.response.text}"
            ) from exc
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as exc:
            raise LLMError(f"response parsing error: {exc}") from exc

    @staticmethod
    def _extract_text(completion: Any) -> str:
        """Extract assistant text from an OpenAI-like completion dict."""
        if not isinstance(completion, dict):
            raise TypeError(f"unexpected completion payload: {type(completion).__name__}")
        choices = completion.get("choices", []) or []
        if not choices:
            return ""

        first_choice = choices[0]
        if not isinstance(first_choice, dict):
            raise TypeError(f"unexpected choice payload: {type(first_choice).__name__}")
        message = first_choice.get("message") or {}
        if not isinstance(message, dict):
            raise TypeError(f"unexpected message payload: {type(message).__name__}")
        content = message.get("content")
        return "" if content is None else str(content)
