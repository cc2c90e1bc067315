# laris/ai/llm.py
from __future__ import annotations
import json
import time
from typing import Any, Dict, List, Optional

import requests

from laris.ai.config import AIConfig
from laris.settings import get_settings

APP_TITLE = "Laris AI CLI"


class LLMError(RuntimeError):
    def __init__(self, message: str, *, retryable: bool = False):
        super().__init__(message)
        self.retryable = retryable


class LLMTimeout(LLMError):
    def __init__(self, message: str):
        super().__init__(message, retryable=True)


def extract_content(data: Any) -> Optional[str]:
    """First choice's message content, or None when the body has another shape."""
    choices = data.get("choices") if isinstance(data, dict) else None
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str) or not content:
        return None
    return content


class OpenRouterClient:
    """
    Non-streaming chat completion against OpenRouter's OpenAI-compatible
    /chat/completions endpoint. Retries transient failures (timeouts,
    connection errors, 429 and 5xx) with linear backoff.
    """

    def __init__(
        self,
        config: AIConfig,
        *,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff_s: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        settings = get_settings()
        self.config = config
        self.url = url or settings.OPENROUTER_URL
        self.timeout = timeout if timeout is not None else settings.LLM_TIMEOUT
        self.max_retries = max_retries if max_retries is not None else settings.LLM_MAX_RETRIES
        self.backoff_s = backoff_s if backoff_s is not None else settings.LLM_BACKOFF_S
        self.sess = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
            "X-Title": APP_TITLE,
        }

    def payload(self, messages: List[Dict[str, str]]) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": messages,
            "max_tokens": self.config.max_tokens,
        }

    def _post_once(self, payload: Dict[str, Any]) -> str:
        try:
            r = self.sess.post(self.url, headers=self._headers(), data=json.dumps(payload), timeout=self.timeout)
        except requests.Timeout as e:
            raise LLMTimeout(f"OpenRouter did not answer within {self.timeout:g}s") from e
        except requests.RequestException as e:
            raise LLMError(f"OpenRouter request failed: {e}", retryable=True) from e

        if r.status_code != 200:
            try:
                body = r.json()
                err = body.get("error") or body if isinstance(body, dict) else body
            except ValueError:
                err = r.text
            detail = err if isinstance(err, str) else json.dumps(err)
            retryable = r.status_code == 429 or r.status_code >= 500
            raise LLMError(f"OpenRouter error {r.status_code}: {detail}", retryable=retryable)

        try:
            data = r.json()
        except ValueError as e:
            raise LLMError("OpenRouter returned a non-JSON body") from e
        content = extract_content(data)
        if content is None:
            raise LLMError("OpenRouter response has no message content")
        return content

    def complete(self, prompt: str, *, system: Optional[str] = None) -> str:
        messages: List[Dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        payload = self.payload(messages)

        attempt = 0
        while True:
            attempt += 1
            try:
                return self._post_once(payload)
            except LLMError as e:
                if not e.retryable or attempt > self.max_retries:
                    raise
                time.sleep(self.backoff_s * attempt)
