from __future__ import annotations

import json
import time
from http.client import HTTPException
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .config import OpenRouterConfig


class OpenRouterHttpError(RuntimeError):
    def __init__(self, status: int, message: str, body: str | None = None):
        super().__init__(f"OpenRouter HTTP {status}: {message}")
        self.status = status
        self.body = body


def chat_completion(
    config: OpenRouterConfig,
    messages: list[dict[str, str]],
    *,
    max_retries: int = 2,
) -> str:
    """
    POST a chat completion and return the first choice's message content.

    Retries rate limits, 5xx and connection errors with exponential backoff.
    """
    payload = {
        "model": config.model,
        "messages": messages,
        "max_tokens": config.max_tokens,
        "temperature": config.temperature,
        "stream": False,
    }
    body = _post_json(config, "/chat/completions", payload, max_retries=max_retries)
    try:
        return str(body["choices"][0]["message"]["content"])
    except (KeyError, IndexError, TypeError) as exc:
        raise OpenRouterHttpError(200, "Response missing choices[0].message.content", json.dumps(body)) from exc


def _post_json(
    config: OpenRouterConfig,
    path: str,
    payload: dict[str, Any],
    *,
    max_retries: int,
) -> dict[str, Any]:
    data = json.dumps(payload).encode("utf-8")
    retries = 0
    backoff = 0.5

    while True:
        req = Request(_build_url(config.base_url, path), data=data, method="POST")
        req.add_header("Content-Type", "application/json")
        req.add_header("Accept", "application/json")
        req.add_header("Authorization", f"Bearer {config.api_key}")
        req.add_header("X-Title", config.app_title)

        try:
            with urlopen(req, timeout=config.timeout_seconds) as resp:
                raw = resp.read().decode("utf-8")
                return json.loads(raw)
        except HTTPError as exc:
            err_body = exc.read().decode("utf-8") if exc.fp else None
            status = exc.code

            if status in (429, 500, 502, 503, 504) and retries < max_retries:
                time.sleep(backoff)
                retries += 1
                backoff *= 2
                continue

            raise OpenRouterHttpError(status, exc.reason, err_body) from exc
        except URLError as exc:
            if retries < max_retries:
                time.sleep(backoff)
                retries += 1
                backoff *= 2
                continue
            raise OpenRouterHttpError(0, str(exc)) from exc
        except HTTPException as exc:
            # Truncated or malformed HTTP responses (IncompleteRead, RemoteDisconnected).
            raise OpenRouterHttpError(0, f"Bad HTTP response: {exc!r}") from exc


def _build_url(base_url: str, path: str) -> str:
    # urljoin would drop the /api/v1 prefix of the base URL.
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"
