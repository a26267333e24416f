"""Stream free-form replies from the hosted chat function when no task command matched.

The hosted function speaks the OpenAI streaming format over server-sent
events: ``data: {json}`` lines carrying ``choices[0].delta.content`` fragments,
terminated by ``data: [DONE]``. A plain JSON completion body is accepted too.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from stores.base import Task

logger = logging.getLogger(__name__)

STREAM_SENTINEL = "[DONE]"
_DATA_PREFIX = "data: "
ERROR_REPLY = "Sorry, I encountered an error. Please try again."
NOT_CONFIGURED_REPLY = (
    "The AI assistant is not configured. Set CHAT_COMPLETION_URL to enable free-form answers, "
    'or type "help" to see the task commands I understand.'
)


class ChatFallbackError(Exception):
    """Raised when the chat completion request cannot complete."""


def _build_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"Accept": "text/event-stream, application/json"})
    # allowed_methods=None lets the POST retry on gateway errors before anything streams.
    retry = Retry(total=2, backoff_factor=0.2, status_forcelist=[502, 503, 504], allowed_methods=None)
    session.mount("https://", HTTPAdapter(max_retries=retry))
    session.mount("http://", HTTPAdapter(max_retries=retry))
    return session


class ChatFallback:
    """Client for the remote completion endpoint used for unclassified messages."""

    def __init__(
        self,
        endpoint_url: Optional[str],
        api_key: Optional[str] = None,
        *,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._endpoint_url = endpoint_url
        self._api_key = api_key
        self._timeout = timeout
        self._session = session or _build_session()

    @property
    def configured(self) -> bool:
        return bool(self._endpoint_url)

    # --- Request construction ------------------------------------------------
    def build_payload(self, messages: Sequence[Dict[str, str]], tasks: Iterable[Task]) -> Dict[str, Any]:
        return {
            "messages": [dict(message) for message in messages],
            "tasks": [task.snapshot() for task in tasks],
        }

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
            headers["apikey"] = self._api_key
        return headers

    # --- Streaming -----------------------------------------------------------
    def stream(self, messages: Sequence[Dict[str, str]], tasks: Iterable[Task]) -> Iterator[str]:
        """Yield reply fragments as they arrive; raises ``ChatFallbackError`` on transport failures."""

        if not self._endpoint_url:
            raise ChatFallbackError("Chat completion endpoint is not configured.")
        payload = self.build_payload(messages, tasks)
        try:
            response = self._session.post(
                self._endpoint_url,
                json=payload,
                headers=self._headers(),
                stream=True,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ChatFallbackError(f"Chat completion request failed: {exc}") from exc

        try:
            content_type = response.headers.get("Content-Type", "")
            if "text/event-stream" not in content_type and "application/json" in content_type:
                content = _message_content(response.json())
                if content:
                    yield content
                return
            response.encoding = "utf-8"
            for line in response.iter_lines(decode_unicode=True):
                if isinstance(line, bytes):
                    line = line.decode("utf-8", errors="replace")
                if not line or not line.startswith(_DATA_PREFIX):
                    continue
                data = line[len(_DATA_PREFIX):].strip()
                if data == STREAM_SENTINEL:
                    break
                fragment = _delta_content(data)
                if fragment:
                    yield fragment
        except (requests.RequestException, ValueError) as exc:
            raise ChatFallbackError(f"Chat completion stream failed: {exc}") from exc
        finally:
            response.close()

    def complete(self, messages: Sequence[Dict[str, str]], tasks: Iterable[Task]) -> str:
        """Concatenate the streamed fragments into one assistant message."""

        return "".join(self.stream(messages, tasks))

    def general_answer(self, messages: Sequence[Dict[str, str]], tasks: Iterable[Task]) -> str:
        """Return the model's reply, or a user-facing apology when the call fails."""

        if not self.configured:
            return NOT_CONFIGURED_REPLY
        try:
            content = self.complete(messages, tasks)
        except ChatFallbackError:
            logger.exception("Chat fallback failed")
            return ERROR_REPLY
        if not content.strip():
            logger.warning("Chat fallback returned an empty response")
            return ERROR_REPLY
        return content


def _delta_content(data: str) -> Optional[str]:
    try:
        parsed = json.loads(data)
    except json.JSONDecodeError:
        return None
    choices = parsed.get("choices") if isinstance(parsed, dict) else None
    if not isinstance(choices, list) or not choices:
        return None
    delta = choices[0].get("delta") if isinstance(choices[0], dict) else None
    content = delta.get("content") if isinstance(delta, dict) else None
    return content if isinstance(content, str) else None


def _message_content(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    choices: List[Any] = data.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message")
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else None


__all__ = [
    "ChatFallback",
    "ChatFallbackError",
    "ERROR_REPLY",
    "NOT_CONFIGURED_REPLY",
    "STREAM_SENTINEL",
]
