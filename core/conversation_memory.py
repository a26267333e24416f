"""Lightweight in-memory chat history for the assistant panel."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


@dataclass
class ChatMessage:
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


class ConversationMemory:
    """Ring buffer holding the latest user/assistant messages sent to the chat model."""

    def __init__(self, max_turns: int = 20) -> None:
        self._messages: Deque[ChatMessage] = deque(maxlen=max(1, max_turns))

    def append(self, role: str, content: str) -> ChatMessage:
        message = ChatMessage(role=role, content=(content or "").strip())
        self._messages.append(message)
        return message

    def add_user(self, content: str) -> ChatMessage:
        return self.append(ROLE_USER, content)

    def add_assistant(self, content: str) -> ChatMessage:
        return self.append(ROLE_ASSISTANT, content)

    def history(self) -> List[Dict[str, str]]:
        return [message.to_dict() for message in self._messages if message.content]

    def clear(self) -> None:
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)
