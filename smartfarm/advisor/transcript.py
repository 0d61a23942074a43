"""ChatTranscript — the advisor conversation shown beside the farm.

Purely presentational and append-only; nothing in the simulation reads
it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

WELCOME_MESSAGE = (
    "Welcome! I'm your farm advisor. How can I help you optimize your farm today?"
)


class Role(Enum):
    """Who wrote a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    text: str


@dataclass
class ChatTranscript:
    """Ordered, append-only list of chat messages.

    Attributes:
        messages: Messages in the order they were added.
    """

    messages: list[ChatMessage] = field(
        default_factory=lambda: [ChatMessage(Role.ASSISTANT, WELCOME_MESSAGE)],
    )

    def add_user(self, text: str) -> ChatMessage:
        return self._append(ChatMessage(Role.USER, text))

    def add_assistant(self, text: str) -> ChatMessage:
        return self._append(ChatMessage(Role.ASSISTANT, text))

    def _append(self, message: ChatMessage) -> ChatMessage:
        self.messages.append(message)
        return message

    def __len__(self) -> int:
        return len(self.messages)
