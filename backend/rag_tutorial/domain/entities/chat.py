"""Domain entities for streamed chat answers."""

from dataclasses import dataclass, field
from enum import Enum


class ChatMode(str, Enum):
    """How the prompt for a chat answer was built."""

    DIRECT = "direct"
    RAG = "rag"


@dataclass
class ChatAnswer:
    """The accumulated text of one chat stream.

    ``chunks`` keeps each streamed piece in arrival order; ``content`` is
    their concatenation. ``error`` is set when the stream failed, in which
    case ``content`` holds whatever arrived before the failure.
    """

    mode: ChatMode
    chunks: list[str] = field(default_factory=list)
    done: bool = False
    error: str | None = None
    context: list[str] = field(default_factory=list)  # RAG context passages

    @property
    def content(self) -> str:
        return "".join(self.chunks)

    def append(self, chunk: str) -> None:
        self.chunks.append(chunk)
