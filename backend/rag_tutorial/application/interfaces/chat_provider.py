"""Abstract chat provider interface: port for local or hosted LLM runtimes."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator


class ChatProvider(ABC):
    """Port: defines what the application layer needs from a text generator."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this provider (e.g. 'ollama')."""
        ...

    @property
    @abstractmethod
    def model(self) -> str:
        """The model this provider generates with."""
        ...

    @abstractmethod
    def stream(self, prompt: str) -> AsyncIterator[str]:
        """Stream a completion for ``prompt``.

        Yields:
            Text chunks in generation order. The iterator ends when the
            model signals completion.

        Raises:
            ExternalServiceError: If the runtime returns an error.
        """
        ...
