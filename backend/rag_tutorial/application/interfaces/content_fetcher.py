"""Abstract interface (port) for fetching the plain-text content of a URL."""

from abc import ABC, abstractmethod


class ContentFetcher(ABC):
    """Port for turning a web page into plain text."""

    @abstractmethod
    async def fetch(self, url: str) -> str:
        """Return the readable text content of ``url``.

        Raises:
            ExternalServiceError: If the reader service fails.
        """
        ...
