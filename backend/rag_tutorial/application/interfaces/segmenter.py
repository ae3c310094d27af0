"""Abstract interface (port) for splitting text into bounded-length chunks."""

from abc import ABC, abstractmethod

from rag_tutorial.domain.entities import SegmentationResult


class Segmenter(ABC):
    """Port for text segmentation: implemented in the infrastructure layer."""

    @abstractmethod
    async def segment(
        self,
        content: str,
        *,
        max_chunk_length: int | None = None,
    ) -> SegmentationResult:
        """Split ``content`` into chunks of at most ``max_chunk_length`` characters.

        Args:
            content: Raw text to split.
            max_chunk_length: Upper bound per chunk; falls back to the
                adapter's configured default when omitted.

        Returns:
            The chunks plus token/chunk counters. Counters are informational.
        """
        ...
