"""Domain entity for text segmentation output."""

from dataclasses import dataclass, field


@dataclass
class SegmentationResult:
    """Chunks produced by the segmenter plus informational counters."""

    num_tokens: int
    num_chunks: int
    chunks: list[str] = field(default_factory=list)
    chunk_positions: list[list[int]] = field(default_factory=list)  # [start, end] offsets
