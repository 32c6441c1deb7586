"""Document data models."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Chunk:
    """Represents a contiguous slice of a source document's words."""

    chunk_index: int
    text: str

    @property
    def word_count(self) -> int:
        return len(self.text.split())


@dataclass(frozen=True)
class ScoredChunk:
    """A chunk paired with its lexical relevance score for one question."""

    chunk: Chunk
    score: int


@dataclass
class ExtractedText:
    """Represents text extracted from an uploaded writing sample."""

    filename: str
    file_type: str
    text: str
    word_count: int
