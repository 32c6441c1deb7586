"""Word-window chunking of source documents."""
from typing import List

from voice_mirror.models.document import Chunk

DEFAULT_CHUNK_SIZE = 500


def chunk_text(document: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> List[Chunk]:
    """
    Split a document into fixed-size word chunks.

    Words are whitespace-delimited tokens. Windows never overlap; the final
    window holds whatever words remain.

    Args:
        document: Raw source text
        chunk_size: Number of words per chunk (default: 500)

    Returns:
        List of Chunk objects in document order (empty for an empty document)

    Raises:
        ValueError: If chunk_size is not positive
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be a positive integer, got {chunk_size}")

    words = document.split()
    return [
        Chunk(chunk_index=index, text=" ".join(words[start:start + chunk_size]))
        for index, start in enumerate(range(0, len(words), chunk_size))
    ]
