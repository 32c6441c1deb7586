"""Lexical relevance scoring and top-k chunk selection."""
import re
from typing import List, Sequence

from voice_mirror.models.document import Chunk, ScoredChunk

DEFAULT_MAX_CHUNKS = 3
MIN_TERM_LENGTH = 4


def extract_query_terms(question: str) -> List[str]:
    """
    Tokenize a question into lower-cased query terms.

    Tokens of three characters or fewer are dropped. Repeated words are kept,
    so each occurrence contributes to the score separately.

    Args:
        question: User's question

    Returns:
        List of query terms in question order
    """
    return [word for word in question.lower().split() if len(word) >= MIN_TERM_LENGTH]


def _count_matches(term: str, text: str) -> int:
    # Terms go into the pattern unescaped; one that is not a valid pattern counts as no match.
    try:
        pattern = re.compile(rf"\b{term}\b", re.IGNORECASE | re.ASCII)
    except re.error:
        return 0
    return len(pattern.findall(text))


def score_chunk(chunk: Chunk, terms: Sequence[str]) -> int:
    """
    Score a chunk as the total number of whole-word matches of every term.

    Args:
        chunk: Chunk to score
        terms: Query terms from extract_query_terms

    Returns:
        Integer relevance score (0 when nothing matches)
    """
    text = chunk.text.lower()
    return sum(_count_matches(term, text) for term in terms)


def score_chunks(chunks: Sequence[Chunk], question: str) -> List[ScoredChunk]:
    """Score every chunk against the question, keeping input order."""
    terms = extract_query_terms(question)
    return [ScoredChunk(chunk=chunk, score=score_chunk(chunk, terms)) for chunk in chunks]


def rank_chunks(scored: Sequence[ScoredChunk], max_chunks: int = DEFAULT_MAX_CHUNKS) -> List[ScoredChunk]:
    """Order scored chunks by descending score (ties keep input order) and keep the top max_chunks."""
    ranked = sorted(scored, key=lambda item: item.score, reverse=True)
    return ranked[:max_chunks]


def select_relevant(
    chunks: Sequence[Chunk], question: str, max_chunks: int = DEFAULT_MAX_CHUNKS
) -> List[Chunk]:
    """
    Select the chunks most relevant to a question.

    Chunks are ordered by descending score. Equal scores keep their input
    order. Zero-score chunks are not filtered out and fill the quota when
    fewer than max_chunks chunks match.

    Args:
        chunks: Chunks produced by chunk_text
        question: User's question
        max_chunks: Maximum number of chunks to return (default: 3)

    Returns:
        Up to max_chunks chunks, highest-scoring first
    """
    return [item.chunk for item in rank_chunks(score_chunks(chunks, question), max_chunks)]
