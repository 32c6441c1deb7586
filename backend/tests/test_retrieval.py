"""Tests for source chunking and relevance selection."""
import math

import pytest

from voice_mirror.models.document import Chunk
from voice_mirror.services.chunker import chunk_text
from voice_mirror.services.relevance_selector import (
    extract_query_terms,
    rank_chunks,
    score_chunk,
    score_chunks,
    select_relevant,
)


def chunks_from_texts(*texts):
    return [Chunk(chunk_index=i, text=text) for i, text in enumerate(texts)]


class TestChunker:
    """Tests for chunk_text."""

    def test_empty_document(self):
        """Empty and whitespace-only documents produce no chunks."""
        assert chunk_text("") == []
        assert chunk_text("   \n\t  ") == []

    @pytest.mark.parametrize("word_count,chunk_size", [(1, 500), (7, 3), (9, 3), (1200, 500)])
    def test_chunk_count(self, word_count, chunk_size):
        """Chunk count is the word count divided by chunk size, rounded up."""
        document = " ".join(f"w{i}" for i in range(word_count))
        chunks = chunk_text(document, chunk_size)
        assert len(chunks) == math.ceil(word_count / chunk_size)

    def test_coverage_without_overlap(self):
        """Rejoining chunk words reproduces the normalized document."""
        document = "  The quick\tbrown fox\n\njumps over   the lazy dog  "
        chunks = chunk_text(document, chunk_size=4)

        assert [c.text for c in chunks] == ["The quick brown fox", "jumps over the lazy", "dog"]
        assert " ".join(c.text for c in chunks) == " ".join(document.split())

    def test_indices_follow_document_order(self):
        chunks = chunk_text("a b c d e", chunk_size=2)
        assert [c.chunk_index for c in chunks] == [0, 1, 2]

    def test_default_chunk_size(self):
        """Chunks default to 500 words."""
        chunks = chunk_text(" ".join(["word"] * 1200))
        assert [c.word_count for c in chunks] == [500, 500, 200]

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            chunk_text("some text", chunk_size=0)


class TestQueryTerms:
    """Tests for extract_query_terms."""

    def test_short_words_dropped_and_lowercased(self):
        assert extract_query_terms("What is THE Nile river") == ["what", "nile", "river"]

    def test_duplicates_retained(self):
        assert extract_query_terms("river river bank") == ["river", "river", "bank"]

    def test_degenerate_question(self):
        assert extract_query_terms("a to it") == []
        assert extract_query_terms("") == []


class TestRelevanceSelector:
    """Tests for score_chunk and select_relevant."""

    def test_whole_word_matching(self):
        """A term inside a longer word does not match."""
        chunk = Chunk(chunk_index=0, text="Internationalization of the nation")
        assert score_chunk(chunk, ["nation"]) == 1

        chunk = Chunk(chunk_index=0, text="internationalization matters")
        assert score_chunk(chunk, ["nation"]) == 0

    def test_case_insensitive_and_punctuation_boundaries(self):
        chunk = Chunk(chunk_index=0, text="River, RIVER. river's banks")
        assert score_chunk(chunk, ["river"]) == 3

    def test_repeated_terms_counted_per_occurrence(self):
        chunk = Chunk(chunk_index=0, text="river delta river")
        assert score_chunk(chunk, ["river", "river"]) == 4

    def test_invalid_pattern_term_scores_zero(self):
        """Terms that are not valid regular expressions never raise."""
        chunk = Chunk(chunk_index=0, text="learning c++ quickly")
        assert score_chunk(chunk, ["c++("]) == 0

    def test_non_ascii_letters_are_boundaries(self):
        """Word characters are ASCII only; accented letters act as boundaries."""
        chunk = Chunk(chunk_index=0, text="caféteria")
        assert score_chunk(chunk, ["caf"]) == 1

    def test_ranks_by_descending_score(self, sample_chunks):
        result = select_relevant(sample_chunks, "farming near the river")
        assert [c.chunk_index for c in result] == [2, 0, 1]

    def test_monotonicity(self):
        """A chunk with more occurrences of every term ranks no later."""
        chunks = chunks_from_texts("delta river", "delta delta river river river")
        result = select_relevant(chunks, "river delta", max_chunks=2)
        assert result[0].chunk_index == 1

    def test_stable_tie_break(self):
        """Chunks with equal scores keep their input order."""
        chunks = chunks_from_texts("river one", "nothing", "river two", "river three")
        result = select_relevant(chunks, "river", max_chunks=3)
        assert [c.chunk_index for c in result] == [0, 2, 3]

    def test_zero_score_chunks_fill_quota(self):
        chunks = chunks_from_texts("alpha", "beta", "gamma", "delta")
        result = select_relevant(chunks, "unrelated question entirely", max_chunks=3)
        assert result == chunks[:3]

    def test_zero_score_fill_after_matches(self):
        chunks = chunks_from_texts("nothing here", "river here")
        result = select_relevant(chunks, "river", max_chunks=3)
        assert [c.chunk_index for c in result] == [1, 0]

    def test_degenerate_question_returns_leading_chunks(self):
        chunks = chunks_from_texts("one", "two", "three", "four", "five")
        assert select_relevant(chunks, "a to it", 3) == chunks[:3]

    def test_empty_chunks(self):
        assert select_relevant([], "any question here") == []

    def test_end_to_end_scenario(self):
        """1200 words chunked by 500; term appears 2x, 0x, 5x."""
        chunk0 = ["alpha"] * 2 + ["filler"] * 498
        chunk1 = ["filler"] * 500
        chunk2 = ["alpha"] * 5 + ["filler"] * 195
        document = " ".join(chunk0 + chunk1 + chunk2)

        chunks = chunk_text(document, chunk_size=500)
        assert [c.word_count for c in chunks] == [500, 500, 200]

        result = select_relevant(chunks, "tell me about alpha", max_chunks=2)
        assert [c.chunk_index for c in result] == [2, 0]

    def test_idempotent(self, sample_chunks):
        first = select_relevant(sample_chunks, "river farming")
        second = select_relevant(sample_chunks, "river farming")
        assert first == second
        assert [c.chunk_index for c in sample_chunks] == [0, 1, 2]

    def test_score_chunks_keeps_input_order(self, sample_chunks):
        scored = score_chunks(sample_chunks, "river")
        assert [s.chunk.chunk_index for s in scored] == [0, 1, 2]
        assert [s.score for s in scored] == [1, 0, 2]

    def test_rank_chunks_keeps_scores(self, sample_chunks):
        ranked = rank_chunks(score_chunks(sample_chunks, "river"), max_chunks=2)
        assert [(s.chunk.chunk_index, s.score) for s in ranked] == [(2, 2), (0, 1)]

    def test_regex_characters_in_terms_keep_their_meaning(self):
        """A trailing ? makes the last letter optional, as in the term regex."""
        chunk = Chunk(chunk_index=0, text="what wha whatever")
        assert score_chunk(chunk, ["what?"]) == 2
