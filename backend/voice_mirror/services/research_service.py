"""Research service orchestrating chunk selection and answer generation."""
import time
from typing import Dict, List

from voice_mirror.exceptions import NoRelevantMaterialError, NoWritingSamplesError
from voice_mirror.prompts import AnswerLength, ResearchPrompt
from voice_mirror.services.chunker import DEFAULT_CHUNK_SIZE, chunk_text
from voice_mirror.services.llm_service import LLMService
from voice_mirror.services.relevance_selector import DEFAULT_MAX_CHUNKS, rank_chunks, score_chunks
from voice_mirror.services.writing_samples import combine_writing_samples
from voice_mirror.utils.logger import logger
from voice_mirror.utils.metrics import CHUNKS_SELECTED
from voice_mirror.utils.tracer import record_selection, selection_span

NO_RELEVANT_MATERIAL_MESSAGE = (
    "The source material doesn't contain information relevant to your question. "
    "Please try a different question or provide different source material."
)
NO_WRITING_SAMPLES_MESSAGE = "No writing samples found. Please upload some documents first."


class ResearchService:
    """Answers questions about a source document in the user's writing voice."""

    def __init__(
        self,
        llm_service: LLMService,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_relevant_chunks: int = DEFAULT_MAX_CHUNKS,
        max_tokens: int = 4000,
        temperature: float = 0.7,
    ):
        """
        Initialize research service.

        Args:
            llm_service: Service for text generation
            chunk_size: Words per source chunk (default: 500)
            max_relevant_chunks: Chunks passed to the model (default: 3)
            max_tokens: Completion token limit
            temperature: Sampling temperature
        """
        self.llm_service = llm_service
        self.chunk_size = chunk_size
        self.max_relevant_chunks = max_relevant_chunks
        self.max_tokens = max_tokens
        self.temperature = temperature

    def select_source_chunks(self, source_text: str, question: str) -> List[str]:
        """
        Chunk the source and pick the passages to answer from.

        Raises:
            NoRelevantMaterialError: If nothing can be selected
        """
        with selection_span(self.chunk_size, self.max_relevant_chunks) as span:
            chunks = chunk_text(source_text, self.chunk_size)
            selected = rank_chunks(score_chunks(chunks, question), self.max_relevant_chunks)
            record_selection(span, len(chunks), selected)

        CHUNKS_SELECTED.observe(len(selected))
        logger.info(
            f"Selected {len(selected)} of {len(chunks)} source chunks",
            extra={
                "chunk_count": len(chunks),
                "chunks_used": len(selected),
                "chunk_scores": [item.score for item in selected],
            },
        )

        if not selected:
            raise NoRelevantMaterialError(NO_RELEVANT_MATERIAL_MESSAGE)

        return [item.chunk.text for item in selected]

    async def answer(
        self,
        question: str,
        source_text: str,
        writing_samples: List[str],
        answer_length: AnswerLength = AnswerLength.MEDIUM,
    ) -> Dict:
        """
        Answer a question from the source material in the style of the samples.

        Args:
            question: User's question
            source_text: Source document to answer from
            writing_samples: Extracted texts of the user's writing samples
            answer_length: Requested answer length

        Returns:
            Dictionary with answer, question, chunks_used, and metadata

        Raises:
            NoWritingSamplesError: If no usable samples were supplied
            NoRelevantMaterialError: If the source yields no chunks
            LLMServiceError: If answer generation fails
        """
        start_time = time.time()

        samples = combine_writing_samples(writing_samples)
        if not samples:
            raise NoWritingSamplesError(NO_WRITING_SAMPLES_MESSAGE)

        chunks = self.select_source_chunks(source_text.strip(), question)

        prompt = ResearchPrompt.build(question, samples, chunks, answer_length)
        result = await self.llm_service.generate(
            ResearchPrompt.SYSTEM_MESSAGE,
            prompt,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )

        return {
            "answer": result["text"],
            "question": question,
            "chunks_used": len(chunks),
            "token_usage": result.get("token_usage"),
            "response_time_ms": (time.time() - start_time) * 1000,
        }
