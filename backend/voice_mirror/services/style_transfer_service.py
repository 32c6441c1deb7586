"""Style transfer: rewriting text in the user's writing voice."""
import time
from typing import Dict, List

from voice_mirror.exceptions import NoWritingSamplesError
from voice_mirror.prompts import StyleTransferPrompt
from voice_mirror.services.llm_service import LLMService
from voice_mirror.services.research_service import NO_WRITING_SAMPLES_MESSAGE
from voice_mirror.services.writing_samples import combine_writing_samples
from voice_mirror.utils.logger import logger
from voice_mirror.utils.text_cleaner import count_words


class StyleTransferService:
    """Rewrites input text so it reads as if the sample author wrote it."""

    def __init__(self, llm_service: LLMService, max_tokens: int = 3000, temperature: float = 0.7):
        self.llm_service = llm_service
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def rewrite(self, input_text: str, writing_samples: List[str]) -> Dict:
        """
        Rewrite text in the style of the writing samples.

        Args:
            input_text: Text to rewrite
            writing_samples: Extracted texts of the user's writing samples

        Returns:
            Dictionary with rewritten_text, word counts, and metadata

        Raises:
            NoWritingSamplesError: If no usable samples were supplied
            LLMServiceError: If generation fails
        """
        start_time = time.time()

        samples = combine_writing_samples(writing_samples)
        if not samples:
            raise NoWritingSamplesError(NO_WRITING_SAMPLES_MESSAGE)

        prompt = StyleTransferPrompt.build(input_text, samples)
        result = await self.llm_service.generate(
            StyleTransferPrompt.SYSTEM_MESSAGE,
            prompt,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )

        rewritten = result["text"].strip()
        input_word_count = StyleTransferPrompt.word_count(input_text)
        output_word_count = count_words(rewritten)
        logger.info(
            "Style transfer completed",
            extra={"input_word_count": input_word_count, "output_word_count": output_word_count},
        )

        return {
            "rewritten_text": rewritten,
            "input_word_count": input_word_count,
            "output_word_count": output_word_count,
            "token_usage": result.get("token_usage"),
            "response_time_ms": (time.time() - start_time) * 1000,
        }
