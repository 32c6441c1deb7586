"""LLM service for an OpenAI-compatible text-generation API."""
import os
import time
from typing import Any, Dict, Optional

import httpx
from openai import AsyncOpenAI

from voice_mirror.exceptions import LLMServiceError
from voice_mirror.utils.logger import logger
from voice_mirror.utils.metrics import LLM_LATENCY_SECONDS


class LLMService:
    """Service for generating text through an OpenAI-compatible chat completions API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: str = "https://api.deepseek.com/v1/chat/completions",
        model: str = "deepseek-chat",
        timeout: float = 60.0,
    ):
        """
        Initialize LLM service.

        Args:
            api_key: API key (from LLM_API_KEY env if not provided)
            api_url: Chat completions endpoint URL
            model: Model name to use
            timeout: Request timeout in seconds
        """
        self.api_key = api_key or os.getenv("LLM_API_KEY")
        if not self.api_key:
            raise ValueError("LLM_API_KEY environment variable is required")

        self.api_url = api_url
        self.model = model

        # The SDK expects the base URL: https://api.deepseek.com/v1/chat/completions -> https://api.deepseek.com
        if "/v1" in api_url:
            base_url = api_url.split("/v1")[0]
        else:
            base_url = api_url.rstrip("/")

        http_client = httpx.AsyncClient(timeout=timeout, trust_env=False)
        self.client = AsyncOpenAI(
            api_key=self.api_key,
            base_url=base_url,
            http_client=http_client,
        )

    async def generate(
        self,
        system_message: str,
        user_prompt: str,
        max_tokens: int = 4000,
        temperature: float = 0.7,
    ) -> Dict[str, Any]:
        """
        Generate text for a prompt.

        Args:
            system_message: System instructions
            user_prompt: User prompt with the request content
            max_tokens: Completion token limit
            temperature: Sampling temperature

        Returns:
            Dictionary with text, token_usage, and response_time_ms

        Raises:
            LLMServiceError: If the API call fails or returns no text
        """
        start_time = time.time()

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_message},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except Exception as e:
            logger.error(f"Error calling text-generation API: {str(e)}", exc_info=True)
            raise LLMServiceError(f"Failed to generate text: {str(e)}")

        elapsed = time.time() - start_time
        LLM_LATENCY_SECONDS.observe(elapsed)

        text = response.choices[0].message.content if response.choices else None
        if not text:
            logger.error("Text-generation API returned an empty completion")
            raise LLMServiceError("No text generated")

        token_usage = None
        if response.usage is not None:
            token_usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        response_time_ms = elapsed * 1000
        logger.info(
            "LLM response generated",
            extra={
                "token_usage": token_usage,
                "llm_response_time": response_time_ms,
                "answer_length": len(text),
            },
        )

        return {
            "text": text,
            "token_usage": token_usage,
            "response_time_ms": response_time_ms,
        }

    async def close(self):
        """Close HTTP client."""
        await self.client.close()
