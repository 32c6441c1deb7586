"""Pytest configuration and fixtures."""
import pytest
from unittest.mock import Mock, AsyncMock

from voice_mirror.models.document import Chunk
from voice_mirror.services.llm_service import LLMService


class FakeRedis:
    """In-memory stand-in for the few redis.asyncio commands the rate limiter uses."""

    def __init__(self):
        self.counts = {}
        self.ttls = {}

    async def incrby(self, key, amount):
        self.counts[key] = self.counts.get(key, 0) + amount
        return self.counts[key]

    async def decrby(self, key, amount):
        return await self.incrby(key, -amount)

    async def pexpire(self, key, ms):
        self.ttls[key] = ms
        return True

    async def pttl(self, key):
        return self.ttls.get(key, -1)

    def expire_all(self):
        self.counts.clear()
        self.ttls.clear()

    async def aclose(self):
        pass


@pytest.fixture
def fake_redis():
    """Fake Redis client for rate limiter tests."""
    return FakeRedis()


@pytest.fixture
def mock_llm_service():
    """Mock LLM service."""
    service = Mock(spec=LLMService)
    service.generate = AsyncMock(
        return_value={
            "text": "This is a test answer.",
            "token_usage": {"prompt_tokens": 100, "completion_tokens": 50, "total_tokens": 150},
            "response_time_ms": 500.0,
        }
    )
    service.close = AsyncMock()
    return service


@pytest.fixture
def sample_chunks():
    """Sample source chunks for testing."""
    return [
        Chunk(chunk_index=0, text="The river delta supports farming and fishing communities."),
        Chunk(chunk_index=1, text="Mountain passes were used for trade caravans."),
        Chunk(chunk_index=2, text="Farming along the river depends on seasonal river floods."),
    ]


@pytest.fixture
def writing_samples():
    """Writing samples with essay front matter."""
    return [
        "Jane Doe\nCourse: HIST 101\nIntroduction: I think history is mostly about people. "
        "It is not really about dates.",
        "Firstly, small towns matter. They shape how we talk.",
    ]