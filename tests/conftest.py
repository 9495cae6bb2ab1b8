"""Shared test fixtures."""
import asyncio

import pytest

from ehl.errors import ExtractionError
from ehl.extraction.types import Entity
from ehl.shared.llm import base


class StaticExtractor:
    """Extraction collaborator that returns a fixed entity list."""

    def __init__(self, entities):
        self.entities = list(entities)
        self.calls = []

    async def extract(self, text):
        self.calls.append(text)
        return list(self.entities)


class FailingExtractor:
    def __init__(self, error=None):
        self.error = error or ExtractionError("model unavailable")
        self.calls = []

    async def extract(self, text):
        self.calls.append(text)
        raise self.error


class GatedExtractor(StaticExtractor):
    """Blocks until the gate event is set, to observe the ANALYZING state."""

    def __init__(self, gate: asyncio.Event, entities):
        super().__init__(entities)
        self.gate = gate

    async def extract(self, text):
        await self.gate.wait()
        return await super().extract(text)


class RecordingFilter:
    """Filter collaborator that records its requests and keeps everything."""

    def __init__(self):
        self.requests = []

    async def filter(self, entities, confidence_threshold):
        self.requests.append((entities, confidence_threshold))
        return list(entities)


@pytest.fixture
def sample_text():
    return "Ada Lovelace worked with Charles Babbage in London.\nLondon was foggy."


@pytest.fixture
def sample_entities():
    return [
        Entity("Ada Lovelace", "PERSON", 0.98),
        Entity("Charles Babbage", "PERSON", 0.95),
        Entity("London", "LOCATION", 0.9),
        Entity("foggy", "WEATHER", 0.2),
    ]


@pytest.fixture
def static_extractor():
    return StaticExtractor


@pytest.fixture
def failing_extractor():
    return FailingExtractor


@pytest.fixture
def gated_extractor():
    return GatedExtractor


@pytest.fixture
def recording_filter():
    return RecordingFilter()


@pytest.fixture(autouse=True)
def fresh_provider_cache():
    """Drop cached LLM providers so API-key changes take effect per test."""
    base._provider_cache.clear()
    yield
    base._provider_cache.clear()
