"""Test fixtures"""

import json
from pathlib import Path
from unittest.mock import Mock

import pytest
from dotenv import load_dotenv
from PIL import Image

from flocore.models import ConversationMessage, EngineTier, UserProfile
from flocore.services.corpus import InMemoryDocumentCorpus
from flocore.services.llm.base import BaseLLMService, ImagePart, LLMResponse
from flocore.services.llm.dummy_llm import DummyLLM
from flocore.services.orchestration import ConstrainedClassifier

# Load the project-root .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


def reply(content) -> LLMResponse:
    """Scripted LLMResponse; dicts are serialized to JSON"""
    if isinstance(content, (dict, list)):
        content = json.dumps(content)
    return LLMResponse(content=content, model="mock-model")


@pytest.fixture
def dummy_llm_service():
    """Dummy LLM service"""
    return DummyLLM()


@pytest.fixture
def scripted_llm():
    """Factory for a mock LLM whose generate() returns the given replies in order

    Exceptions in the script are raised instead of returned. `stream` chunks are
    returned by stream_generate().
    """

    def _make(*replies, stream=None):
        llm = Mock(spec=BaseLLMService)
        llm.generate.side_effect = [r if isinstance(r, Exception) else reply(r) for r in replies]
        if stream is not None:
            llm.stream_generate.side_effect = lambda *args, **kwargs: iter(stream)
        return llm

    return _make


@pytest.fixture
def classifier_for(scripted_llm):
    """Factory for a ConstrainedClassifier over a scripted mock LLM"""

    def _make(*replies):
        return ConstrainedClassifier(scripted_llm(*replies))

    return _make


@pytest.fixture
def premium_profile():
    return UserProfile(name="Budi", engine_tier=EngineTier.PREMIUM)


@pytest.fixture
def compact_profile():
    return UserProfile(name="Budi", engine_tier=EngineTier.COMPACT)


@pytest.fixture
def sample_corpus():
    return InMemoryDocumentCorpus()


@pytest.fixture
def sample_image():
    """Sample image"""
    return Image.new("RGB", (100, 100), color="white")


@pytest.fixture
def image_part(sample_image):
    return ImagePart.from_image(sample_image)


@pytest.fixture
def thread():
    """Thread as the UI holds it: greeting, two turns, current prompt, typing slot"""
    return [
        ConversationMessage.placeholder("Hello! How can I help on site today?"),
        ConversationMessage.user("What is the cover for footings?"),
        ConversationMessage.ai("75 mm for concrete cast against earth."),
        ConversationMessage.user("And for slabs?"),
        ConversationMessage.ai(is_typing=True),
    ]
