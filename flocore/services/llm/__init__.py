"""Generation client layer"""

from .base import BaseLLMService, ImagePart, LLMResponse, Message
from .factory import get_llm_service

__all__ = ["BaseLLMService", "ImagePart", "LLMResponse", "Message", "get_llm_service"]
