"""Google Gemini LLM implementation"""

import logging
from typing import Iterator

from google import genai
from google.genai import types

from flocore.settings import settings

from .base import BaseLLMService, LLMResponse, Message, split_system

logger = logging.getLogger(__name__)


class GeminiLLM(BaseLLMService):
    """LLM service backed by the Gemini API (google-genai SDK)"""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout_seconds: float | None = None,
    ):
        """Initialise the Gemini client

        Args:
            api_key: Gemini API key (settings value when None)
            model: default model name (settings value when None)
            timeout_seconds: per-call timeout (settings value when None)
        """
        self.api_key = api_key or settings.gemini_api_key
        self.model = model or settings.model_premium
        timeout = timeout_seconds or settings.llm_timeout_seconds

        http_options = None
        if timeout and timeout > 0:
            # HttpOptions.timeout is in milliseconds
            http_options = types.HttpOptions(timeout=int(timeout * 1000))
        self.client = genai.Client(api_key=self.api_key, http_options=http_options)

    def _to_contents(self, messages: list[Message]) -> list[types.Content]:
        """Convert Message objects to Gemini contents (assistant -> model)"""
        contents = []
        for msg in messages:
            parts = [
                types.Part.from_bytes(data=image.data, mime_type=image.mime_type)
                for image in msg.images
            ]
            if msg.content:
                parts.append(types.Part.from_text(text=msg.content))
            role = "model" if msg.role in ("assistant", "model") else "user"
            contents.append(types.Content(role=role, parts=parts))
        return contents

    def _build_config(self, system: str | None, **kwargs) -> types.GenerateContentConfig:
        config_kwargs = {}
        if system:
            config_kwargs["system_instruction"] = system
        if kwargs.get("temperature") is not None:
            config_kwargs["temperature"] = kwargs["temperature"]
        if kwargs.get("max_tokens"):
            config_kwargs["max_output_tokens"] = kwargs["max_tokens"]
        if kwargs.get("response_schema"):
            config_kwargs["response_mime_type"] = "application/json"
            config_kwargs["response_json_schema"] = kwargs["response_schema"]
        return types.GenerateContentConfig(**config_kwargs)

    def generate(self, messages: list[Message], **kwargs) -> LLMResponse:
        """Generate a response (non-streaming)

        Args:
            messages: conversation messages
            **kwargs: model, temperature, max_tokens, response_schema

        Returns:
            LLMResponse
        """
        system, conversation = split_system(messages)
        model = kwargs.get("model") or self.model

        response = self.client.models.generate_content(
            model=model,
            contents=self._to_contents(conversation),
            config=self._build_config(system, **kwargs),
        )

        usage = None
        if response.usage_metadata is not None:
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count,
                "completion_tokens": response.usage_metadata.candidates_token_count,
                "total_tokens": response.usage_metadata.total_token_count,
            }

        return LLMResponse(
            content=response.text or "",
            model=model,
            usage=usage,
            metadata={"provider": "gemini"},
        )

    def stream_generate(self, messages: list[Message], **kwargs) -> Iterator[str]:
        """Generate a response (streaming)

        Yields:
            text deltas
        """
        system, conversation = split_system(messages)
        model = kwargs.get("model") or self.model

        stream = self.client.models.generate_content_stream(
            model=model,
            contents=self._to_contents(conversation),
            config=self._build_config(system, **kwargs),
        )
        for chunk in stream:
            if chunk.text:
                yield chunk.text
