"""Anthropic API LLM implementation"""

import json
from typing import Iterator

from anthropic import Anthropic

from flocore.settings import settings

from .base import BaseLLMService, LLMResponse, Message, split_system


class AnthropicLLM(BaseLLMService):
    """LLM service backed by the Anthropic API"""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout_seconds: float | None = None,
    ):
        """Initialise the Anthropic client

        Args:
            api_key: Anthropic API key (environment when None)
            model: default model name (settings value when None)
            timeout_seconds: per-call timeout (settings value when None)
        """
        self.api_key = api_key or settings.anthropic_api_key
        self.model = model or settings.model_premium
        self.client = Anthropic(
            api_key=self.api_key,
            timeout=timeout_seconds or settings.llm_timeout_seconds,
        )

    def _build_kwargs(self, messages: list[Message], **kwargs) -> dict:
        system_message, conversation = split_system(messages)

        # No native schema mode: the schema is appended to the system prompt
        if kwargs.get("response_schema"):
            schema_text = json.dumps(kwargs["response_schema"], ensure_ascii=False)
            system_message = (
                f"{system_message or ''}\n\nRespond ONLY with a single JSON object "
                f"that conforms to this JSON schema:\n{schema_text}"
            ).strip()

        conversation_messages = []
        for msg in conversation:
            content = [
                {
                    "type": "image",
                    "source": {
                        "type": "base64",
                        "media_type": image.mime_type,
                        "data": image.to_base64(),
                    },
                }
                for image in msg.images
            ]
            content.append({"type": "text", "text": msg.content})
            conversation_messages.append({"role": msg.role, "content": content})

        request = {
            "model": kwargs.get("model") or self.model,
            "max_tokens": kwargs.get("max_tokens") or 4096,
            "messages": conversation_messages,
        }
        if system_message:
            request["system"] = system_message
        if kwargs.get("temperature") is not None:
            request["temperature"] = kwargs["temperature"]
        return request

    def generate(self, messages: list[Message], **kwargs) -> LLMResponse:
        """Generate a response

        Args:
            messages: conversation messages
            **kwargs: model, temperature, max_tokens, response_schema

        Returns:
            LLMResponse
        """
        response = self.client.messages.create(**self._build_kwargs(messages, **kwargs))

        text = "".join(block.text for block in response.content if block.type == "text")
        return LLMResponse(
            content=text,
            model=response.model,
            usage={
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
            },
            metadata={"provider": "anthropic", "stop_reason": response.stop_reason},
        )

    def stream_generate(self, messages: list[Message], **kwargs) -> Iterator[str]:
        """Generate a response (streaming)

        Yields:
            text deltas
        """
        with self.client.messages.stream(**self._build_kwargs(messages, **kwargs)) as stream:
            for text in stream.text_stream:
                if text:
                    yield text
