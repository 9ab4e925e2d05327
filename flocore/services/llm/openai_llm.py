"""OpenAI API LLM implementation"""

from typing import Iterator

from openai import OpenAI

from flocore.settings import settings

from .base import BaseLLMService, LLMResponse, Message


class OpenAILLM(BaseLLMService):
    """LLM service backed by the OpenAI API"""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout_seconds: float | None = None,
    ):
        """Initialise the OpenAI client

        Args:
            api_key: OpenAI API key (environment when None)
            model: default model name (settings value when None)
            timeout_seconds: per-call timeout (settings value when None)
        """
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.model_premium
        self.client = OpenAI(
            api_key=self.api_key,
            timeout=timeout_seconds or settings.llm_timeout_seconds,
        )

    def _to_openai_messages(self, messages: list[Message]) -> list[dict]:
        """Convert Message objects to the chat completions format"""
        openai_messages = []
        for msg in messages:
            if not msg.images:
                openai_messages.append({"role": msg.role, "content": msg.content})
                continue

            content = [
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{image.mime_type};base64,{image.to_base64()}"},
                }
                for image in msg.images
            ]
            if msg.content:
                content.append({"type": "text", "text": msg.content})
            openai_messages.append({"role": msg.role, "content": content})
        return openai_messages

    def _build_kwargs(self, messages: list[Message], **kwargs) -> dict:
        request = {
            "model": kwargs.get("model") or self.model,
            "messages": self._to_openai_messages(messages),
        }
        if kwargs.get("temperature") is not None:
            request["temperature"] = kwargs["temperature"]
        if kwargs.get("max_tokens"):
            request["max_tokens"] = kwargs["max_tokens"]
        if kwargs.get("response_schema"):
            request["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": "structured_output",
                    "schema": kwargs["response_schema"],
                    "strict": False,
                },
            }
        return request

    def generate(self, messages: list[Message], **kwargs) -> LLMResponse:
        """Generate a response (non-streaming)

        Args:
            messages: conversation messages
            **kwargs: model, temperature, max_tokens, response_schema

        Returns:
            LLMResponse
        """
        response = self.client.chat.completions.create(**self._build_kwargs(messages, **kwargs))

        usage = None
        if response.usage is not None:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=response.model,
            usage=usage,
            metadata={"provider": "openai"},
        )

    def stream_generate(self, messages: list[Message], **kwargs) -> Iterator[str]:
        """Generate a response (streaming)

        Yields:
            text deltas
        """
        request = self._build_kwargs(messages, **kwargs)
        stream = self.client.chat.completions.create(stream=True, **request)
        for chunk in stream:
            if chunk.choices and chunk.choices[0].delta.content:
                yield chunk.choices[0].delta.content
