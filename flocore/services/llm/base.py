"""Generation client base interface"""

from __future__ import annotations

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from flocore.utils.images import decode_base64_image, image_to_bytes, load_image_from_bytes, resize_image

if TYPE_CHECKING:
    from PIL import Image


@dataclass
class ImagePart:
    """Inline image attached to a message"""

    data: bytes
    mime_type: str = "image/jpeg"

    @classmethod
    def from_base64(cls, data: str, mime_type: str = "image/jpeg") -> "ImagePart":
        return cls(data=decode_base64_image(data), mime_type=mime_type)

    @classmethod
    def from_image(cls, image: "Image.Image") -> "ImagePart":
        return cls(data=image_to_bytes(resize_image(image)), mime_type="image/jpeg")

    @classmethod
    def from_bytes(cls, data: bytes) -> "ImagePart":
        """Uploaded image in any Pillow-readable format, downscaled and sent as JPEG"""
        return cls.from_image(load_image_from_bytes(data))

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


@dataclass
class Message:
    """Chat message"""

    role: str  # "system" | "user" | "assistant"
    content: str
    images: list[ImagePart] = field(default_factory=list)


@dataclass
class LLMResponse:
    """LLM response"""

    content: str
    model: str | None = None
    usage: dict | None = None
    metadata: dict | None = None


def split_system(messages: list[Message]) -> tuple[str | None, list[Message]]:
    """Separate system messages (joined) from the conversation messages"""
    system_parts = [m.content for m in messages if m.role == "system" and m.content]
    conversation = [m for m in messages if m.role != "system"]
    return ("\n\n".join(system_parts) or None), conversation


class BaseLLMService(ABC):
    """Generation client base class

    Keyword arguments understood by every provider:
        model: model name (provider default when omitted)
        temperature: sampling temperature
        max_tokens: output token limit
        response_schema: JSON schema (dict) the output must conform to;
            the provider is asked for JSON output constrained by it
    """

    @abstractmethod
    def generate(self, messages: list[Message], **kwargs) -> LLMResponse:
        """Single-shot generation

        Args:
            messages: conversation messages
            **kwargs: model, temperature, max_tokens, response_schema

        Returns:
            LLMResponse
        """
        pass

    def stream_generate(self, messages: list[Message], **kwargs) -> Iterator[str]:
        """Streaming generation

        Args:
            messages: conversation messages
            **kwargs: model, temperature, max_tokens

        Yields:
            text deltas
        """
        # Default: providers without streaming yield the whole response at once
        response = self.generate(messages, **kwargs)
        yield response.content

    def chat(self, user_message: str, system_message: str | None = None, **kwargs) -> str:
        """Simple single-turn interface

        Args:
            user_message: user message
            system_message: system instruction (optional)
            **kwargs: passed to generate()

        Returns:
            response text
        """
        messages = []
        if system_message:
            messages.append(Message(role="system", content=system_message))
        messages.append(Message(role="user", content=user_message))

        response = self.generate(messages, **kwargs)
        return response.content

    def stream_chat(
        self, user_message: str, system_message: str | None = None, **kwargs
    ) -> Iterator[str]:
        """Simple single-turn interface (streaming)"""
        messages = []
        if system_message:
            messages.append(Message(role="system", content=system_message))
        messages.append(Message(role="user", content=user_message))

        yield from self.stream_generate(messages, **kwargs)
