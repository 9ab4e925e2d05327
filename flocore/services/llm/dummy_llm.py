"""Dummy LLM implementation (for tests and offline runs)"""

import json
from typing import Iterator

from .base import BaseLLMService, LLMResponse, Message


def sample_from_schema(schema: dict, definitions: dict | None = None):
    """Build the smallest instance satisfying a JSON schema

    Enums and constants take their first value, arrays get one element and
    every declared property is filled, so the result passes required-field
    validation. `$ref` is resolved against `$defs`; of an `anyOf` the first
    non-null branch is used.
    """
    definitions = {**(definitions or {}), **schema.get("$defs", {})}

    if "$ref" in schema:
        return sample_from_schema(definitions[schema["$ref"].rsplit("/", 1)[-1]], definitions)
    if "const" in schema:
        return schema["const"]
    if "enum" in schema and schema["enum"]:
        return schema["enum"][0]
    for key in ("anyOf", "oneOf", "allOf"):
        if key in schema:
            branches = [s for s in schema[key] if s.get("type") != "null"]
            return sample_from_schema(branches[0], definitions) if branches else None

    schema_type = str(schema.get("type", "string")).lower()
    if schema_type == "object":
        return {
            name: sample_from_schema(prop, definitions)
            for name, prop in schema.get("properties", {}).items()
        }
    if schema_type == "array":
        return [sample_from_schema(schema.get("items", {"type": "string"}), definitions)]
    if schema_type == "boolean":
        return True
    if schema_type in ("number", "integer"):
        return 0
    return "N/A (dummy)"


class DummyLLM(BaseLLMService):
    """Dummy LLM service for tests"""

    def generate(self, messages: list[Message], **kwargs) -> LLMResponse:
        """Generate a dummy response

        Args:
            messages: conversation messages
            **kwargs: response_schema is honoured, everything else is ignored

        Returns:
            LLMResponse
        """
        schema = kwargs.get("response_schema")
        if schema:
            response_text = json.dumps(sample_from_schema(schema))
        else:
            # Last user message
            user_message = ""
            for msg in reversed(messages):
                if msg.role == "user":
                    user_message = msg.content
                    break

            response_text = (
                "[Dummy response mode - a real provider is not configured]\n\n"
                f"You asked: {user_message[:100]}"
            )

        return LLMResponse(
            content=response_text,
            model="dummy-model",
            usage={"prompt_tokens": 100, "completion_tokens": 150, "total_tokens": 250},
            metadata={"provider": "dummy"},
        )

    def stream_generate(self, messages: list[Message], **kwargs) -> Iterator[str]:
        """Stream the dummy response word by word"""
        text = self.generate(messages, **kwargs).content
        words = text.split(" ")
        for i, word in enumerate(words):
            yield word if i == len(words) - 1 else word + " "
