"""Constrained classifier

One temperature-0 generation call whose output is forced into a closed set of
labels. Every failure degrades to the caller's fallback; nothing is raised.
"""

import json
import logging
from typing import TYPE_CHECKING

from flocore.services.llm.base import Message
from flocore.services.specialists.schemas import BOOLEAN, enum, obj
from flocore.settings import settings

from .models import Classification

if TYPE_CHECKING:
    from flocore.services.llm.base import BaseLLMService

logger = logging.getLogger(__name__)

CONFIRMATION_SCHEMA = obj({"answer": BOOLEAN}, name="Confirmation").model_json_schema()


class ConstrainedClassifier:
    """Enum-constrained classification with fallback"""

    def __init__(self, llm_service: "BaseLLMService", model: str | None = None):
        """
        Args:
            llm_service: generation client
            model: classifier model (settings.model_classifier when None)
        """
        self.llm_service = llm_service
        self.model = model or settings.model_classifier

    def _request(self, prompt: str, schema: dict) -> tuple[dict | None, str | None]:
        """Run the constrained call; returns (parsed object, raw text) or (None, reason)"""
        try:
            response = self.llm_service.generate(
                [Message(role="user", content=prompt)],
                model=self.model,
                temperature=0,
                response_schema=schema,
            )
        except Exception as e:
            return None, f"generation error: {e}"

        text = (response.content or "").strip()
        if not text:
            return None, "empty response"

        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            return None, f"invalid JSON: {text[:200]}"

        if not isinstance(data, dict):
            return None, f"expected an object: {text[:200]}"
        return data, text

    def classify(
        self,
        prompt: str,
        choices: list[str],
        fallback: str,
        field: str = "label",
        extra_properties: dict | None = None,
    ) -> Classification:
        """Classify `prompt` into one of `choices`

        Args:
            prompt: full classification prompt
            choices: allowed labels
            fallback: label used on any failure
            field: JSON property holding the label
            extra_properties: additional (optional) schema properties returned
                in Classification.fields

        Returns:
            Classification (used_fallback=True when the fallback was applied)
        """
        extra_properties = extra_properties or {}
        properties = {field: enum(*choices)}
        properties.update(extra_properties)
        schema = obj(properties, required=[field], name="Classification").model_json_schema()

        data, raw = self._request(prompt, schema)
        if data is None:
            logger.warning(f"Classification fell back to '{fallback}': {raw}")
            return Classification(label=fallback, used_fallback=True)

        label = data.get(field)
        if label not in choices:
            logger.warning(f"Classification fell back to '{fallback}': label {label!r} not in choices")
            return Classification(label=fallback, used_fallback=True, raw_response=raw)

        fields = {name: data[name] for name in extra_properties if name in data}
        logger.debug(f"Classified as '{label}'")
        return Classification(label=label, fields=fields, raw_response=raw)

    def confirm(self, prompt: str, fallback: bool = False) -> bool:
        """Yes/no question; `fallback` on any failure"""
        data, raw = self._request(prompt, CONFIRMATION_SCHEMA)
        if data is None or not isinstance(data.get("answer"), bool):
            logger.warning(f"Confirmation fell back to {fallback}: {raw}")
            return fallback
        return data["answer"]
