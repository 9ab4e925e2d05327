"""Utility agent: text revision and report suggestions"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flocore.errors import GenerationFailure
from flocore.models import EngineTier
from flocore.prompts import REPORT_SUGGESTIONS_PROMPT, TEXT_REVISION_PROMPT, get_language_instruction
from flocore.services.llm.base import Message
from flocore.services.specialists.schemas import STRING, array, obj
from flocore.settings import settings

from .capability_gate import CapabilityGate
from .models import Capability

if TYPE_CHECKING:
    from flocore.services.llm.base import BaseLLMService

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3

Suggestions = obj({"suggestions": array(STRING, "1 to 3 short report instructions.")}, name="Suggestions")


class UtilityAgent:
    """Small single-shot helpers"""

    def __init__(self, llm_service: "BaseLLMService", gate: CapabilityGate | None = None):
        self.llm_service = llm_service
        self.gate = gate or CapabilityGate()

    def revise_text(
        self,
        text: str,
        instruction: str,
        tier: EngineTier | str = EngineTier.PREMIUM,
        language: str = "en",
    ) -> str:
        """Revise `text` following `instruction`

        Raises:
            GenerationFailure: empty output or transport error
        """
        self.gate.require(Capability.TEXT_REVISION, tier)
        prompt = TEXT_REVISION_PROMPT.format(
            language_instruction=get_language_instruction(language),
            instruction=instruction,
            text=text,
        )
        try:
            response = self.llm_service.generate(
                [Message(role="user", content=prompt)],
                model=settings.model_for_tier(tier),
                temperature=0.3,
            )
        except Exception as e:
            raise GenerationFailure("Text Revision", reason=str(e)) from e

        revised = (response.content or "").strip()
        if not revised:
            raise GenerationFailure("Text Revision", reason="empty response")
        return revised

    def report_suggestions(
        self,
        analysis_text: str,
        tier: EngineTier | str = EngineTier.PREMIUM,
        language: str = "en",
    ) -> list[str]:
        """Up to three one-click report suggestions for an analysis summary

        Returns an empty list below premium or on any failure.
        """
        if not self.gate.allows(Capability.REPORT_SUGGESTIONS, tier):
            logger.info("Report suggestions require the premium engine; returning none")
            return []

        prompt = REPORT_SUGGESTIONS_PROMPT.format(
            language_instruction=get_language_instruction(language),
            analysis_text=analysis_text,
        )
        try:
            response = self.llm_service.generate(
                [Message(role="user", content=prompt)],
                model=settings.model_for_tier(tier),
                temperature=0.4,
                response_schema=Suggestions.model_json_schema(),
            )
            suggestions = Suggestions.model_validate_json((response.content or "").strip()).suggestions
        except Exception as e:
            logger.warning(f"Report suggestions failed: {e}")
            return []

        return [s.strip() for s in suggestions if s.strip()][:MAX_SUGGESTIONS]
