"""Image analysis agent (premium only)"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from flocore.errors import GenerationFailure
from flocore.models import AnalysisResult, EngineTier
from flocore.prompts import IMAGE_ANALYSIS_PROMPT, get_language_instruction
from flocore.services.llm.base import Message
from flocore.services.specialists.base import describe_errors
from flocore.services.specialists.schemas import NUMBER, STRING, array, obj, string
from flocore.settings import settings

from .capability_gate import CapabilityGate
from .models import Capability

if TYPE_CHECKING:
    from flocore.services.llm.base import BaseLLMService, ImagePart

logger = logging.getLogger(__name__)

AnalysisOutput = obj(
    {
        "analysis": string("Overall analysis summary of the scene, including safety observations."),
        "objects": array(
            obj(
                {
                    "id": int,
                    "label": STRING,
                    "confidence": NUMBER,
                    "bounds": obj(
                        {"left": NUMBER, "top": NUMBER, "width": NUMBER, "height": NUMBER},
                        description="Bounding box as percentages of the image dimensions.",
                        name="Bounds",
                    ),
                },
                name="DetectedObject",
            )
        ),
    },
    name="ImageAnalysis",
)


class AnalysisAgent:
    """Construction-site image inspection"""

    name = "Image Analysis"

    def __init__(self, llm_service: "BaseLLMService", gate: CapabilityGate | None = None):
        self.llm_service = llm_service
        self.gate = gate or CapabilityGate()

    def analyze(
        self,
        image: "ImagePart",
        language: str = "en",
        tier: EngineTier | str = EngineTier.PREMIUM,
    ) -> AnalysisResult:
        """Analyze a site image

        Args:
            image: image to analyze
            language: response language
            tier: session engine tier

        Returns:
            AnalysisResult

        Raises:
            CapabilityDenied: below premium
            GenerationFailure: empty or invalid output
        """
        self.gate.require(Capability.VISUAL_ANALYSIS, tier)

        prompt = IMAGE_ANALYSIS_PROMPT.format(language_instruction=get_language_instruction(language))
        messages = [Message(role="user", content=prompt, images=[image])]

        try:
            response = self.llm_service.generate(
                messages,
                model=settings.model_for_tier(tier),
                temperature=0.2,
                response_schema=AnalysisOutput.model_json_schema(),
            )
        except Exception as e:
            logger.error(f"[{self.name}] Generation call failed: {e}")
            raise GenerationFailure(self.name, reason=str(e)) from e

        text = (response.content or "").strip()
        if not text:
            raise GenerationFailure(self.name, reason="empty response")

        try:
            result = AnalysisResult.model_validate(AnalysisOutput.model_validate_json(text).to_wire())
        except ValidationError as e:
            reason = describe_errors(e)
            logger.error(f"[{self.name}] Invalid analysis: {reason}. Raw text: {text}")
            raise GenerationFailure(self.name, raw_text=text, reason=reason) from e

        logger.info(f"[{self.name}] {len(result.objects)} objects detected")
        return result
