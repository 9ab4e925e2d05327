"""Field co-pilot agent

Answers a question using the live camera frame (Context A) and a device
screenshot (Context B). Premium only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from flocore.models import EngineTier
from flocore.prompts import COPILOT_SYSTEM_PROMPT, NOISY_ENVIRONMENT_INSTRUCTION, get_language_instruction
from flocore.services.llm.base import Message
from flocore.settings import settings

from .capability_gate import CapabilityGate
from .models import Capability
from .streaming import StreamingChannel

if TYPE_CHECKING:
    from flocore.services.llm.base import BaseLLMService, ImagePart


class CoPilotAgent:
    """Multimodal streaming co-pilot"""

    def __init__(self, llm_service: "BaseLLMService", gate: CapabilityGate | None = None):
        self.llm_service = llm_service
        self.gate = gate or CapabilityGate()

    def stream(
        self,
        prompt: str,
        camera_frame: "ImagePart | None" = None,
        screenshot: "ImagePart | None" = None,
        language: str = "en",
        tier: EngineTier | str = EngineTier.PREMIUM,
    ) -> StreamingChannel:
        """Open a co-pilot stream

        Raises:
            CapabilityDenied: below premium
        """
        self.gate.require(Capability.COPILOT, tier)

        system_prompt = (
            COPILOT_SYSTEM_PROMPT.format(language_instruction=get_language_instruction(language))
            + NOISY_ENVIRONMENT_INSTRUCTION
        )

        images = []
        lines = []
        if camera_frame is not None:
            images.append(camera_frame)
            lines.append("Context A (Camera): the first attached image.")
        else:
            lines.append("Context A (Camera): not available.")
        if screenshot is not None:
            images.append(screenshot)
            position = "second" if camera_frame is not None else "first"
            lines.append(f"Context B (Device Screen): the {position} attached image.")
        else:
            lines.append("Context B (Device Screen): not available.")
        lines.append(f'User question: "{prompt}"')

        messages = [
            Message(role="system", content=system_prompt),
            Message(role="user", content="\n".join(lines), images=images),
        ]
        model = settings.model_for_tier(tier)

        def factory() -> Iterator[str]:
            return self.llm_service.stream_generate(messages, model=model)

        return StreamingChannel(factory, name="Co-Pilot")
