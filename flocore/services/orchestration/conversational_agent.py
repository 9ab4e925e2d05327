"""Conversational agent

General questions and visual follow-ups, streamed. At premium tier the
system instruction is enriched with retrieved project-document context.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Sequence

from flocore.models import EngineTier, RagContext, UserProfile
from flocore.prompts import (
    CONVERSATION_SYSTEM_PROMPT,
    FOLLOW_UP_SYSTEM_PROMPT,
    NOISY_ENVIRONMENT_INSTRUCTION,
    get_language_instruction,
)
from flocore.prompts.conversation import FOLLOW_UP_ANALYSIS_BLOCK, FOLLOW_UP_RAG_PRIORITY_NOTE
from flocore.services.llm.base import Message
from flocore.settings import settings

from .capability_gate import CapabilityGate
from .history_builder import HistoryBuilder, HistoryItem
from .models import Capability
from .rag_injector import RagContextInjector
from .streaming import StreamingChannel

if TYPE_CHECKING:
    from flocore.services.llm.base import BaseLLMService, ImagePart


class ConversationalAgent:
    """Streaming conversational responder"""

    def __init__(
        self,
        llm_service: "BaseLLMService",
        gate: CapabilityGate | None = None,
        history_builder: HistoryBuilder | None = None,
        rag_injector: RagContextInjector | None = None,
    ):
        """
        Args:
            llm_service: generation client
            gate: capability gate
            history_builder: thread serializer
            rag_injector: retrieval context (no retrieval when None)
        """
        self.llm_service = llm_service
        self.gate = gate or CapabilityGate()
        self.history_builder = history_builder or HistoryBuilder()
        self.rag_injector = rag_injector

    def lookup_context(self, prompt: str, tier: EngineTier | str) -> RagContext | None:
        """Retrieval context for the prompt; None below premium or without a corpus"""
        if self.rag_injector is None or not self.gate.allows(Capability.RAG_CONTEXT, tier):
            return None
        return self.rag_injector.lookup(prompt)

    def build_messages(
        self,
        prompt: str,
        history: Sequence[HistoryItem],
        profile: UserProfile,
        rag_context: RagContext | None = None,
    ) -> list[Message]:
        """Messages for one conversational turn

        Premium sends the history as native multi-turn messages; lower tiers
        get a single prompt with the transcript inlined.
        """
        system_prompt = (
            CONVERSATION_SYSTEM_PROMPT.format(language_instruction=get_language_instruction(profile.language))
            + RagContextInjector.build_instruction(rag_context)
            + NOISY_ENVIRONMENT_INSTRUCTION
        )
        messages = [Message(role="system", content=system_prompt)]

        turns = self.history_builder.build(history)
        if profile.engine_tier >= EngineTier.PREMIUM:
            messages.extend(self.history_builder.to_messages(turns))
            messages.append(Message(role="user", content=prompt))
        else:
            transcript = self.history_builder.render_transcript(turns)
            content = f"{transcript}\nuser: {prompt}" if transcript else prompt
            messages.append(Message(role="user", content=content))
        return messages

    def stream(
        self,
        prompt: str,
        history: Sequence[HistoryItem],
        profile: UserProfile,
        rag_context: RagContext | None = None,
    ) -> StreamingChannel:
        """Open a conversational stream

        Args:
            prompt: user prompt
            history: conversation thread
            profile: requesting user
            rag_context: retrieved context (see lookup_context)

        Returns:
            StreamingChannel (generation starts on first iteration)
        """
        self.gate.require(Capability.CONVERSATION, profile.engine_tier)
        messages = self.build_messages(prompt, history, profile, rag_context)
        model = settings.model_for_tier(profile.engine_tier)

        def factory() -> Iterator[str]:
            return self.llm_service.stream_generate(messages, model=model)

        return StreamingChannel(factory, name="Conversation")

    def stream_follow_up(
        self,
        prompt: str,
        image: "ImagePart",
        analysis_summary: str,
        profile: UserProfile,
        rag_context: RagContext | None = None,
    ) -> StreamingChannel:
        """Answer a follow-up question about an analyzed image (premium only)

        Raises:
            CapabilityDenied: below premium
        """
        self.gate.require(Capability.VISUAL_FOLLOW_UP, profile.engine_tier)

        system_prompt = FOLLOW_UP_SYSTEM_PROMPT.format(
            language_instruction=get_language_instruction(profile.language)
        )
        if rag_context is not None:
            system_prompt += RagContextInjector.build_instruction(rag_context, FOLLOW_UP_RAG_PRIORITY_NOTE)
        system_prompt += FOLLOW_UP_ANALYSIS_BLOCK.format(analysis_summary=analysis_summary)
        system_prompt += NOISY_ENVIRONMENT_INSTRUCTION

        messages = [
            Message(role="system", content=system_prompt),
            Message(role="user", content=prompt, images=[image]),
        ]
        model = settings.model_for_tier(profile.engine_tier)

        def factory() -> Iterator[str]:
            return self.llm_service.stream_generate(messages, model=model)

        return StreamingChannel(factory, name="Visual Follow-up")
