"""Conversation history builder

Turns the caller's thread into the turns sent to the generation client.
"""

from __future__ import annotations

from typing import Sequence, Union

from flocore.models import (
    AnalysisContent,
    CalculationPayload,
    ConversationMessage,
    DocumentPayload,
    DocumentType,
    HistoryTurn,
    TextContent,
)
from flocore.services.llm.base import Message

HistoryItem = Union[ConversationMessage, HistoryTurn]


def _one_line(text: str) -> str:
    return " ".join(str(text).split())


def _document_summary(payload: DocumentPayload) -> str:
    extra = payload.result.model_extra or {}
    result_type = payload.result.result_type
    if result_type == DocumentType.DAILY_SITE_REPORT and extra.get("reportDate"):
        return f"Generated a daily site report for {extra['reportDate']}."
    if result_type == DocumentType.INCIDENT_REPORT and extra.get("dateOfIncident"):
        return f"Generated an incident report for an event on {extra['dateOfIncident']}."
    return f"Generated a {payload.task}."


def summarize_content(content) -> str:
    """One-line digest of a message's content

    Structured payloads collapse to their headline result; text is passed
    through with whitespace folded.
    """
    if isinstance(content, CalculationPayload):
        answer = content.result.conclusion.final_answer
        value = f"{answer.value} {answer.unit}".strip()
        if content.domain == "geotechnical":
            return (
                f"[Geotechnical Calculation Result: {content.task}] "
                f"Final Answer: {answer.name} is {value}."
            )
        return f"[Structural Calculation Result: {content.task}] Final Answer: {value}."

    if isinstance(content, DocumentPayload):
        return f"[Document Task: {content.task}] Summary: {_document_summary(content)}"

    if isinstance(content, AnalysisContent):
        return f"[AI Analysis Summary]: {_one_line(content.summary)}"

    if isinstance(content, TextContent):
        return _one_line(content.text)

    return _one_line(str(content))


class HistoryBuilder:
    """Windows and serializes the conversation thread"""

    def build(self, messages: Sequence[HistoryItem]) -> list[HistoryTurn]:
        """Serialize the prior turns of a thread

        The thread is expected as the UI holds it: an optional greeting
        placeholder first, then the turns, then the current user prompt and
        the in-flight AI slot (is_typing). The greeting, the in-flight slot
        and the user prompt right before it are dropped; any other typing
        message is skipped.

        A list that is already made of HistoryTurn objects is returned
        unchanged.

        Args:
            messages: conversation thread or previously built turns

        Returns:
            serialized turns, oldest first
        """
        items = list(messages)
        if all(isinstance(m, HistoryTurn) for m in items):
            return items

        thread = [m for m in items if isinstance(m, ConversationMessage)]

        if thread and (
            thread[0].is_placeholder
            or (thread[0].author == "ai" and not any(m.is_placeholder for m in thread))
        ):
            thread = thread[1:]

        if thread and thread[-1].author == "ai" and thread[-1].is_typing:
            thread = thread[:-1]
            if thread and thread[-1].author == "user":
                thread = thread[:-1]

        turns = []
        for message in thread:
            if message.is_typing or message.is_placeholder:
                continue
            text = summarize_content(message.content)
            if not text:
                continue
            turns.append(HistoryTurn(role="user" if message.author == "user" else "model", text=text))
        return turns

    def to_messages(self, turns: Sequence[HistoryItem]) -> list[Message]:
        """Map turns onto generation-client messages"""
        return [
            Message(role="user" if turn.role == "user" else "assistant", content=turn.text)
            for turn in self.build(turns)
        ]

    def render_transcript(self, turns: Sequence[HistoryItem]) -> str:
        """Render turns as `role: text` lines (providers without multi-turn input)"""
        return "\n".join(f"{turn.role}: {turn.text}" for turn in self.build(turns))
