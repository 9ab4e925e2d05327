"""Conversation history builder tests"""

from flocore.models import (
    AnalysisContent,
    CalculationPayload,
    CalculationResult,
    ConversationMessage,
    DocumentPayload,
    DocumentResult,
    HistoryTurn,
)
from flocore.services.orchestration import HistoryBuilder, summarize_content


def calculation(domain="structural", name="Required Reinforcement", value="3-D22", unit="bars"):
    result = CalculationResult.model_validate(
        {
            "governingStandard": "ACI 318-19",
            "problemStatement": "p",
            "calculationSteps": [],
            "conclusion": {"summary": "s", "finalAnswer": {"name": name, "value": value, "unit": unit}},
        }
    )
    return CalculationPayload(domain=domain, task="Reinforced Concrete Beam Design", result=result)


class TestHistoryBuilder:
    def test_windowing(self, thread):
        turns = HistoryBuilder().build(thread)

        assert turns == [
            HistoryTurn(role="user", text="What is the cover for footings?"),
            HistoryTurn(role="model", text="75 mm for concrete cast against earth."),
        ]

    def test_idempotent(self, thread):
        builder = HistoryBuilder()
        once = builder.build(thread)

        assert builder.build(once) == once
        assert builder.build(builder.build(once)) == once

    def test_unflagged_greeting_dropped(self):
        thread = [
            ConversationMessage.ai("Hello!"),
            ConversationMessage.user("hi"),
            ConversationMessage.ai("How can I help?"),
        ]

        turns = HistoryBuilder().build(thread)

        assert [t.text for t in turns] == ["hi", "How can I help?"]

    def test_typing_messages_skipped(self):
        thread = [
            ConversationMessage.placeholder("Hello!"),
            ConversationMessage.user("first"),
            ConversationMessage.ai("partial", is_typing=True),
            ConversationMessage.user("second"),
            ConversationMessage.ai("done"),
        ]

        turns = HistoryBuilder().build(thread)

        assert [t.text for t in turns] == ["first", "second", "done"]

    def test_empty(self):
        assert HistoryBuilder().build([]) == []
        assert HistoryBuilder().build([ConversationMessage.placeholder("Hi")]) == []

    def test_to_messages(self, thread):
        messages = HistoryBuilder().to_messages(thread)

        assert [m.role for m in messages] == ["user", "assistant"]

    def test_render_transcript(self, thread):
        transcript = HistoryBuilder().render_transcript(thread)

        assert transcript == (
            "user: What is the cover for footings?\n"
            "model: 75 mm for concrete cast against earth."
        )


class TestSummarizeContent:
    def test_structural(self):
        assert summarize_content(calculation()) == (
            "[Structural Calculation Result: Reinforced Concrete Beam Design] Final Answer: 3-D22 bars."
        )

    def test_geotechnical(self):
        payload = calculation(domain="geotechnical", name="Allowable bearing capacity", value="150", unit="kPa")

        assert summarize_content(payload).endswith("Final Answer: Allowable bearing capacity is 150 kPa.")

    def test_daily_report(self):
        payload = DocumentPayload(
            task="Daily Site Report",
            result=DocumentResult.model_validate({"resultType": "DAILY_SITE_REPORT", "reportDate": "May 1, 2025"}),
        )

        assert summarize_content(payload) == (
            "[Document Task: Daily Site Report] Summary: Generated a daily site report for May 1, 2025."
        )

    def test_other_document(self):
        payload = DocumentPayload(
            task="Risk Assessment", result=DocumentResult.model_validate({"resultType": "RISK_ASSESSMENT"})
        )

        assert summarize_content(payload) == "[Document Task: Risk Assessment] Summary: Generated a Risk Assessment."

    def test_analysis(self):
        content = AnalysisContent(summary="Two workers\nwithout helmets.")

        assert summarize_content(content) == "[AI Analysis Summary]: Two workers without helmets."

    def test_payload_turn_in_history(self):
        thread = [ConversationMessage(author="ai", content=calculation())]

        turns = HistoryBuilder().build([ConversationMessage.placeholder("Hi"), *thread])

        assert turns[0].role == "model"
        assert turns[0].text.startswith("[Structural Calculation Result:")
