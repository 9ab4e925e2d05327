"""
Shared prompt fragments.

Language directive, noisy-site transcript notice and the retrieved-document
block appended to conversational system instructions.
"""

LANGUAGE_INSTRUCTIONS = {
    "en": "You MUST respond in English.",
    "id": "Anda HARUS merespons dalam Bahasa Indonesia.",
}

LANGUAGE_NAMES = {"en": "English", "id": "Indonesian"}

NOISY_ENVIRONMENT_INSTRUCTION = """

---
IMPORTANT CONTEXT: You are operating on a noisy construction site. The user's voice transcript may contain errors. Use your expert knowledge of construction and the visual context (if available) to infer the user's likely intent from a potentially imperfect transcript. For example, if the transcript says "check rebar's facing", it is highly probable the user meant "check rebar spacing". Be prepared to disambiguate or correct for common transcription errors."""

RAG_CONTEXT_TEMPLATE = """

---
CRITICAL CONTEXT FROM PROJECT DOCUMENT: "{source}"
You MUST prioritize the information in this context to answer the user's question. If the context is relevant, you MUST cite the source document in your answer (e.g., "According to {source}, ...").{priority_note}

CONTEXT:
{context}
---
"""

NO_RAG_CONTEXT_SUFFIX = " Answer based on your general knowledge."


def get_language_instruction(language: str | None) -> str:
    """Language directive for the given language code (English when unknown)"""
    return LANGUAGE_INSTRUCTIONS.get(language or "en", LANGUAGE_INSTRUCTIONS["en"])


def format_rag_block(context: str, source: str, priority_note: str = "") -> str:
    """Render a retrieved excerpt as a system-instruction block

    The excerpt is embedded verbatim.
    """
    return RAG_CONTEXT_TEMPLATE.format(source=source, context=context, priority_note=priority_note)
