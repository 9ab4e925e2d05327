"""
Prompt module.

This package centralizes the LLM prompts used for classification, retrieval,
conversation and specialist generation.
"""

from .common import (
    NO_RAG_CONTEXT_SUFFIX,
    NOISY_ENVIRONMENT_INSTRUCTION,
    format_rag_block,
    get_language_instruction,
)

from .conversation import (
    CONVERSATION_SYSTEM_PROMPT,
    COPILOT_SYSTEM_PROMPT,
    FOLLOW_UP_SYSTEM_PROMPT,
    IMAGE_ANALYSIS_PROMPT,
    REPORT_SUGGESTIONS_PROMPT,
    TEXT_REVISION_PROMPT,
)

from .intent_classification import format_intent_prompt

from .rag import RAG_NOT_FOUND, format_selection_prompt, format_synthesis_prompt

from .specialists import fill_template

from .subtask_detection import format_preflight_prompt, format_subtask_prompt

__all__ = [
    # Shared fragments
    "NO_RAG_CONTEXT_SUFFIX",
    "NOISY_ENVIRONMENT_INSTRUCTION",
    "format_rag_block",
    "get_language_instruction",
    # Conversation / co-pilot / analysis / utility
    "CONVERSATION_SYSTEM_PROMPT",
    "COPILOT_SYSTEM_PROMPT",
    "FOLLOW_UP_SYSTEM_PROMPT",
    "IMAGE_ANALYSIS_PROMPT",
    "REPORT_SUGGESTIONS_PROMPT",
    "TEXT_REVISION_PROMPT",
    # Classification
    "format_intent_prompt",
    "format_preflight_prompt",
    "format_subtask_prompt",
    # Retrieval
    "RAG_NOT_FOUND",
    "format_selection_prompt",
    "format_synthesis_prompt",
    # Specialists
    "fill_template",
]
