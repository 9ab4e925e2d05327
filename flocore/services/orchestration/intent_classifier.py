"""Intent classifier

Classifies one user turn with the constrained classifier. The previous AI
response is given as context so that answers to clarifying questions are
classified correctly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from flocore.models import ConversationMessage
from flocore.prompts import format_intent_prompt
from flocore.prompts.common import LANGUAGE_NAMES
from flocore.services.specialists import hse, quality, site_manager
from flocore.services.specialists.schemas import BOOLEAN, STRING, enum
from flocore.settings import settings

from .history_builder import summarize_content
from .models import Intent, IntentType

if TYPE_CHECKING:
    from .constrained_classifier import ConstrainedClassifier

logger = logging.getLogger(__name__)

# Document role -> domain module holding its task table
DOCUMENT_ROLES = {
    "site_manager": site_manager,
    "hse_officer": hse,
    "quality_control": quality,
}

# Roles the classifier may name that have no document agent
OTHER_ROLES = (
    "project_manager",
    "contractor",
    "client",
    "architect",
    "engineer",
    "surveyor",
)

ROLES = [*DOCUMENT_ROLES, *OTHER_ROLES]


class IntentClassifier:
    """Supervisor-level intent classification"""

    def __init__(self, classifier: "ConstrainedClassifier", context_chars: int | None = None):
        """
        Args:
            classifier: constrained classifier
            context_chars: length limit of the previous-response context
                (settings.intent_context_chars when None)
        """
        self.classifier = classifier
        self.context_chars = settings.intent_context_chars if context_chars is None else context_chars

    def previous_response(self, history: Sequence[ConversationMessage] | None) -> str | None:
        """Last completed AI message, serialized to one line and truncated"""
        for message in reversed(list(history or [])):
            if not isinstance(message, ConversationMessage):
                continue
            if message.author == "ai" and not message.is_typing and not message.is_placeholder:
                text = summarize_content(message.content)
                return text[: self.context_chars] if text else None
        return None

    def classify(
        self,
        prompt: str,
        history: Sequence[ConversationMessage] | None = None,
        language: str = "en",
    ) -> Intent:
        """Classify the user's turn

        Args:
            prompt: user request
            history: conversation thread (for the previous AI response)
            language: user language code

        Returns:
            Intent (Intent.conversation() on any classification failure)
        """
        classification_prompt = format_intent_prompt(
            prompt,
            language_name=LANGUAGE_NAMES.get(language, "English"),
            roles=ROLES,
            documents_by_role={role: list(module.TASKS) for role, module in DOCUMENT_ROLES.items()},
            previous_response=self.previous_response(history),
        )

        result = self.classifier.classify(
            classification_prompt,
            choices=[t.value for t in IntentType],
            fallback=IntentType.CONVERSATION.value,
            field="intent",
            extra_properties={
                "role": enum(*ROLES),
                "documentType": STRING,
                "sufficientData": BOOLEAN,
            },
        )
        if result.used_fallback:
            return Intent.conversation()

        fields = result.fields
        role = fields.get("role") if fields.get("role") in ROLES else None
        document_type = fields.get("documentType") or None
        sufficient = fields.get("sufficientData", True)

        intent = Intent(
            intent_type=IntentType(result.label),
            role=role,
            document_type=document_type,
            sufficient_data=sufficient if isinstance(sufficient, bool) else True,
            raw_response=result.raw_response,
        )
        logger.info(
            f"Intent: {intent.intent_type.value} (role={intent.role}, "
            f"documentType={intent.document_type}, sufficientData={intent.sufficient_data})"
        )
        return intent
