"""Sub-task detector (one per domain agent)"""

import logging
from typing import TYPE_CHECKING

from flocore.prompts import format_subtask_prompt

if TYPE_CHECKING:
    from .constrained_classifier import ConstrainedClassifier

logger = logging.getLogger(__name__)

UNSUPPORTED_TASK = "unsupported_task"


class SubtaskDetector:
    """Maps a domain request onto one of the domain's task tags"""

    def __init__(
        self,
        domain: str,
        tasks: dict[str, str],
        classifier: "ConstrainedClassifier",
        domain_label: str | None = None,
    ):
        """
        Args:
            domain: domain key (e.g. "structural")
            tasks: task tag -> one-line description
            classifier: constrained classifier
            domain_label: wording used in the prompt (domain key when None)
        """
        self.domain = domain
        self.tasks = dict(tasks)
        self.classifier = classifier
        self.domain_label = domain_label or domain.replace("_", " ")

    @property
    def choices(self) -> list[str]:
        return [*self.tasks, UNSUPPORTED_TASK]

    def detect(self, prompt: str) -> str:
        """Task tag for `prompt`; UNSUPPORTED_TASK when nothing fits or on failure"""
        result = self.classifier.classify(
            format_subtask_prompt(prompt, self.domain_label, self.tasks),
            choices=self.choices,
            fallback=UNSUPPORTED_TASK,
            field="task",
        )
        logger.info(f"[{self.domain}] Sub-task: {result.label}")
        return result.label
