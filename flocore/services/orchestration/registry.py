"""Specialist registry and domain agents

Level-2 routing: a domain agent detects the sub-task and dispatches to the
registered specialist.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING, Callable, Iterable

from flocore.errors import CapabilityDenied, GenerationFailure, UnsupportedTask
from flocore.models import CalculationPayload, DocumentPayload, EngineTier
from flocore.prompts import format_preflight_prompt

from .models import AgentDescriptor, Capability, InsufficientInput
from .subtask_detector import SubtaskDetector

if TYPE_CHECKING:
    from flocore.services.llm.base import BaseLLMService
    from flocore.services.specialists import Specialist

    from .constrained_classifier import ConstrainedClassifier

logger = logging.getLogger(__name__)


class SpecialistRegistry:
    """Static map from task key to AgentDescriptor

    Construction fails unless the descriptors cover the domain's task table
    exactly.
    """

    def __init__(self, domain: str, tasks: Iterable[str], descriptors: Iterable[AgentDescriptor]):
        self.domain = domain
        self._descriptors = {d.key: d for d in descriptors}

        expected = set(tasks)
        missing = expected - set(self._descriptors)
        unknown = set(self._descriptors) - expected
        if missing or unknown:
            raise ValueError(
                f"Registry for '{domain}' does not match its task table "
                f"(missing: {sorted(missing)}, unknown: {sorted(unknown)})"
            )

    def __contains__(self, key) -> bool:
        return key in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def keys(self) -> list[str]:
        return list(self._descriptors)

    def get(self, key: str | None) -> AgentDescriptor | None:
        return self._descriptors.get(key) if key else None


class DomainAgent:
    """Sub-task detection and dispatch for one professional domain"""

    def __init__(
        self,
        domain: str,
        domain_label: str,
        tasks: dict[str, str],
        specialists: list["Specialist"],
        llm_service: "BaseLLMService",
        classifier: "ConstrainedClassifier",
        capability: Capability,
        minimum_tier: EngineTier,
        common_inputs: tuple[str, ...] = (),
    ):
        """
        Args:
            domain: domain key ("structural", "site_manager", ...)
            domain_label: wording used in classification prompts
            tasks: task tag -> description
            specialists: one specialist per task tag
            llm_service: generation client handed to the specialists
            classifier: constrained classifier (sub-task detection, pre-flight)
            capability: capability reported when a tier check fails
            minimum_tier: minimum tier of every specialist in the domain
            common_inputs: data every task of the domain needs; requested when
                the prompt is incomplete and no task can be detected
        """
        self.domain = domain
        self.domain_label = domain_label
        self.common_inputs = tuple(common_inputs)
        self.capability = capability
        self.llm_service = llm_service
        self.classifier = classifier
        self.specialists = {s.key: s for s in specialists}
        self.detector = SubtaskDetector(domain, tasks, classifier, domain_label)
        self.registry = SpecialistRegistry(
            domain,
            tasks,
            [
                AgentDescriptor(key=s.key, minimum_tier=minimum_tier, handler=partial(s.calculate, llm_service))
                for s in specialists
            ],
        )

    def resolve(self, prompt: str, task: str | None = None) -> str:
        """Task key: `task` when it is registered, otherwise the detector's answer"""
        if task and task in self.registry:
            return task
        return self.detector.detect(prompt)

    def run(
        self,
        prompt: str,
        tier: EngineTier | str = EngineTier.PREMIUM,
        sufficient_data: bool = True,
        task: str | None = None,
        on_generate: Callable[[], None] | None = None,
        **context,
    ) -> CalculationPayload | DocumentPayload | InsufficientInput:
        """Detect the sub-task and run its specialist

        Args:
            prompt: user request
            tier: session engine tier
            sufficient_data: intent classifier's data-sufficiency verdict
            task: task key already known (e.g. the intent's documentType)
            on_generate: called once the handler is resolved and allowed, before
                any further model call
            **context: passed to the specialist (standard, user_name, ...)

        Returns:
            CalculationPayload / DocumentPayload, or InsufficientInput

        Raises:
            UnsupportedTask: no handler for the resolved key (a complete request,
                or a domain without common inputs)
            CapabilityDenied: tier below the handler's minimum
            GenerationFailure: the handler failed
        """
        key = self.resolve(prompt, task)
        descriptor = self.registry.get(key)
        if descriptor is None:
            if not sufficient_data and self.common_inputs:
                logger.info(f"[{self.domain}] No task detected for an incomplete request")
                return InsufficientInput(
                    specialist=f"{self.domain_label} calculation", missing=list(self.common_inputs)
                )
            raise UnsupportedTask(self.domain, key)

        tier = EngineTier.parse(tier)
        if tier < descriptor.minimum_tier:
            raise CapabilityDenied(self.capability, descriptor.minimum_tier, tier)

        specialist = self.specialists[key]
        if on_generate is not None:
            on_generate()

        if not sufficient_data and specialist.required_inputs:
            logger.info(f"[{specialist.name}] Insufficient input reported by intent classification")
            return InsufficientInput(specialist=specialist.name, missing=list(specialist.required_inputs))

        if specialist.preflight is not None:
            ok = self.classifier.confirm(
                format_preflight_prompt(prompt, specialist.name.lower(), specialist.preflight.needed),
                fallback=True,
            )
            if not ok:
                logger.info(f"[{specialist.name}] Pre-flight check: missing information")
                return InsufficientInput(specialist=specialist.name, missing=list(specialist.preflight.missing))

        try:
            result = descriptor.handler(prompt, **context)
        except GenerationFailure:
            raise
        except Exception as e:
            logger.error(f"[{specialist.name}] Handler raised: {e}")
            raise GenerationFailure(specialist.name, reason=str(e)) from e

        if specialist.kind == "calculation":
            return CalculationPayload(domain=self.domain, task=specialist.name, result=result)
        return DocumentPayload(task=specialist.name, result=result)
