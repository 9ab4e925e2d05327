"""Specialist generator

A specialist is one rubric + output model unit producing one structured
result type (a calculation or a document).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from datetime import date
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ValidationError

from flocore.errors import GenerationFailure
from flocore.models import CalculationResult, DocumentResult
from flocore.prompts.specialists import (
    DERIVATION_RULE,
    DOCUMENT_RUBRIC,
    GEOTECHNICAL_RUBRIC,
    SPECIALIST_REQUEST,
    STRUCTURAL_RUBRIC,
    fill_template,
)
from flocore.services.llm.base import Message
from flocore.settings import settings

from .schemas import OutputModel, calculation_model, document_model

if TYPE_CHECKING:
    from flocore.services.llm.base import BaseLLMService

logger = logging.getLogger(__name__)


def describe_errors(error: ValidationError, limit: int = 5) -> str:
    """Short reason text for a rejected model reply"""
    details = error.errors()
    if any(d["type"] == "json_invalid" for d in details):
        return "invalid JSON"
    return "; ".join(
        f"{'.'.join(str(part) for part in d['loc']) or 'output'}: {d['msg']}" for d in details[:limit]
    )


@dataclass(frozen=True)
class Preflight:
    """Information check run before an expensive calculation

    `needed` names the data the prompt must contain; a negative answer from
    the classifier yields InsufficientInput listing `missing`.
    """

    needed: str
    missing: tuple[str, ...]


@dataclass(frozen=True)
class Specialist:
    """Structured generator for one sub-task"""

    key: str
    name: str
    rubric: str
    output_model: type[OutputModel]
    result_tag: str
    kind: Literal["calculation", "document"]
    temperature: float = 0.1
    required_inputs: tuple[str, ...] = ()
    preflight: Preflight | None = None
    request_suffix: str = ""

    @cached_property
    def schema(self) -> dict:
        """JSON schema sent as `response_schema`"""
        return self.output_model.model_json_schema()

    @property
    def tag_field(self) -> str:
        return "calculationType" if self.kind == "calculation" else "resultType"

    @property
    def result_model(self) -> type[BaseModel]:
        return CalculationResult if self.kind == "calculation" else DocumentResult

    def system_instruction(self, **context) -> str:
        """Rubric filled with the request context

        Calculation context: standard. Document context: user_name,
        project_context (rendered block), today.
        """
        values = {
            "standard": context.get("standard") or settings.calculation_standard,
            "user_name": context.get("user_name") or "the site team",
            "project_context": context.get("project_context") or "No live project data available.",
            "today": context.get("today") or date.today().strftime("%B %d, %Y"),
        }
        return fill_template(self.rubric, **values)

    def request_text(self, prompt: str) -> str:
        return fill_template(
            SPECIALIST_REQUEST,
            tag_field=self.tag_field,
            result_tag=self.result_tag,
            extra=self.request_suffix,
            prompt=prompt,
        )

    def calculate(
        self, llm: "BaseLLMService", prompt: str, model: str | None = None, **context
    ) -> BaseModel:
        """Run the specialist

        Args:
            llm: generation client
            prompt: user request
            model: model override (settings.model_specialist when None)
            **context: standard / user_name / project_context / today

        Returns:
            CalculationResult or DocumentResult

        Raises:
            GenerationFailure: empty output, transport error, invalid JSON or
                schema violation
        """
        messages = [
            Message(role="system", content=self.system_instruction(**context)),
            Message(role="user", content=self.request_text(prompt)),
        ]

        try:
            response = llm.generate(
                messages,
                model=model or settings.model_specialist,
                temperature=self.temperature,
                response_schema=self.schema,
            )
        except Exception as e:
            logger.error(f"[{self.name}] Generation call failed: {e}")
            raise GenerationFailure(self.name, reason=str(e)) from e

        text = (response.content or "").strip()
        if not text:
            logger.error(f"[{self.name}] Empty response from the model")
            raise GenerationFailure(self.name, reason="empty response")

        try:
            output = self.output_model.model_validate_json(text)
        except ValidationError as e:
            reason = describe_errors(e)
            logger.error(f"[{self.name}] Output rejected: {reason}. Raw text: {text}")
            raise GenerationFailure(self.name, raw_text=text, reason=reason) from e

        try:
            result = self.result_model.model_validate(output.to_wire())
        except ValidationError as e:
            logger.error(f"[{self.name}] Result validation failed: {e}. Raw text: {text}")
            raise GenerationFailure(self.name, raw_text=text, reason="result validation failed") from e

        logger.info(f"[{self.name}] Structured result received")
        return result


# =============================================================================
# Builders used by the domain tables
# =============================================================================

def structural_specialist(
    key: str,
    name: str,
    calculation_type: str,
    specialty: str,
    instructions: str,
    required_inputs: tuple[str, ...],
    extra_properties: dict | None = None,
    extra_required: list[str] | None = None,
    preflight: Preflight | None = None,
    request_suffix: str = "",
) -> Specialist:
    rubric = fill_template(
        STRUCTURAL_RUBRIC,
        specialty=specialty,
        derivation_rule=DERIVATION_RULE,
        task_instructions=instructions,
    )
    return Specialist(
        key=key,
        name=name,
        rubric=rubric,
        output_model=calculation_model(calculation_type, extra_properties, extra_required),
        result_tag=calculation_type,
        kind="calculation",
        required_inputs=required_inputs,
        preflight=preflight,
        request_suffix=request_suffix,
    )


def geotechnical_specialist(
    key: str,
    name: str,
    calculation_type: str,
    specialty: str,
    instructions: str,
    required_inputs: tuple[str, ...],
    extra_properties: dict | None = None,
) -> Specialist:
    rubric = fill_template(
        GEOTECHNICAL_RUBRIC,
        specialty=specialty,
        derivation_rule=DERIVATION_RULE,
        task_instructions=instructions,
    )
    return Specialist(
        key=key,
        name=name,
        rubric=rubric,
        output_model=calculation_model(calculation_type, extra_properties, geotechnical=True),
        result_tag=calculation_type,
        kind="calculation",
        required_inputs=required_inputs,
    )


def document_specialist(
    key: str,
    name: str,
    result_type: str,
    role_label: str,
    fields: dict,
    instructions: str,
) -> Specialist:
    rubric = fill_template(
        DOCUMENT_RUBRIC,
        role_label=role_label,
        document_name=name,
        task_instructions=instructions,
    )
    return Specialist(
        key=key,
        name=name,
        rubric=rubric,
        output_model=document_model(result_type, fields),
        result_tag=result_type,
        kind="document",
        temperature=0.2,
    )
