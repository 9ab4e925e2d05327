"""Structured generation result models

Specialist output (calculations, documents, image analysis) and the payload
wrappers that carry it in the conversation. Payloads are discriminated by a
required `kind` field.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for models exchanged with the generation client (camelCase JSON)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='allow')

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# Calculation results
# =============================================================================

class CalculationStep(WireModel):
    """One step of a calculation; prose and math live in separate derivation entries"""
    title: str
    formula: str
    derivation_steps: List[str] = Field(default_factory=list)
    standard_reference: Optional[str] = None
    theory_reference: Optional[str] = None

    @model_validator(mode='after')
    def _check_reference(self) -> 'CalculationStep':
        if not ((self.standard_reference or '').strip() or (self.theory_reference or '').strip()):
            raise ValueError("standardReference or theoryReference is required")
        return self


class Verification(WireModel):
    """Code check"""
    check_name: str
    evaluation: str
    status: Literal['OK', 'FAIL', 'WARNING']
    standard_reference: str = Field(min_length=1)


class FinalAnswer(WireModel):
    name: str
    value: str
    unit: str = ''


class Conclusion(WireModel):
    summary: str
    final_answer: FinalAnswer


class CalculationResult(WireModel):
    """Structural or geotechnical calculation

    Structural results carry `governingStandard`; geotechnical results carry
    `governingTheory`. Extra fields (diagram data, drawing specs, shear steps,
    soil profile) are preserved.
    """
    governing_standard: Optional[str] = None
    governing_theory: Optional[str] = None
    problem_statement: str
    assumptions: List[str] = Field(default_factory=list)
    given_data: List[str] = Field(default_factory=list)
    calculation_steps: List[CalculationStep]
    verifications: List[Verification] = Field(default_factory=list)
    conclusion: Conclusion
    recommendations: Optional[List[str]] = None
    warnings: Optional[List[str]] = None

    @model_validator(mode='after')
    def _check_governing_basis(self) -> 'CalculationResult':
        if not (self.governing_standard or self.governing_theory):
            raise ValueError("governingStandard or governingTheory is required")
        return self

    @property
    def governing_basis(self) -> str:
        return self.governing_standard or self.governing_theory or ''


# =============================================================================
# Document results
# =============================================================================

class DocumentType(str, Enum):
    """Closed set of generated document types"""

    # Site manager
    DAILY_SITE_REPORT = 'DAILY_SITE_REPORT'
    SITE_DIARY_JOURNAL_ENTRY = 'SITE_DIARY_JOURNAL_ENTRY'
    PROGRESS_REPORT = 'PROGRESS_REPORT'
    INCIDENT_REPORT = 'INCIDENT_REPORT'
    SITE_SAFETY_REPORT = 'SITE_SAFETY_REPORT'
    TOOLBOX_TALK_RECORD = 'TOOLBOX_TALK_RECORD'
    SITE_INSPECTION_CHECKLIST = 'SITE_INSPECTION_CHECKLIST'
    WEATHER_CONDITION_REPORT = 'WEATHER_CONDITION_REPORT'
    EQUIPMENT_USAGE_LOG = 'EQUIPMENT_USAGE_LOG'
    MATERIAL_DELIVERY_RECORD = 'MATERIAL_DELIVERY_RECORD'
    SITE_MEETING_MINUTES = 'SITE_MEETING_MINUTES'
    NON_CONFORMANCE_REPORT = 'NON_CONFORMANCE_REPORT'
    SITE_INSTRUCTION_RECORD = 'SITE_INSTRUCTION_RECORD'
    TEMPORARY_WORKS_CERTIFICATE = 'TEMPORARY_WORKS_CERTIFICATE'

    # HSE officer
    HEALTH_AND_SAFETY_PLAN = 'HEALTH_AND_SAFETY_PLAN'
    RISK_ASSESSMENT = 'RISK_ASSESSMENT'
    METHOD_STATEMENT = 'METHOD_STATEMENT'
    HSE_ACCIDENT_REPORT = 'HSE_ACCIDENT_REPORT'
    SAFETY_AUDIT_REPORT = 'SAFETY_AUDIT_REPORT'
    JOB_SAFETY_ANALYSIS = 'JOB_SAFETY_ANALYSIS'
    SAFETY_INSPECTION_CHECKLIST = 'SAFETY_INSPECTION_CHECKLIST'
    TRAINING_RECORD = 'TRAINING_RECORD'
    PERMIT_TO_WORK = 'PERMIT_TO_WORK'
    ENVIRONMENTAL_MONITORING_REPORT = 'ENVIRONMENTAL_MONITORING_REPORT'
    WASTE_MANAGEMENT_RECORD = 'WASTE_MANAGEMENT_RECORD'
    EMERGENCY_RESPONSE_PLAN = 'EMERGENCY_RESPONSE_PLAN'
    SAFETY_PERFORMANCE_REPORT = 'SAFETY_PERFORMANCE_REPORT'
    NON_COMPLIANCE_NOTICE = 'NON_COMPLIANCE_NOTICE'

    # Quality control
    QUALITY_MANAGEMENT_PLAN = 'QUALITY_MANAGEMENT_PLAN'
    INSPECTION_TEST_PLAN = 'INSPECTION_TEST_PLAN'
    QUALITY_CONTROL_CHECKLIST = 'QUALITY_CONTROL_CHECKLIST'
    INSPECTION_REPORT = 'INSPECTION_REPORT'
    TEST_CERTIFICATE = 'TEST_CERTIFICATE'
    NON_CONFORMANCE_REPORT_QC = 'NON_CONFORMANCE_REPORT_QC'
    QUALITY_AUDIT_REPORT = 'QUALITY_AUDIT_REPORT'
    CORRECTIVE_ACTION_REQUEST = 'CORRECTIVE_ACTION_REQUEST'
    QUALITY_PERFORMANCE_METRICS = 'QUALITY_PERFORMANCE_METRICS'
    MATERIAL_CERTIFICATION_RECORD = 'MATERIAL_CERTIFICATION_RECORD'
    COMMISSIONING_PROCEDURE = 'COMMISSIONING_PROCEDURE'
    HOLD_POINT_NOTIFICATION = 'HOLD_POINT_NOTIFICATION'
    QUALITY_SURVEILLANCE_REPORT = 'QUALITY_SURVEILLANCE_REPORT'


class DocumentResult(WireModel):
    """Generated document; every field besides resultType is preserved as-is"""
    result_type: DocumentType


# =============================================================================
# Image analysis / retrieval
# =============================================================================

class Bounds(WireModel):
    left: float
    top: float
    width: float
    height: float


class DetectedObject(WireModel):
    id: int
    label: str
    confidence: float
    bounds: Bounds


class AnalysisResult(WireModel):
    """Image analysis: prose analysis plus detected objects"""
    analysis: str
    objects: List[DetectedObject] = Field(default_factory=list)


class RagContext(BaseModel):
    """Retrieved excerpt; source is always a name from the corpus listing"""
    context: str
    source: str


# =============================================================================
# Conversation payloads (discriminated on `kind`)
# =============================================================================

class TextContent(BaseModel):
    kind: Literal['text'] = 'text'
    text: str = ''


class AnalysisContent(BaseModel):
    kind: Literal['analysis'] = 'analysis'
    summary: str
    result: Optional[AnalysisResult] = None


class CalculationPayload(BaseModel):
    kind: Literal['calculation'] = 'calculation'
    domain: Literal['structural', 'geotechnical']
    task: str = Field(description="Display name, e.g. 'Reinforced Concrete Beam Design'")
    result: CalculationResult


class DocumentPayload(BaseModel):
    kind: Literal['document'] = 'document'
    task: str = Field(description="Display name, e.g. 'Daily Site Report'")
    result: DocumentResult
