"""HSE officer documents"""

from flocore.models import DocumentType

from .base import document_specialist
from .schemas import BOOLEAN, NUMBER, STRING, STRING_LIST, array, enum, obj
from .site_manager import CHECKLIST_ITEM

DOMAIN = "hse"
DOMAIN_LABEL = "health, safety and environment (HSE) document"
ROLE_LABEL = "HSE officers"

TASKS = {
    "health_and_safety_plan": "A comprehensive site safety management system.",
    "risk_assessment": "Activity-based hazard identification with probability/impact analysis.",
    "method_statement": "Safe work procedures for high-risk activities.",
    "accident_report": "Formal investigation of an accident or incident.",
    "safety_audit_report": "Regular safety system effectiveness evaluations.",
    "job_safety_analysis": "Task-specific hazard breakdown and controls (JSA).",
    "safety_inspection_checklist": "Daily/weekly safety condition verification.",
    "training_record": "Worker competency documentation and certifications.",
    "permit_to_work": "High-risk activity authorization (hot work, confined space).",
    "environmental_monitoring_report": "Air quality, noise, waste tracking.",
    "waste_management_record": "Disposal documentation and regulatory compliance.",
    "emergency_response_plan": "Site-specific emergency procedures and evacuation.",
    "safety_performance_report": "KPIs, trend analysis, benchmarking.",
    "non_compliance_notice": "Formal violation documentation with corrective requirements.",
}

KPI = obj({"metric": STRING, "value": STRING, "target": STRING, "trend": enum("Improving", "Stable", "Declining")})

_DOCUMENTS = [
    (
        "health_and_safety_plan", "Health and Safety Plan", DocumentType.HEALTH_AND_SAFETY_PLAN,
        {
            "standardReference": enum("ISO 45001 Principles"),
            "projectId": STRING,
            "preparedBy": STRING,
            "revision": NUMBER,
            "sections": array(obj({"title": STRING, "content": STRING})),
        },
        "- Structure the plan along ISO 45001 principles (policy, hazard identification, controls, emergency preparedness, monitoring).",
    ),
    (
        "risk_assessment", "Risk Assessment", DocumentType.RISK_ASSESSMENT,
        {
            "activity": STRING,
            "assessmentDate": STRING,
            "assessor": STRING,
            "risks": array(
                obj({
                    "hazard": STRING,
                    "risk": STRING,
                    "likelihood": NUMBER,
                    "severity": NUMBER,
                    "riskRating": NUMBER,
                    "mitigation": STRING,
                })
            ),
        },
        "- Likelihood and severity are scored 1-5; riskRating is likelihood x severity.",
    ),
    (
        "method_statement", "Method Statement (Safety)", DocumentType.METHOD_STATEMENT,
        {
            "activity": STRING,
            "preparedBy": STRING,
            "date": STRING,
            "steps": array(obj({"stepNumber": NUMBER, "description": STRING, "safetyPrecautions": STRING})),
        },
        "- Number the steps in execution order, each with its safety precautions.",
    ),
    (
        "accident_report", "Accident/Incident Report", DocumentType.HSE_ACCIDENT_REPORT,
        {
            "standardReference": enum("OSHA 301 Format"),
            "dateOfIncident": STRING,
            "timeOfIncident": STRING,
            "location": STRING,
            "personnelInvolved": STRING_LIST,
            "description": STRING,
            "rootCauseAnalysis": STRING,
            "correctiveActions": STRING_LIST,
            "witnesses": STRING_LIST,
        },
        "- Follow the OSHA 301 format; the root cause analysis drives the corrective actions.",
    ),
    (
        "safety_audit_report", "Safety Audit Report", DocumentType.SAFETY_AUDIT_REPORT,
        {
            "auditDate": STRING,
            "auditor": STRING,
            "scope": STRING,
            "findings": STRING_LIST,
            "nonConformities": STRING_LIST,
            "recommendations": STRING_LIST,
        },
        "- Separate general findings from non-conformities.",
    ),
    (
        "job_safety_analysis", "Job Safety Analysis (JSA)", DocumentType.JOB_SAFETY_ANALYSIS,
        {
            "task": STRING,
            "preparedBy": STRING,
            "date": STRING,
            "steps": array(obj({"step": STRING, "potentialHazards": STRING_LIST, "controls": STRING_LIST})),
        },
        "- Break the task into steps and list the hazards and controls of each step.",
    ),
    (
        "safety_inspection_checklist", "Safety Inspection Checklist", DocumentType.SAFETY_INSPECTION_CHECKLIST,
        {
            "inspectionDate": STRING,
            "inspector": STRING,
            "area": STRING,
            "items": array(CHECKLIST_ITEM),
        },
        "- Each checklist item has status Pass, Fail or N/A.",
    ),
    (
        "training_record", "Training Record", DocumentType.TRAINING_RECORD,
        {
            "courseTitle": STRING,
            "trainer": STRING,
            "date": STRING,
            "attendees": array(obj({"name": STRING, "signature": BOOLEAN})),
        },
        "- Attendees come from the team on site.",
    ),
    (
        "permit_to_work", "Permit to Work", DocumentType.PERMIT_TO_WORK,
        {
            "permitNumber": STRING,
            "date": STRING,
            "workDescription": STRING,
            "location": STRING,
            "precautions": STRING_LIST,
            "authorizedBy": STRING,
        },
        "- List the precautions required before the high-risk work may start.",
    ),
    (
        "environmental_monitoring_report", "Environmental Monitoring Report",
        DocumentType.ENVIRONMENTAL_MONITORING_REPORT,
        {
            "reportDate": STRING,
            "monitoredBy": STRING,
            "metrics": array(
                obj({
                    "parameter": enum("Air Quality", "Noise", "Water Quality"),
                    "value": STRING,
                    "status": enum("Compliant", "Action Required"),
                })
            ),
        },
        "- Report air quality, noise and water quality with a compliance status each.",
    ),
    (
        "waste_management_record", "Waste Management Record", DocumentType.WASTE_MANAGEMENT_RECORD,
        {
            "date": STRING,
            "records": array(
                obj({"wasteType": STRING, "quantity": STRING, "disposalMethod": STRING, "contractor": STRING})
            ),
        },
        "- Record each waste stream with its disposal method and contractor.",
    ),
    (
        "emergency_response_plan", "Emergency Response Plan", DocumentType.EMERGENCY_RESPONSE_PLAN,
        {
            "planVersion": STRING,
            "lastUpdated": STRING,
            "procedures": array(obj({"scenario": STRING, "steps": STRING_LIST})),
            "emergencyContacts": array(obj({"role": STRING, "name": STRING, "contact": STRING})),
        },
        "- Cover fire, medical emergency, structural collapse and severe weather scenarios at minimum.",
    ),
    (
        "safety_performance_report", "Safety Performance Report", DocumentType.SAFETY_PERFORMANCE_REPORT,
        {
            "reportingPeriod": STRING,
            "kpis": array(KPI),
            "incidentSummary": STRING,
            "leadingIndicators": STRING_LIST,
        },
        "- Each KPI has a value, a target and a trend (Improving, Stable or Declining).",
    ),
    (
        "non_compliance_notice", "Non-Compliance Notice", DocumentType.NON_COMPLIANCE_NOTICE,
        {
            "noticeNumber": STRING,
            "date": STRING,
            "issuedTo": STRING,
            "description": STRING,
            "requiredAction": STRING,
            "deadline": STRING,
        },
        "- State the violation, the required corrective action and its deadline.",
    ),
]

SPECIALISTS = [
    document_specialist(key, name, doc_type.value, ROLE_LABEL, fields, instructions)
    for key, name, doc_type, fields, instructions in _DOCUMENTS
]
