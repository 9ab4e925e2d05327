"""Quality control documents"""

from flocore.models import DocumentType

from .base import document_specialist
from .hse import KPI
from .schemas import NUMBER, STRING, STRING_LIST, array, enum, obj
from .site_manager import CHECKLIST_ITEM

DOMAIN = "quality"
DOMAIN_LABEL = "quality control document"
ROLE_LABEL = "quality control engineers"

TASKS = {
    "quality_management_plan": "Project-wide quality management system and procedures.",
    "inspection_test_plan": "Inspection and test plan (ITP) with hold and witness points.",
    "quality_control_checklist": "Trade-specific quality verification checklist.",
    "inspection_report": "Record of a completed inspection and its outcome.",
    "test_certificate": "Certified results of a material or system test.",
    "non_conformance_report_qc": "Quality non-conformance with root cause and disposition (NCR).",
    "quality_audit_report": "Audit of quality system compliance.",
    "corrective_action_request": "Formal request for corrective action (CAR).",
    "quality_performance_metrics": "Quality KPIs and trends for a reporting period.",
    "material_certification_record": "Verification of supplier material certificates.",
    "commissioning_procedure": "Step-by-step commissioning of a building system.",
    "hold_point_notification": "Notice that work has reached an inspection hold point.",
    "quality_surveillance_report": "Observations from quality surveillance of an area.",
}

_DOCUMENTS = [
    (
        "quality_management_plan", "Quality Management Plan", DocumentType.QUALITY_MANAGEMENT_PLAN,
        {
            "standardReference": enum("ISO 9001:2015 Principles"),
            "projectId": STRING,
            "preparedBy": STRING,
            "revision": NUMBER,
            "sections": array(obj({"title": STRING, "content": STRING})),
        },
        "- Structure the plan along ISO 9001:2015 principles.",
    ),
    (
        "inspection_test_plan", "Inspection and Test Plan (ITP)", DocumentType.INSPECTION_TEST_PLAN,
        {
            "planTitle": STRING,
            "trade": STRING,
            "items": array(
                obj({
                    "activity": STRING,
                    "referenceSpec": STRING,
                    "inspectionType": enum("Visual", "Measurement", "Test", "Surveillance"),
                    "acceptanceCriteria": STRING,
                    "interventionPoint": enum("Hold", "Witness", "Surveillance"),
                    "record": STRING,
                })
            ),
        },
        "- Each activity names its reference specification, acceptance criteria and intervention point (Hold, Witness or Surveillance).",
    ),
    (
        "quality_control_checklist", "Quality Control Checklist", DocumentType.QUALITY_CONTROL_CHECKLIST,
        {
            "inspectionDate": STRING,
            "inspector": STRING,
            "trade": STRING,
            "area": STRING,
            "items": array(CHECKLIST_ITEM),
        },
        "- Each checklist item has status Pass, Fail or N/A.",
    ),
    (
        "inspection_report", "Inspection Report", DocumentType.INSPECTION_REPORT,
        {
            "reportNumber": STRING,
            "inspectionDate": STRING,
            "inspector": STRING,
            "areaInspected": STRING,
            "findings": STRING_LIST,
            "status": enum("Approved", "Approved as Noted", "Rejected"),
        },
        "- Set status to Approved, Approved as Noted or Rejected based on the findings.",
    ),
    (
        "test_certificate", "Test Certificate", DocumentType.TEST_CERTIFICATE,
        {
            "certificateNumber": STRING,
            "testDate": STRING,
            "materialOrSystem": STRING,
            "testStandard": STRING,
            "testResults": array(obj({"parameter": STRING, "value": STRING, "result": enum("Pass", "Fail")})),
            "certifiedBy": STRING,
        },
        "- Name the test standard and give a Pass/Fail result per parameter.",
    ),
    (
        "non_conformance_report_qc", "Non-Conformance Report (QC)", DocumentType.NON_CONFORMANCE_REPORT_QC,
        {
            "standardReference": enum("ISO 9001 Principles"),
            "ncrNumber": STRING,
            "dateIssued": STRING,
            "description": STRING,
            "specClauseViolated": STRING,
            "rootCauseAnalysis": STRING,
            "correctiveAction": STRING,
            "preventiveAction": STRING,
            "disposition": enum("Rework", "Use As-Is", "Scrap"),
        },
        "- Cite the violated specification clause and choose a disposition (Rework, Use As-Is or Scrap).",
    ),
    (
        "quality_audit_report", "Quality Audit Report", DocumentType.QUALITY_AUDIT_REPORT,
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
        "corrective_action_request", "Corrective Action Request (CAR)", DocumentType.CORRECTIVE_ACTION_REQUEST,
        {
            "carNumber": STRING,
            "dateIssued": STRING,
            "issuedTo": STRING,
            "nonConformanceReference": STRING,
            "description": STRING,
            "requiredAction": STRING,
            "deadline": STRING,
        },
        "- Reference the originating non-conformance and give a deadline for the required action.",
    ),
    (
        "quality_performance_metrics", "Quality Performance Metrics", DocumentType.QUALITY_PERFORMANCE_METRICS,
        {
            "reportingPeriod": STRING,
            "kpis": array(KPI),
            "summary": STRING,
        },
        "- Each KPI has a value, a target and a trend (Improving, Stable or Declining).",
    ),
    (
        "material_certification_record", "Material Certification Record",
        DocumentType.MATERIAL_CERTIFICATION_RECORD,
        {
            "recordDate": STRING,
            "material": STRING,
            "supplier": STRING,
            "certificateNumber": STRING,
            "complianceStatus": enum("Verified", "Pending", "Rejected"),
        },
        "- Set complianceStatus to Verified, Pending or Rejected.",
    ),
    (
        "commissioning_procedure", "Commissioning Procedure", DocumentType.COMMISSIONING_PROCEDURE,
        {
            "systemName": STRING,
            "procedureNumber": STRING,
            "steps": array(
                obj({"stepNumber": NUMBER, "description": STRING, "expectedResult": STRING, "record": STRING})
            ),
        },
        "- Each step states the expected result and the record to keep.",
    ),
    (
        "hold_point_notification", "Hold Point Notification", DocumentType.HOLD_POINT_NOTIFICATION,
        {
            "notificationDate": STRING,
            "holdPointReference": STRING,
            "description": STRING,
            "requiredInspectionDate": STRING,
            "issuedBy": STRING,
        },
        "- Reference the ITP hold point and request an inspection date.",
    ),
    (
        "quality_surveillance_report", "Quality Surveillance Report", DocumentType.QUALITY_SURVEILLANCE_REPORT,
        {
            "reportDate": STRING,
            "surveyor": STRING,
            "area": STRING,
            "observations": STRING_LIST,
            "complianceStatus": enum("Compliant", "Minor Issues", "Major Issues"),
        },
        "- Set complianceStatus to Compliant, Minor Issues or Major Issues.",
    ),
]

SPECIALISTS = [
    document_specialist(key, name, doc_type.value, ROLE_LABEL, fields, instructions)
    for key, name, doc_type, fields, instructions in _DOCUMENTS
]
