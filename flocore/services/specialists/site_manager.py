"""Site manager documents"""

from flocore.models import DocumentType

from .base import document_specialist
from .schemas import NUMBER, STRING, STRING_LIST, array, enum, obj

DOMAIN = "site_manager"
DOMAIN_LABEL = "construction site management document"
ROLE_LABEL = "site managers"

TASKS = {
    "daily_site_report": "For daily progress reports, site logs.",
    "site_diary_journal_entry": "For chronological site diary or journal entries.",
    "progress_report": "For weekly or monthly progress reports with variance analysis.",
    "incident_report": "For reports about accidents, near-misses, or safety violations.",
    "site_safety_report": "For daily safety conditions, hazard identification.",
    "toolbox_talk_record": "For daily safety briefings, attendance, topics.",
    "site_inspection_checklist": "For quality control verification across trades.",
    "weather_condition_report": "For environmental impact on construction.",
    "equipment_usage_log": "For heavy equipment deployment, hours, maintenance.",
    "material_delivery_record": "For receipt verification, quality checks, storage.",
    "site_meeting_minutes": "For daily huddles, coordination meetings, problem resolution.",
    "non_conformance_report": "For quality issues identification and response.",
    "site_instruction_record": "For field directives and clarifications.",
    "temporary_works_certificate": "For scaffolding, formwork, temp structure approvals.",
}

CHECKLIST_ITEM = obj(
    {"item": STRING, "status": enum("Pass", "Fail", "N/A"), "notes": STRING},
    required=["item", "status"],
)

_DOCUMENTS = [
    (
        "daily_site_report", "Daily Site Report", DocumentType.DAILY_SITE_REPORT,
        {
            "reportDate": STRING,
            "weather": STRING,
            "personnel": array(obj({"trade": STRING, "count": NUMBER})),
            "equipment": array(obj({"name": STRING, "hours": NUMBER})),
            "workCompleted": STRING_LIST,
            "materialsDelivered": STRING_LIST,
            "delaysOrIssues": STRING_LIST,
            "safetyObservations": STRING_LIST,
        },
        """- **reportDate**: Use today's date in a readable format.
- **weather**: Use the weather data from the project context.
- **personnel**: Use the team data to list trades and their counts.
- **equipment**: Infer equipment usage from the equipment status, the user's request and alerts.
- **workCompleted**: An alert about an approved change order or a responded RFI means that task is completed.
- **delaysOrIssues**: List the alerts of WARNING or CRITICAL urgency.""",
    ),
    (
        "site_diary_journal_entry", "Site Diary/Journal Entry", DocumentType.SITE_DIARY_JOURNAL_ENTRY,
        {
            "entryDate": STRING,
            "author": STRING,
            "entries": array(obj({"time": STRING, "activity": STRING, "notes": STRING}, required=["time", "activity"])),
        },
        "- Record the day's events in chronological order; the author is the preparer.",
    ),
    (
        "progress_report", "Progress Report", DocumentType.PROGRESS_REPORT,
        {
            "reportingPeriod": STRING,
            "executiveSummary": STRING,
            "progressAgainstSchedule": STRING,
            "costPerformance": STRING,
            "risksAndIssues": STRING_LIST,
            "lookAhead": STRING,
        },
        "- Report progress and variance against schedule and cost, then the look-ahead for the next period.",
    ),
    (
        "incident_report", "Incident Report", DocumentType.INCIDENT_REPORT,
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
        "- Follow the OSHA 301 format; give a factual description, a root cause analysis and corrective actions.",
    ),
    (
        "site_safety_report", "Site Safety Report", DocumentType.SITE_SAFETY_REPORT,
        {
            "reportDate": STRING,
            "inspector": STRING,
            "positiveObservations": STRING_LIST,
            "identifiedHazards": array(
                obj({"hazard": STRING, "riskLevel": enum("Low", "Medium", "High"), "recommendedAction": STRING})
            ),
        },
        "- Rate each identified hazard Low, Medium or High and give a recommended action.",
    ),
    (
        "toolbox_talk_record", "Toolbox Talk Record", DocumentType.TOOLBOX_TALK_RECORD,
        {
            "date": STRING,
            "topic": STRING,
            "presenter": STRING,
            "attendees": STRING_LIST,
            "keyPointsDiscussed": STRING_LIST,
        },
        "- Attendees come from the team on site; key points are short and actionable.",
    ),
    (
        "site_inspection_checklist", "Site Inspection Checklist", DocumentType.SITE_INSPECTION_CHECKLIST,
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
        "weather_condition_report", "Weather Condition Report", DocumentType.WEATHER_CONDITION_REPORT,
        {
            "reportDate": STRING,
            "temperature": STRING,
            "wind": STRING,
            "precipitation": STRING,
            "impactOnActivities": STRING,
        },
        "- Use the weather data from the project context and assess its impact on planned activities.",
    ),
    (
        "equipment_usage_log", "Equipment Usage Log", DocumentType.EQUIPMENT_USAGE_LOG,
        {
            "logDate": STRING,
            "logs": array(
                obj({"equipment": STRING, "operator": STRING, "hoursUsed": NUMBER, "notes": STRING},
                    required=["equipment", "operator", "hoursUsed"])
            ),
        },
        "- Log every piece of equipment in the project context with operator and hours used.",
    ),
    (
        "material_delivery_record", "Material Delivery Record", DocumentType.MATERIAL_DELIVERY_RECORD,
        {
            "deliveryDate": STRING,
            "records": array(
                obj({
                    "material": STRING,
                    "supplier": STRING,
                    "quantity": STRING,
                    "qualityCheckStatus": enum("Pass", "Fail"),
                    "storageLocation": STRING,
                })
            ),
        },
        "- Each delivery records the quality check result (Pass or Fail) and the storage location.",
    ),
    (
        "site_meeting_minutes", "Site Meeting Minutes", DocumentType.SITE_MEETING_MINUTES,
        {
            "meetingDate": STRING,
            "attendees": STRING_LIST,
            "agenda": STRING_LIST,
            "decisionsMade": STRING_LIST,
            "actionItems": array(obj({"action": STRING, "responsible": STRING, "deadline": STRING})),
        },
        "- Every action item names a responsible person and a deadline.",
    ),
    (
        "non_conformance_report", "Non-Conformance Report", DocumentType.NON_CONFORMANCE_REPORT,
        {
            "standardReference": enum("ISO 9001 Principles"),
            "reportDate": STRING,
            "issueDescription": STRING,
            "rootCause": STRING,
            "correctiveActionProposed": STRING,
            "actionTaken": STRING,
            "verificationOfEffectiveness": STRING,
        },
        "- Follow ISO 9001 principles: issue, root cause, corrective action and verification of effectiveness.",
    ),
    (
        "site_instruction_record", "Site Instruction Record", DocumentType.SITE_INSTRUCTION_RECORD,
        {
            "instructionDate": STRING,
            "instructionNumber": STRING,
            "issuedBy": STRING,
            "issuedTo": STRING,
            "instructionDetails": STRING,
        },
        "- The instruction is issued by the preparer; details are precise and unambiguous.",
    ),
    (
        "temporary_works_certificate", "Temporary Works Certificate", DocumentType.TEMPORARY_WORKS_CERTIFICATE,
        {
            "certificateDate": STRING,
            "descriptionOfWorks": STRING,
            "designer": STRING,
            "checker": STRING,
            "approvalStatus": enum("Approved", "Approved with Comments", "Rejected"),
        },
        "- Set approvalStatus to Approved, Approved with Comments or Rejected.",
    ),
]

SPECIALISTS = [
    document_specialist(key, name, doc_type.value, ROLE_LABEL, fields, instructions)
    for key, name, doc_type, fields, instructions in _DOCUMENTS
]
