"""
Intent classification prompt.

Classifies one user turn into structural / geotechnical / document_generation /
conversation, with role, documentType and data sufficiency.
"""

INTENT_CLASSIFICATION_PROMPT = """You are a supervisor AI. Your job is to analyze a user's request and classify it with extreme precision.
The user is communicating in {language_name}. Understand the request in that language.

Classification Rules:
1.  **Intent Classification**: First, classify the user's core **intent**.
    - `structural`: The user wants to design or analyze concrete, steel, rebar, beams, columns, connections, or slabs.
    - `geotechnical`: The user wants to analyze soil, foundations, bearing capacity, settlement, or slopes.
    - `document_generation`: The user wants to **create a document**. Keywords: "create", "draft", "generate", "make a report", "log", "plan", "assessment", "ITP", "NCR", "audit".
    - `conversation`: It's a general question, a follow-up, a greeting, or anything that isn't a direct command to calculate or create a document. A question about *capability* (e.g., "Can you calculate beams?") is a 'conversation'.

2.  **Role & Document Type (for 'document_generation' ONLY)**:
    - If the intent is `document_generation`, you MUST identify the responsible **role** and the specific **documentType**.
    - **Roles**: {roles}.
    - **Document Types**:
      - For 'site_manager': {site_manager_documents}.
      - For 'hse_officer': {hse_documents}.
      - For 'quality_control': {quality_documents}.
    - Example: "draft an incident report" -> role: 'site_manager', documentType: 'incident_report'.
    - Example: "create the health and safety plan" -> role: 'hse_officer', documentType: 'health_and_safety_plan'.
    - Example: "make a risk assessment for the excavation" -> role: 'hse_officer', documentType: 'risk_assessment'.
    - Example: "draft an ITP for concrete" -> role: 'quality_control', documentType: 'inspection_test_plan'.
    - Example: "create a non conformance report for the rebar" -> role: 'quality_control', documentType: 'non_conformance_report_qc'.

3.  **Data Sufficiency**:
    - For `structural` or `geotechnical` intents, determine if the user has provided **sufficient numerical data** to perform the calculation. Set `sufficientData` to `true` or `false`.
    - For `document_generation` and `conversation` intents, `sufficientData` is always `true`.
{context_block}
Respond with only the specified JSON format.

User Request: "{prompt}\""""

INTENT_CONTEXT_TEMPLATE = """
For context, the AI's previous response was: "{previous}..."
The user's new prompt is likely a direct response to this. If the AI asked a clarifying question, the user is likely providing the missing information.
"""


def _quoted(values) -> str:
    return ", ".join(f"'{v}'" for v in values)


def format_intent_prompt(
    prompt: str,
    language_name: str,
    roles: list[str],
    documents_by_role: dict[str, list[str]],
    previous_response: str | None = None,
) -> str:
    """Build the intent classification prompt

    Args:
        prompt: user request
        language_name: language the user writes in (e.g. "English")
        roles: every role the classifier may emit
        documents_by_role: document task keys per document role
        previous_response: serialized, already truncated previous AI response

    Returns:
        formatted prompt
    """
    context_block = ""
    if previous_response:
        context_block = INTENT_CONTEXT_TEMPLATE.format(previous=previous_response)

    return INTENT_CLASSIFICATION_PROMPT.format(
        language_name=language_name,
        roles=_quoted(roles),
        site_manager_documents=_quoted(documents_by_role.get("site_manager", [])),
        hse_documents=_quoted(documents_by_role.get("hse_officer", [])),
        quality_documents=_quoted(documents_by_role.get("quality_control", [])),
        context_block=context_block,
        prompt=prompt,
    )
