"""
Sub-task detection and pre-flight prompts.
"""

SUBTASK_DETECTION_PROMPT = """Analyze the user's {domain_label} request and classify it into ONE of the following categories. Choose the most specific and relevant category.

Categories:
{categories}
- 'unsupported_task': For any other task not listed above or if the request is too vague.

Respond with only the specified JSON format.

User Request: "{prompt}\""""

PREFLIGHT_PROMPT = """Does the following user prompt contain enough specific numerical information ({needed}) to perform a quantitative {task_name} calculation? Respond with only the specified JSON format.

User prompt: "{prompt}\""""


def format_subtask_prompt(prompt: str, domain_label: str, tasks: dict[str, str]) -> str:
    """Build the sub-task classification prompt

    Args:
        prompt: user request
        domain_label: e.g. "structural engineering"
        tasks: task tag -> one-line description
    """
    categories = "\n".join(f"- '{tag}': {description}" for tag, description in tasks.items())
    return SUBTASK_DETECTION_PROMPT.format(
        domain_label=domain_label, categories=categories, prompt=prompt
    )


def format_preflight_prompt(prompt: str, task_name: str, needed: str) -> str:
    return PREFLIGHT_PROMPT.format(prompt=prompt, task_name=task_name, needed=needed)
