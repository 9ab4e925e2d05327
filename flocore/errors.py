"""Orchestration exceptions

Raised where the failure happens; only the Supervisor turns them into
user-facing text.
"""


class OrchestrationError(Exception):
    """Base class for orchestration failures"""


class CapabilityDenied(OrchestrationError):
    """The session's engine tier is below the capability's minimum tier"""

    def __init__(self, capability, required, actual):
        self.capability = capability
        self.required = required
        self.actual = actual
        super().__init__(
            f"{getattr(capability, 'value', capability)} requires the "
            f"{getattr(required, 'value', required)} engine "
            f"(current: {getattr(actual, 'value', actual)})"
        )


class UnsupportedTask(OrchestrationError):
    """No handler is registered for the detected domain/task"""

    def __init__(self, domain: str, task: str | None = None):
        self.domain = domain
        self.task = task
        detail = f"{domain}/{task}" if task else domain
        super().__init__(f"Unsupported task: {detail}")


class GenerationFailure(OrchestrationError):
    """A generation call returned nothing usable

    The raw model text is kept for logging; it is never shown to the user.
    """

    def __init__(self, specialist: str, raw_text: str | None = None, reason: str | None = None):
        self.specialist = specialist
        self.raw_text = raw_text
        self.reason = reason
        message = f"{specialist} failed to produce a valid result"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
