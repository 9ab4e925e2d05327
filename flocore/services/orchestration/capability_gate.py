"""Capability gate

Central table of the minimum engine tier each feature needs.
"""

import logging

from flocore.errors import CapabilityDenied
from flocore.models import EngineTier

from .models import Capability

logger = logging.getLogger(__name__)

CAPABILITY_TIERS: dict[Capability, EngineTier] = {
    Capability.VISUAL_ANALYSIS: EngineTier.PREMIUM,
    Capability.VISUAL_FOLLOW_UP: EngineTier.PREMIUM,
    Capability.COPILOT: EngineTier.PREMIUM,
    Capability.STRUCTURAL_CALCULATION: EngineTier.PREMIUM,
    Capability.GEOTECHNICAL_CALCULATION: EngineTier.PREMIUM,
    Capability.RAG_CONTEXT: EngineTier.PREMIUM,
    Capability.REPORT_SUGGESTIONS: EngineTier.PREMIUM,
    Capability.DOCUMENT_GENERATION: EngineTier.COMPACT,
    Capability.CONVERSATION: EngineTier.COMPACT,
    Capability.TEXT_REVISION: EngineTier.COMPACT,
}


class CapabilityGate:
    """Checks a session's engine tier against the capability table"""

    def __init__(self, table: dict[Capability, EngineTier] | None = None):
        self.table = dict(CAPABILITY_TIERS if table is None else table)

    def minimum_tier(self, capability: Capability) -> EngineTier:
        # Unlisted capabilities need the top tier
        return self.table.get(Capability(capability), EngineTier.PREMIUM)

    def allows(self, capability: Capability, tier: EngineTier | str) -> bool:
        return EngineTier.parse(tier) >= self.minimum_tier(capability)

    def require(self, capability: Capability, tier: EngineTier | str) -> None:
        """Raise CapabilityDenied when `tier` is below the capability's minimum"""
        tier = EngineTier.parse(tier)
        required = self.minimum_tier(capability)
        if tier < required:
            logger.info(f"Capability '{Capability(capability).value}' denied at tier '{tier.value}'")
            raise CapabilityDenied(Capability(capability), required, tier)
