"""User, project and corpus models"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from typing_extensions import TypeAlias

Language: TypeAlias = Literal['en', 'id']

CALCULATION_STANDARDS = (
    'SNI 2847:2019 (Indonesia)',
    'ACI 318-19 (USA)',
    'Eurocode 2 (Europe)',
    'BS 8110 (UK)',
)


class EngineTier(str, Enum):
    """Engine tier, ordered compact < advanced < premium"""

    COMPACT = 'compact'
    ADVANCED = 'advanced'
    PREMIUM = 'premium'

    @property
    def rank(self) -> int:
        return _TIER_RANK[self.value]

    @classmethod
    def parse(cls, value: 'EngineTier | str') -> 'EngineTier':
        return value if isinstance(value, cls) else cls(str(value).lower())

    # str comparison would order tiers alphabetically
    def __lt__(self, other):
        if not isinstance(other, EngineTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, EngineTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, EngineTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, EngineTier):
            return NotImplemented
        return self.rank >= other.rank


_TIER_RANK = {'compact': 0, 'advanced': 1, 'premium': 2}


class UserProfile(BaseModel):
    """Requesting user"""
    name: str = Field(default='User', description="Display name, used as author of generated documents")
    language: Language = Field(default='en', description="Response language")
    calculation_standard: str = Field(default='ACI 318-19 (USA)', description="Design code for calculations")
    engine_tier: EngineTier = Field(default=EngineTier.PREMIUM, description="Engine tier of the session")


# =============================================================================
# Project context (factual input for document generation)
# =============================================================================

class TeamMember(BaseModel):
    name: str
    role: str
    status: str = 'On Site'


class EquipmentStatus(BaseModel):
    name: str
    status: str = 'Operational'
    hours: Optional[float] = None


class ProjectAlert(BaseModel):
    title: str
    message: str
    urgency: Literal['INFO', 'WARNING', 'CRITICAL'] = 'INFO'


class ProjectContext(BaseModel):
    """Live project state injected into document rubrics"""
    project_name: str = Field(default='', description="Project name")
    project_id: str = Field(default='', description="Project identifier")
    weather: str = Field(default='', description="Current weather summary")
    team: List[TeamMember] = Field(default_factory=list, description="Personnel on site")
    equipment: List[EquipmentStatus] = Field(default_factory=list, description="Equipment on site")
    progress: str = Field(default='', description="Schedule/progress summary")
    alerts: List[ProjectAlert] = Field(default_factory=list, description="Active site alerts")

    def to_prompt_block(self) -> str:
        """Render the context as a plain-text block for prompts"""
        lines = []
        if self.project_name or self.project_id:
            lines.append(f"Project: {self.project_name} {f'({self.project_id})' if self.project_id else ''}".strip())
        if self.weather:
            lines.append(f"Weather: {self.weather}")
        if self.team:
            lines.append("Team on site:")
            lines.extend(f"- {m.name} ({m.role}) - {m.status}" for m in self.team)
        if self.equipment:
            lines.append("Equipment:")
            for e in self.equipment:
                hours = f", {e.hours:g} h" if e.hours is not None else ''
                lines.append(f"- {e.name}: {e.status}{hours}")
        if self.progress:
            lines.append(f"Progress: {self.progress}")
        if self.alerts:
            lines.append("Active alerts:")
            lines.extend(f"- [{a.urgency}] {a.title}: {a.message}" for a in self.alerts)
        return "\n".join(lines) if lines else "No live project data available."


# =============================================================================
# Document corpus
# =============================================================================

class CorpusDocument(BaseModel):
    """One document in the project corpus"""
    name: str = Field(description="File name, used as the RAG source identifier")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Type, size, uploader, etc.")
