from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class UrgencyTier(str, Enum):
    EMERGENCY = "EMERGENCY"
    URGENT = "URGENT"
    MODERATE = "MODERATE"
    ROUTINE = "ROUTINE"

    @property
    def rank(self) -> int:
        """Higher is more urgent: EMERGENCY > URGENT > MODERATE > ROUTINE."""
        return _TIER_RANK[self]


_TIER_RANK = {
    UrgencyTier.EMERGENCY: 3,
    UrgencyTier.URGENT: 2,
    UrgencyTier.MODERATE: 1,
    UrgencyTier.ROUTINE: 0,
}


class Language(str, Enum):
    EN = "EN"
    KRI = "KRI"


class MatchSource(str, Enum):
    EXACT_KEYWORD = "EXACT_KEYWORD"
    FUZZY = "FUZZY"
    TRANSLATED_FALLBACK = "TRANSLATED_FALLBACK"
    UNMATCHED = "UNMATCHED"


class EscalationState(str, Enum):
    NONE = "NONE"
    REQUESTED_ONCE = "REQUESTED_ONCE"
    INSISTING = "INSISTING"


class Role(str, Enum):
    SUPPORT = "SUPPORT"
    HEALTH_WORKER = "HEALTH_WORKER"
    SUPERVISOR = "SUPERVISOR"
    ADMIN = "ADMIN"


class ResponseKind(str, Enum):
    TRIAGE = "TRIAGE"
    FALLBACK = "FALLBACK"
    DEFLECTION = "DEFLECTION"
    ESCALATED = "ESCALATED"
    ESCALATION_FAILED = "ESCALATION_FAILED"


UNKNOWN_SYMPTOM = "unknown"


class SymptomEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    urgency_tier: UrgencyTier
    advice: Dict[Language, str]
    home_care: Dict[Language, Tuple[str, ...]] = {}
    follow_up_questions: Dict[Language, Tuple[str, ...]] = {}


class VariantPhrase(BaseModel):
    model_config = ConfigDict(frozen=True)

    phrase: str
    symptom_key: str


class SymptomMatch(BaseModel):
    symptom_key: str = UNKNOWN_SYMPTOM
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    source: MatchSource = MatchSource.UNMATCHED
    matched_phrase: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.source != MatchSource.UNMATCHED


class IntentResult(BaseModel):
    intent_name: str
    confidence: float = Field(ge=0.0, le=1.0)
    matched_keywords: List[str] = []


class LocalizedBlock(BaseModel):
    language: Language
    banner: str = ""
    advice: str
    home_care: List[str] = []
    follow_up: List[str] = []
    note: str = ""  # clinical one-liner for staff roles


class StructuredResponse(BaseModel):
    kind: ResponseKind
    symptom_key: str = UNKNOWN_SYMPTOM
    urgency_tier: Optional[UrgencyTier] = None
    language: Language = Language.EN  # detected user language, not output order
    blocks: List[LocalizedBlock] = []


class TriageResult(BaseModel):
    response: StructuredResponse
    notice: Optional[StructuredResponse] = None
    escalate: bool = False
    escalation_reason: Optional[str] = None
    urgency_tier: Optional[UrgencyTier] = None
    escalation_state: EscalationState = EscalationState.NONE
    escalation_id: Optional[str] = None
    match: SymptomMatch
    intent: IntentResult
