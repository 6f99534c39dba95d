from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from kai.nlu.schema import Language, UrgencyTier
from kai.nlu.text import contains_any

# Explicit requests for a human. Matched as plain substrings, so "escalate"
# also covers "please escalate" and friends; the longer forms are kept for
# readability of the list.
ESCALATION_PHRASES: List[str] = [
    # direct
    "escalate", "i want to escalate", "please escalate",
    # human
    "talk to human", "talk to a human", "speak to human", "speak to a human",
    "i want to talk to a human", "i need to talk to a human",
    "real person", "real person please", "connect me to a person",
    # health worker
    "call a nurse", "call nurse", "need a nurse", "i need a nurse",
    "call a doctor", "call doctor", "need a doctor", "i need a doctor",
    "speak to nurse", "speak to doctor", "talk to nurse", "talk to doctor",
    "speak to a nurse", "speak to a doctor", "talk to a nurse", "talk to a doctor",
    "talk to a health worker", "speak to a health worker",
    # help
    "i need help", "help me please", "please help me",
    "connect me to someone", "transfer me", "get someone",
    # Krio
    "a want tok to dokta", "a want tok to nos", "a nid elp",
    "kol dokta", "kol nos", "a want tok to pɔsin",
]


def is_explicit_escalation_request(text: Optional[str]) -> bool:
    return bool(contains_any(text, ESCALATION_PHRASES))


# ----------------------------
# User-facing messages: (banner, body) per language
# ----------------------------

Message = Dict[Language, Tuple[str, str]]

DEFLECTION: Message = {
    Language.EN: (
        "",
        "I understand you'd like to speak to someone. Before I connect you, let me try to help you directly.\n\n"
        "Could you tell me more about what you need? I can assist with:\n"
        "• Health questions and symptom guidance\n"
        "• Finding health facilities near you\n"
        "• Information about diseases and prevention\n\n"
        "If you still prefer to speak to a human health worker, just let me know and I'll connect you right away.",
    ),
    Language.KRI: (
        "",
        "A ɔndastand se yu want tok to pɔsin. Mek a tray ɛp yu fɔs.\n\n"
        "Tɛl mi wetin yu nid? A go fit ɛp yu wit:\n"
        "• Ɛlt kwɛshɔn dɛm\n"
        "• Fɛn klinik klos tu yu\n"
        "• Infɔmeshɔn abawt sik\n\n"
        "If yu stil want tok to ɛlt wɔka, jɔs tɛl mi ɛn a go kɔnɛkt yu.",
    ),
}

ESCALATED_EMERGENCY: Message = {
    Language.EN: (
        "🚨 EMERGENCY ESCALATED",
        "Your case has been flagged as an emergency and sent to our health workers immediately. "
        "Someone will contact you very soon.\n\n"
        "In the meantime, if this is a life-threatening emergency, please also go to the nearest "
        "health facility or call emergency services.",
    ),
    Language.KRI: (
        "🚨 EMƐJƐNSI",
        "Yu kes dɔn go na ɛlt wɔka dɛm. Dɛn go kɔl yu kwik kwik. If i siryɔs bad, go na ɔspitul naw naw!",
    ),
}

ESCALATED_URGENT: Message = {
    Language.EN: (
        "⚠️ CASE ESCALATED",
        "Your case has been escalated to a health worker. Someone will contact you shortly on this number.\n\n"
        "Please keep your phone nearby.",
    ),
    Language.KRI: (
        "⚠️ KES DƆN GO",
        "Yu kes dɔn go na ɛlt wɔka. Dɛn go kɔl yu sun sun. Kip yu fon klos tu yu.",
    ),
}

ESCALATED_NORMAL: Message = {
    Language.EN: (
        "✅ REQUEST RECEIVED",
        "Your request has been forwarded to a health worker. Someone will contact you soon.\n\n"
        "Thank you for your patience.",
    ),
    Language.KRI: (
        "✅ RIKWEST DƆN GO",
        "Yu rikwest dɔn go na ɛlt wɔka. Dɛn go kɔl yu. Tenki fɔ pesɛns.",
    ),
}

ESCALATION_FAILED: Message = {
    Language.EN: (
        "",
        "I apologize, but I encountered an issue while trying to connect you with a health worker. "
        "Please try again in a moment, or contact your nearest health facility directly.",
    ),
    Language.KRI: (
        "",
        "Sɔri, a gɛt prɔblɛm fɔ kɔnɛkt yu to ɛlt wɔka. "
        "Duya tray agen smɔl tɛm, ɔ go na di ɛlt fasɛliti klos tu yu.",
    ),
}


def urgency_level(tier: Optional[UrgencyTier]) -> str:
    """Three-level wording used in health-worker reports."""
    if tier == UrgencyTier.EMERGENCY:
        return "emergency"
    if tier == UrgencyTier.URGENT:
        return "urgent"
    return "normal"


def confirmation_message(tier: Optional[UrgencyTier]) -> Message:
    level = urgency_level(tier)
    if level == "emergency":
        return ESCALATED_EMERGENCY
    if level == "urgent":
        return ESCALATED_URGENT
    return ESCALATED_NORMAL


PRIORITY_BY_LEVEL = {"emergency": "urgent", "urgent": "high", "normal": "normal"}


def priority_for(tier: Optional[UrgencyTier]) -> str:
    return PRIORITY_BY_LEVEL[urgency_level(tier)]


EMERGENCY_REASON_PREFIX = "emergency_symptom"


def trigger_type_for(reason: str) -> str:
    """Webhook trigger type: automatic emergency hand-off or an explicit user request."""
    if (reason or "").startswith(EMERGENCY_REASON_PREFIX):
        return "emergency_symptom"
    return "user_request"


# ----------------------------
# Health-worker report
# ----------------------------

_REPORT_HEADER = {
    "emergency": "🚨 EMERGENCY",
    "urgent": "⚠️ URGENT",
    "normal": "📋 ESCALATION",
}


@dataclass
class EscalationReport:
    escalation_id: str
    user_id: str
    reason: str
    urgency_tier: UrgencyTier
    latest_message: str
    timestamp: str


def format_escalation_report(report: EscalationReport) -> str:
    level = urgency_level(report.urgency_tier)
    return (
        f"{_REPORT_HEADER[level]} REPORT\n\n"
        f"🆔 Escalation: {report.escalation_id}\n"
        f"👤 User: {report.user_id}\n"
        f"🕐 Time: {report.timestamp}\n\n"
        f"📝 REASON:\n{report.reason}\n\n"
        f"⚠️ LATEST MESSAGE:\n\"{report.latest_message}\"\n\n"
        f"---\nPlease respond to this user."
    )
