from __future__ import annotations

from typing import List, Optional

from kai.lexicon.loader import Lexicon
from kai.nlu.schema import (
    Language,
    LocalizedBlock,
    ResponseKind,
    Role,
    StructuredResponse,
    SymptomEntry,
    SymptomMatch,
    UrgencyTier,
)
from kai.policies.escalation import (
    DEFLECTION,
    ESCALATION_FAILED,
    Message,
    confirmation_message,
)

# Output order of the bilingual blocks
LANGUAGES = (Language.EN, Language.KRI)

STAFF_ROLES = {Role.HEALTH_WORKER, Role.SUPERVISOR, Role.ADMIN}

_TIER_EMOJI = {
    UrgencyTier.EMERGENCY: "🚨",
    UrgencyTier.URGENT: "⚠️",
    UrgencyTier.MODERATE: "🔶",
    UrgencyTier.ROUTINE: "🟢",
}

_TIER_LABEL = {
    Language.EN: {
        UrgencyTier.EMERGENCY: "EMERGENCY",
        UrgencyTier.URGENT: "URGENT - Seek care today",
        UrgencyTier.MODERATE: "Moderate - Monitor closely",
        UrgencyTier.ROUTINE: "Mild - Home care appropriate",
    },
    Language.KRI: {
        UrgencyTier.EMERGENCY: "EMƐJƐNSI",
        UrgencyTier.URGENT: "ƆJƐNT - Go si dɔkta tide",
        UrgencyTier.MODERATE: "Mɔdɛret - Wach am gud",
        UrgencyTier.ROUTINE: "Smɔl - Om kia go du",
    },
}

_HEADINGS = {
    Language.EN: ("Home Care Tips:", "To help you better, can you tell me:"),
    Language.KRI: ("Om Kia Tips:", "Fɔ ɛp yu bɛta, tɛl mi:"),
}

FALLBACK: Message = {
    Language.EN: (
        "",
        "I understand you're not feeling well.\n\n"
        "**General Advice:**\n"
        "• Rest and drink plenty of fluids\n"
        "• Monitor your symptoms\n"
        "• If symptoms worsen or persist for more than 2-3 days, please visit a health facility\n\n"
        "Would you like me to help you find the nearest health facility?",
    ),
    Language.KRI: (
        "",
        "A ɔndastand se yu nɔ de fil fayn.\n\n"
        "**Jɛnɛral Advays:**\n"
        "• Res ɛn drink plenty wata\n"
        "• Wach yu bɔdi\n"
        "• If i wɔs ɔ pas 2-3 die, go na ɛlt fasɛliti\n\n"
        "Yu want mek a ɛp yu fɛn di klozes ɛlt fasɛliti?",
    ),
}


def tier_banner(tier: UrgencyTier, lang: Language) -> str:
    return f"{_TIER_EMOJI[tier]} {_TIER_LABEL[lang][tier]}"


class TriageResponder:
    def __init__(self, lexicon: Lexicon):
        self.lexicon = lexicon

    def render(self, match: SymptomMatch, lang: Language = Language.EN,
               role: Role = Role.SUPPORT) -> StructuredResponse:
        entry = self.lexicon.get(match.symptom_key) if match.matched else None
        if entry is None:
            return self._from_message(ResponseKind.FALLBACK, FALLBACK, lang)

        note = _staff_note(entry, match) if role in STAFF_ROLES else ""
        blocks = [self._entry_block(entry, l, note) for l in LANGUAGES]
        return StructuredResponse(
            kind=ResponseKind.TRIAGE,
            symptom_key=entry.key,
            urgency_tier=entry.urgency_tier,
            language=lang,
            blocks=blocks,
        )

    def _entry_block(self, entry: SymptomEntry, lang: Language, note: str) -> LocalizedBlock:
        advice = entry.advice.get(lang) or entry.advice[Language.EN]
        if entry.urgency_tier == UrgencyTier.EMERGENCY:
            # Emergency output is banner + advice only, whatever the data holds
            home_care: List[str] = []
            follow_up: List[str] = []
        else:
            home_care = list(entry.home_care.get(lang, ()))
            follow_up = list(entry.follow_up_questions.get(lang, ()))
        return LocalizedBlock(
            language=lang,
            banner=tier_banner(entry.urgency_tier, lang),
            advice=advice,
            home_care=home_care,
            follow_up=follow_up,
            note=note,
        )

    # ---- escalation messages ----

    def render_deflection(self, lang: Language = Language.EN) -> StructuredResponse:
        return self._from_message(ResponseKind.DEFLECTION, DEFLECTION, lang)

    def render_escalated(self, tier: Optional[UrgencyTier], lang: Language = Language.EN) -> StructuredResponse:
        resp = self._from_message(ResponseKind.ESCALATED, confirmation_message(tier), lang)
        resp.urgency_tier = tier
        return resp

    def render_escalation_failed(self, lang: Language = Language.EN) -> StructuredResponse:
        return self._from_message(ResponseKind.ESCALATION_FAILED, ESCALATION_FAILED, lang)

    @staticmethod
    def _from_message(kind: ResponseKind, message: Message, lang: Language) -> StructuredResponse:
        blocks = [
            LocalizedBlock(language=l, banner=message[l][0], advice=message[l][1])
            for l in LANGUAGES
        ]
        return StructuredResponse(kind=kind, language=lang, blocks=blocks)


def _staff_note(entry: SymptomEntry, match: SymptomMatch) -> str:
    return (
        f"Clinical note: {entry.key} | tier {entry.urgency_tier.value} | "
        f"match {match.source.value} ({match.confidence:.2f})"
    )


def render_text(response: Optional[StructuredResponse]) -> str:
    """Chat markup: bold banner, bullet lists, and a Krio section after a divider."""
    if response is None:
        return ""
    parts: List[str] = []
    for i, block in enumerate(response.blocks):
        if i > 0:
            parts.append("\n---\n🇸🇱 **Na Krio:**\n")
        if block.banner:
            parts.append(f"**{block.banner}**\n")
        parts.append(block.advice)
        care_heading, follow_heading = _HEADINGS[block.language]
        if block.home_care:
            parts.append(f"\n**{care_heading}**")
            parts.extend(f"• {tip}" for tip in block.home_care)
        if block.follow_up:
            parts.append(f"\n**{follow_heading}**")
            parts.extend(f"• {q}" for q in block.follow_up)
        if block.note:
            parts.append(f"\n_{block.note}_")
    return "\n".join(parts).strip()
