from kai.lexicon.loader import Lexicon
from kai.nlu.schema import (
    Language,
    MatchSource,
    ResponseKind,
    Role,
    SymptomEntry,
    SymptomMatch,
    UrgencyTier,
)
from kai.reasoner.responder import TriageResponder, render_text


def _match(key, source=MatchSource.FUZZY, confidence=0.8):
    return SymptomMatch(symptom_key=key, confidence=confidence, source=source)


def test_moderate_response_has_home_care_in_both_languages(lexicon):
    r = TriageResponder(lexicon).render(_match("headache"))
    assert r.kind == ResponseKind.TRIAGE
    assert r.urgency_tier == UrgencyTier.MODERATE
    assert [b.language for b in r.blocks] == [Language.EN, Language.KRI]
    assert all(b.home_care for b in r.blocks)
    assert "Moderate" in r.blocks[0].banner


def test_follow_up_questions_rendered_when_present(lexicon):
    r = TriageResponder(lexicon).render(_match("high_fever"))
    assert r.blocks[0].follow_up
    assert r.blocks[1].follow_up


def test_emergency_is_banner_and_advice_only(lexicon):
    r = TriageResponder(lexicon).render(_match("difficulty_breathing"))
    assert r.urgency_tier == UrgencyTier.EMERGENCY
    for b in r.blocks:
        assert b.banner.startswith("🚨")
        assert b.advice
        assert b.home_care == []
        assert b.follow_up == []


def test_emergency_purity_even_with_injected_home_care():
    # Lexicon built directly skips validation, so the bad entry gets through
    tainted = SymptomEntry(
        key="chest_pain",
        urgency_tier=UrgencyTier.EMERGENCY,
        advice={Language.EN: "Go to hospital now", Language.KRI: "Go na ɔspitul naw"},
        home_care={Language.EN: ("lie down",), Language.KRI: ("ledɔm",)},
        follow_up_questions={Language.EN: ("since when?",)},
    )
    r = TriageResponder(Lexicon([tainted], [])).render(_match("chest_pain"))
    assert all(b.home_care == [] and b.follow_up == [] for b in r.blocks)
    text = render_text(r)
    assert "lie down" not in text
    assert "since when?" not in text
    assert "Home Care" not in text


def test_unmatched_gets_bilingual_fallback(lexicon):
    r = TriageResponder(lexicon).render(SymptomMatch())
    assert r.kind == ResponseKind.FALLBACK
    assert r.urgency_tier is None
    assert "Rest and drink plenty of fluids" in r.blocks[0].advice
    assert "health facility" in r.blocks[0].advice
    assert r.blocks[1].language == Language.KRI


def test_unknown_key_gets_fallback(lexicon):
    r = TriageResponder(lexicon).render(_match("not_a_symptom"))
    assert r.kind == ResponseKind.FALLBACK


def test_detected_language_recorded_but_order_fixed(lexicon):
    r = TriageResponder(lexicon).render(_match("cough"), lang=Language.KRI)
    assert r.language == Language.KRI
    assert [b.language for b in r.blocks] == [Language.EN, Language.KRI]


def test_staff_roles_get_clinical_note(lexicon):
    responder = TriageResponder(lexicon)
    support = responder.render(_match("cough"), role=Role.SUPPORT)
    assert all(b.note == "" for b in support.blocks)
    for role in (Role.HEALTH_WORKER, Role.SUPERVISOR, Role.ADMIN):
        r = responder.render(_match("cough", confidence=0.8), role=role)
        assert "cough" in r.blocks[0].note
        assert "MODERATE" in r.blocks[0].note
        assert "FUZZY (0.80)" in r.blocks[0].note


def test_render_text_markup(lexicon):
    text = render_text(TriageResponder(lexicon).render(_match("cough")))
    assert text.startswith("**🔶 Moderate - Monitor closely**")
    assert "**Home Care Tips:**" in text
    assert "\n---\n🇸🇱 **Na Krio:**" in text
    assert "**Om Kia Tips:**" in text
    assert "• " in text
    assert text.index("Home Care Tips") < text.index("Na Krio") < text.index("Om Kia Tips")


def test_escalation_messages(lexicon):
    responder = TriageResponder(lexicon)
    d = responder.render_deflection()
    assert d.kind == ResponseKind.DEFLECTION
    assert "let me try to help you directly" in d.blocks[0].advice

    e = responder.render_escalated(UrgencyTier.EMERGENCY)
    assert e.kind == ResponseKind.ESCALATED
    assert "EMERGENCY ESCALATED" in e.blocks[0].banner
    assert "REQUEST RECEIVED" in responder.render_escalated(UrgencyTier.ROUTINE).blocks[0].banner
    assert "CASE ESCALATED" in responder.render_escalated(UrgencyTier.URGENT).blocks[0].banner

    f = responder.render_escalation_failed()
    assert f.kind == ResponseKind.ESCALATION_FAILED
    assert "nearest health facility" in f.blocks[0].advice
    assert render_text(None) == ""
