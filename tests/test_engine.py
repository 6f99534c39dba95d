import pytest

from kai.lexicon.loader import LexiconError
from kai.nlu.schema import (
    EscalationState,
    MatchSource,
    ResponseKind,
    Role,
    UrgencyTier,
)
from kai.reasoner.engine import EscalationDeliveryError, build_engine


# --- end-to-end scenarios ---

def test_headache_english(engine):
    r = engine.triage("u1", "I have a headache")
    assert r.match.symptom_key == "headache"
    assert r.urgency_tier in (UrgencyTier.ROUTINE, UrgencyTier.MODERATE)
    assert r.response.kind == ResponseKind.TRIAGE
    assert r.response.blocks[0].home_care
    assert r.escalate is False
    assert r.notice is None


def test_headache_krio(engine):
    r = engine.triage("u1", "mi ed de wori")
    assert r.match.symptom_key == "headache"
    assert r.match.confidence >= 0.7
    assert r.response.blocks[0].home_care
    assert r.escalate is False


def test_cant_breathe_escalates_immediately(engine, sink):
    r = engine.triage("u1", "I can't breathe")
    assert r.match.symptom_key == "difficulty_breathing"
    assert r.urgency_tier == UrgencyTier.EMERGENCY
    assert all(b.home_care == [] for b in r.response.blocks)
    assert r.escalate is True
    assert r.escalation_reason == "emergency_symptom: difficulty_breathing"
    assert r.escalation_id in sink.records
    assert sink.records[r.escalation_id].notified
    assert sink.records[r.escalation_id].priority == "urgent"
    assert r.notice.kind == ResponseKind.ESCALATED
    # bypass never touches the tracker
    assert r.escalation_state == EscalationState.NONE
    assert engine.tracker.state("u1") == EscalationState.NONE


def test_first_request_is_deflected(engine, sink):
    r = engine.triage("u1", "I want to talk to a nurse")
    assert r.match.source == MatchSource.UNMATCHED
    assert r.intent.intent_name == "Escalation Request"
    assert r.escalate is False
    assert r.escalation_state == EscalationState.REQUESTED_ONCE
    assert r.response.kind == ResponseKind.DEFLECTION
    assert sink.records == {}


def test_second_request_within_window_escalates(engine, sink, clock):
    engine.triage("u1", "I want to talk to a nurse")
    clock.advance(5)
    r = engine.triage("u1", "I want to talk to a nurse")
    assert r.escalate is True
    assert r.escalation_state == EscalationState.INSISTING
    assert r.escalation_reason == "user_insisting: attempt 2"
    assert r.response.kind == ResponseKind.ESCALATED
    assert sink.records[r.escalation_id].urgency_tier == UrgencyTier.ROUTINE
    # successful hand-off clears the insistence state
    assert engine.tracker.state("u1") == EscalationState.NONE


def test_request_after_long_gap_is_deflected_again(engine, clock):
    engine.triage("u1", "I want to talk to a nurse")
    clock.advance(31)
    r = engine.triage("u1", "I want to talk to a nurse")
    assert r.escalate is False
    assert r.escalation_state == EscalationState.REQUESTED_ONCE


def test_nonsense(engine):
    r = engine.triage("u1", "xyz nonsense text")
    assert r.intent.intent_name == "Unknown"
    assert r.intent.confidence == 0.1
    assert r.match.source == MatchSource.UNMATCHED
    assert r.response.kind == ResponseKind.FALLBACK
    assert r.escalate is False


@pytest.mark.parametrize("msg", ["", None, "   "])
def test_empty_input_never_raises(engine, msg):
    r = engine.triage("u1", msg)
    assert r.match.source == MatchSource.UNMATCHED
    assert r.intent.intent_name == "Unknown"


# --- combination rules ---

def test_deflection_is_a_notice_next_to_symptom_advice(engine):
    r = engine.triage("u1", "I have a headache, I need a doctor")
    assert r.response.kind == ResponseKind.TRIAGE
    assert r.notice.kind == ResponseKind.DEFLECTION
    assert r.escalation_state == EscalationState.REQUESTED_ONCE


def test_insisting_escalation_uses_matched_tier(engine, sink):
    engine.triage("u1", "I need a doctor")
    r = engine.triage("u1", "very high fever, I need a doctor")
    assert r.escalate is True
    assert r.urgency_tier == UrgencyTier.URGENT
    assert sink.records[r.escalation_id].priority == "high"
    assert r.notice.kind == ResponseKind.ESCALATED


def test_emergency_bypass_does_not_consume_insistence(engine, clock):
    engine.triage("u1", "I want to talk to a nurse")
    r = engine.triage("u1", "I can't breathe, call a doctor")
    assert r.escalate is True
    assert r.escalation_reason.startswith("emergency_symptom")
    assert engine.tracker.state("u1") == EscalationState.REQUESTED_ONCE


def test_staff_role_gets_note(engine):
    r = engine.triage("hw1", "I have a headache", role=Role.HEALTH_WORKER)
    assert "headache" in r.response.blocks[0].note


def test_translation_fallback_through_engine(make_engine, stub_translator):
    eng = make_engine(translator=stub_translator("I have stomach pain"))
    r = eng.triage("u1", "duya wetin a fɔ du naw")
    assert r.match.source == MatchSource.TRANSLATED_FALLBACK
    assert r.match.symptom_key == "mild_stomach"
    assert r.response.language.value == "KRI"


# --- sink failure ---

def test_sink_failure_keeps_tracker_state_and_retry_escalates(engine, sink):
    engine.triage("u1", "I want to talk to a nurse")
    sink.fail_on = "notify"
    with pytest.raises(EscalationDeliveryError) as exc:
        engine.triage("u1", "I want to talk to a nurse")
    failed = exc.value.result
    assert failed.response.kind == ResponseKind.ESCALATION_FAILED
    assert engine.tracker.state("u1") == EscalationState.INSISTING

    sink.fail_on = None
    r = engine.triage("u1", "please help me")
    assert r.escalate is True
    assert r.escalation_reason == "user_insisting: attempt 3"
    assert engine.tracker.state("u1") == EscalationState.NONE


def test_retry_after_failed_notify_reuses_the_recorded_escalation(engine, sink):
    engine.triage("u1", "I want to talk to a nurse")
    sink.fail_on = "notify"
    with pytest.raises(EscalationDeliveryError):
        engine.triage("u1", "I want to talk to a nurse")
    orphan = sink.for_user("u1")
    assert len(orphan) == 1 and not orphan[0].notified

    sink.fail_on = None
    r = engine.triage("u1", "please help me")
    assert r.escalation_id == orphan[0].escalation_id
    records = sink.for_user("u1")
    assert len(records) == 1
    assert records[0].notified
    assert sink.pending_count() == 0


def test_emergency_sink_failure_keeps_emergency_advice(engine, sink):
    sink.fail_on = "record"
    with pytest.raises(EscalationDeliveryError) as exc:
        engine.triage("u1", "I can't breathe")
    failed = exc.value.result
    assert failed.response.kind == ResponseKind.TRIAGE
    assert failed.response.urgency_tier == UrgencyTier.EMERGENCY
    assert failed.notice.kind == ResponseKind.ESCALATION_FAILED
    assert failed.escalation_id is None


# --- wiring ---

def test_build_engine_rejects_bad_lexicon(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(
        "symptoms:\n"
        "  - key: chest_pain\n"
        "    urgency: EMERGENCY\n"
        "    advice: {EN: go now}\n"
        "    home_care: {EN: [lie down]}\n",
        encoding="utf-8",
    )
    with pytest.raises(LexiconError):
        build_engine(lexicon_path=str(path))


def test_classify_intent(engine):
    assert engine.classify_intent("hello").intent_name == "Greeting"
