from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from kai.config import (
    KAI_ESCALATION_WINDOW_MINUTES,
    KAI_FUZZY_THRESHOLD,
    KAI_LEXICON_PATH,
)
from kai.handoff.sink import EscalationSink, EscalationSinkError, build_sink
from kai.lexicon.loader import Lexicon, load_lexicon
from kai.nlu.fuzzy import FuzzyMatcher
from kai.nlu.intents import IntentClassifier
from kai.nlu.language import detect_language
from kai.nlu.schema import (
    IntentResult,
    Language,
    ResponseKind,
    Role,
    StructuredResponse,
    TriageResult,
    UrgencyTier,
)
from kai.observability.logs import log_event
from kai.observability.metrics import (
    record_deflection,
    record_escalation,
    record_intent,
    record_tier,
)
from kai.policies.escalation import EMERGENCY_REASON_PREFIX, is_explicit_escalation_request
from kai.reasoner.resolver import SymptomResolver
from kai.reasoner.responder import TriageResponder
from kai.storage.escalations import EscalationTracker
from kai.translation.translator import Translator, build_translator


class EscalationDeliveryError(RuntimeError):
    """
    The sink could not record or notify. `result` is what the user should
    still see: triage advice (if any) plus the connection-failed message.
    Tracker state is left as it was so a retry escalates straight away.
    """

    def __init__(self, result: TriageResult, cause: Exception):
        super().__init__(f"escalation delivery failed: {cause}")
        self.result = result
        self.cause = cause


class TriageEngine:
    def __init__(
        self,
        lexicon: Lexicon,
        resolver: SymptomResolver,
        responder: TriageResponder,
        classifier: IntentClassifier,
        tracker: EscalationTracker,
        sink: EscalationSink,
    ):
        self.lexicon = lexicon
        self.resolver = resolver
        self.responder = responder
        self.classifier = classifier
        self.tracker = tracker
        self.sink = sink

    def classify_intent(self, text: Optional[str]) -> IntentResult:
        intent = self.classifier.classify(text)
        record_intent(intent.intent_name)
        log_event(
            "intent_detected",
            intent=intent.intent_name,
            confidence=intent.confidence,
            keywords=len(intent.matched_keywords),
        )
        return intent

    def triage(self, user_id: str, message_text: Optional[str], role: Role = Role.SUPPORT) -> TriageResult:
        text = message_text or ""
        intent = self.classify_intent(text)
        lang = detect_language(text)

        match = self.resolver.resolve(text)
        response = self.responder.render(match, lang, role)
        entry = self.lexicon.get(match.symptom_key) if match.matched else None
        tier = entry.urgency_tier if entry is not None else None

        result = TriageResult(
            response=response,
            urgency_tier=tier,
            escalation_state=self.tracker.state(user_id),
            match=match,
            intent=intent,
        )

        if tier == UrgencyTier.EMERGENCY:
            # Separate path: emergencies never touch the insistence tracker
            self._escalate_emergency(user_id, match.symptom_key, text, lang, result)
        elif is_explicit_escalation_request(text):
            self._handle_request(user_id, tier, text, lang, result)

        record_tier(tier.value if tier else None)
        log_event(
            "triage_done",
            user_id=user_id,
            symptom_key=match.symptom_key,
            tier=tier.value if tier else None,
            response_kind=result.response.kind.value,
            escalate=result.escalate,
            escalation_state=result.escalation_state.value,
            lang=lang.value,
        )
        return result

    # ---- escalation paths ----

    def _escalate_emergency(self, user_id: str, symptom_key: str, text: str,
                            lang: Language, result: TriageResult) -> None:
        reason = f"{EMERGENCY_REASON_PREFIX}: {symptom_key}"
        result.escalate = True
        result.escalation_reason = reason
        escalation_id = self._deliver(user_id, reason, UrgencyTier.EMERGENCY, text, lang, result, path="emergency")
        result.escalation_id = escalation_id
        self._attach(result, self.responder.render_escalated(UrgencyTier.EMERGENCY, lang))

    def _handle_request(self, user_id: str, tier: Optional[UrgencyTier], text: str,
                        lang: Language, result: TriageResult) -> None:
        decision = self.tracker.record_attempt(user_id)
        result.escalation_state = decision.state

        if not decision.escalate_now:
            record_deflection()
            log_event("escalation_deflected", user_id=user_id, attempt=decision.attempt_count)
            self._attach(result, self.responder.render_deflection(lang))
            return

        esc_tier = tier or UrgencyTier.ROUTINE
        reason = f"user_insisting: attempt {decision.attempt_count}"
        result.escalate = True
        result.escalation_reason = reason
        result.urgency_tier = result.urgency_tier or esc_tier
        escalation_id = self._deliver(user_id, reason, esc_tier, text, lang, result, path="insisting")
        # Only a delivered escalation clears the insistence state
        self.tracker.reset(user_id)
        result.escalation_id = escalation_id
        self._attach(result, self.responder.render_escalated(esc_tier, lang))

    def _deliver(self, user_id: str, reason: str, tier: UrgencyTier, text: str,
                 lang: Language, result: TriageResult, path: str) -> str:
        try:
            escalation_id = self.sink.record(user_id, reason, tier, text)
            self.sink.notify(escalation_id)
        except EscalationSinkError as e:
            record_escalation(path, "failed")
            log_event(
                "escalation_failed",
                level=logging.ERROR,
                user_id=user_id,
                path=path,
                error=str(e)[:200],
            )
            self._attach(result, self.responder.render_escalation_failed(lang))
            raise EscalationDeliveryError(result, e) from e
        record_escalation(path, "ok")
        log_event("escalation_sent", user_id=user_id, path=path, escalation_id=escalation_id, tier=tier.value)
        return escalation_id

    @staticmethod
    def _attach(result: TriageResult, message: StructuredResponse) -> None:
        """Escalation messages replace the fallback; next to symptom advice they become the notice."""
        if result.response.kind == ResponseKind.TRIAGE:
            result.notice = message
        else:
            result.response = message


def build_engine(
    lexicon_path: Optional[str] = None,
    translator: Optional[Translator] = None,
    sink: Optional[EscalationSink] = None,
    tracker: Optional[EscalationTracker] = None,
) -> TriageEngine:
    """Wire the engine from config. Raises LexiconError on a bad lexicon."""
    lexicon = load_lexicon(lexicon_path or KAI_LEXICON_PATH)
    if translator is None:
        translator = build_translator()
    matcher = FuzzyMatcher(lexicon, threshold=KAI_FUZZY_THRESHOLD)
    engine = TriageEngine(
        lexicon=lexicon,
        resolver=SymptomResolver(lexicon, matcher, translator),
        responder=TriageResponder(lexicon),
        classifier=IntentClassifier(),
        tracker=tracker or EscalationTracker(window=timedelta(minutes=KAI_ESCALATION_WINDOW_MINUTES)),
        sink=sink or build_sink(),
    )
    log_event(
        "engine_ready",
        symptoms=len(lexicon),
        variants=len(lexicon.variants),
        translator=type(translator).__name__ if translator else "none",
        sink=type(engine.sink).__name__,
    )
    return engine
