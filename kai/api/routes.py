from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
import uuid

from kai.nlu.schema import (
    EscalationState,
    IntentResult,
    Role,
    StructuredResponse,
    TriageResult,
    UrgencyTier,
)
from kai.observability.logs import log_event
from kai.observability.metrics import record_error, timer_observe_ms, timer_start
from kai.reasoner.engine import EscalationDeliveryError, TriageEngine, build_engine
from kai.reasoner.responder import render_text

router = APIRouter(tags=["api"])


@lru_cache(maxsize=1)
def get_engine() -> TriageEngine:
    """Process-wide engine; tests swap it via app.dependency_overrides."""
    return build_engine()


class TriageIn(BaseModel):
    user_id: str = Field(min_length=1)
    message: str = ""
    role: Role = Role.SUPPORT


class TriageOut(BaseModel):
    status: str  # "OK" | "ESCALATION_FAILED"
    reply: str
    escalate: bool = False
    escalation_reason: Optional[str] = None
    urgency_tier: Optional[UrgencyTier] = None
    symptom_key: str
    match_source: str
    confidence: float
    intent: IntentResult
    escalation_state: EscalationState
    escalation_id: Optional[str] = None
    response: StructuredResponse
    notice: Optional[StructuredResponse] = None


class IntentIn(BaseModel):
    message: str = ""


class EscalationStateOut(BaseModel):
    user_id: str
    state: EscalationState


def _to_out(result: TriageResult, status: str) -> TriageOut:
    reply = render_text(result.response)
    if result.notice is not None:
        reply = f"{reply}\n\n{render_text(result.notice)}"
    return TriageOut(
        status=status,
        reply=reply,
        escalate=result.escalate,
        escalation_reason=result.escalation_reason,
        urgency_tier=result.urgency_tier,
        symptom_key=result.match.symptom_key,
        match_source=result.match.source.value,
        confidence=result.match.confidence,
        intent=result.intent,
        escalation_state=result.escalation_state,
        escalation_id=result.escalation_id,
        response=result.response,
        notice=result.notice,
    )


@router.post("/triage", response_model=TriageOut)
def triage(payload: TriageIn, engine: TriageEngine = Depends(get_engine)):
    t0 = timer_start()
    request_id = str(uuid.uuid4())  # define before try so except can log it

    try:
        # Raw message text is never logged, only its length
        log_event(
            "triage_request",
            request_id=request_id,
            user_id=payload.user_id,
            role=payload.role.value,
            message_len=len(payload.message),
        )
        status = "OK"
        try:
            result = engine.triage(payload.user_id, payload.message, payload.role)
        except EscalationDeliveryError as e:
            record_error("EscalationDeliveryError")
            status = "ESCALATION_FAILED"
            result = e.result

        out = _to_out(result, status)
        elapsed_ms = timer_observe_ms(t0)
        log_event(
            "triage_response",
            request_id=request_id,
            user_id=payload.user_id,
            status=status,
            symptom_key=out.symptom_key,
            tier=out.urgency_tier.value if out.urgency_tier else None,
            escalate=out.escalate,
            elapsed_ms=round(elapsed_ms, 2),
        )
        return out

    except Exception as e:
        # Always record timing + error on exceptions
        timer_observe_ms(t0)
        record_error(type(e).__name__)
        log_event(
            "triage_error",
            request_id=request_id,
            user_id=payload.user_id,
            error_type=type(e).__name__,
        )
        raise


@router.post("/intent", response_model=IntentResult)
def intent(payload: IntentIn, engine: TriageEngine = Depends(get_engine)):
    return engine.classify_intent(payload.message)


@router.get("/escalations/{user_id}", response_model=EscalationStateOut)
def escalation_state(user_id: str, engine: TriageEngine = Depends(get_engine)):
    return EscalationStateOut(user_id=user_id, state=engine.tracker.state(user_id))


@router.delete("/escalations/{user_id}", response_model=EscalationStateOut)
def reset_escalation(user_id: str, engine: TriageEngine = Depends(get_engine)):
    engine.tracker.reset(user_id)
    log_event("escalation_reset", user_id=user_id)
    return EscalationStateOut(user_id=user_id, state=engine.tracker.state(user_id))
