from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol

import httpx

from kai.config import KAI_ESCALATION_TIMEOUT, KAI_ESCALATION_WEBHOOK_URL
from kai.nlu.schema import UrgencyTier
from kai.observability.logs import log_event
from kai.policies.escalation import (
    EscalationReport,
    format_escalation_report,
    priority_for,
    trigger_type_for,
)


class EscalationSinkError(RuntimeError):
    """The escalation could not be recorded or the health workers not notified."""


class EscalationSink(Protocol):
    def record(self, user_id: str, reason: str, urgency_tier: UrgencyTier, latest_message: str) -> str:
        ...

    def notify(self, escalation_id: str) -> None:
        ...


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@dataclass
class EscalationRecord:
    escalation_id: str
    user_id: str
    reason: str
    urgency_tier: UrgencyTier
    priority: str
    latest_message: str
    created_at: str
    trigger_type: str = "user_request"
    notified: bool = False
    status: str = "pending"
    notifications: List[str] = field(default_factory=list)

    def report(self) -> EscalationReport:
        return EscalationReport(
            escalation_id=self.escalation_id,
            user_id=self.user_id,
            reason=self.reason,
            urgency_tier=self.urgency_tier,
            latest_message=self.latest_message,
            timestamp=self.created_at,
        )

    def covers(self, urgency_tier: UrgencyTier) -> bool:
        """An un-notified record at least as urgent can carry a retried hand-off."""
        return not self.notified and self.urgency_tier.rank >= urgency_tier.rank


def _new_record(user_id: str, reason: str, urgency_tier: UrgencyTier, latest_message: str) -> EscalationRecord:
    return EscalationRecord(
        escalation_id=str(uuid.uuid4()),
        user_id=user_id,
        reason=reason,
        urgency_tier=urgency_tier,
        priority=priority_for(urgency_tier),
        latest_message=latest_message,
        created_at=_now_iso(),
        trigger_type=trigger_type_for(reason),
    )


class InMemoryEscalationSink:
    """
    Keeps escalations in process. `fail_on` lets tests break record or notify.

    A user has at most one un-notified record: a retry after a failed notify
    reuses it, and a more urgent hand-off supersedes it.
    """

    def __init__(self):
        self.records: Dict[str, EscalationRecord] = {}
        self.fail_on: Optional[str] = None  # "record" | "notify" | None
        self._pending_by_user: Dict[str, EscalationRecord] = {}
        self._lock = threading.Lock()

    def record(self, user_id: str, reason: str, urgency_tier: UrgencyTier, latest_message: str) -> str:
        if self.fail_on == "record":
            raise EscalationSinkError("record failed")
        with self._lock:
            pending = self._pending_by_user.get(user_id)
            if pending is not None and pending.covers(urgency_tier):
                pending.latest_message = latest_message
                return pending.escalation_id
            if pending is not None:
                pending.status = "superseded"
            rec = _new_record(user_id, reason, urgency_tier, latest_message)
            self.records[rec.escalation_id] = rec
            self._pending_by_user[user_id] = rec
        return rec.escalation_id

    def notify(self, escalation_id: str) -> None:
        if self.fail_on == "notify":
            raise EscalationSinkError("notify failed")
        with self._lock:
            rec = self.records.get(escalation_id)
            if rec is None:
                raise EscalationSinkError(f"unknown escalation '{escalation_id}'")
            rec.notifications.append(format_escalation_report(rec.report()))
            rec.notified = True
            rec.status = "assigned"
            if self._pending_by_user.get(rec.user_id) is rec:
                del self._pending_by_user[rec.user_id]

    def for_user(self, user_id: str) -> List[EscalationRecord]:
        with self._lock:
            return [r for r in self.records.values() if r.user_id == user_id]

    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending_by_user)


class WebhookEscalationSink:
    """
    POSTs the escalation record, then the formatted health-worker report, to a
    webhook. The webhook may return {"id": ...}; otherwise a local id is used.

    Records whose notification failed stay pending per user; the next
    hand-off for that user only re-sends the notification instead of
    posting a second escalation. A more urgent hand-off replaces it.
    """

    def __init__(self, url: str, timeout: float = KAI_ESCALATION_TIMEOUT,
                 client: Optional[httpx.Client] = None):
        self.url = url
        self.timeout = timeout
        self._client = client
        self._pending: Dict[str, EscalationRecord] = {}  # user_id -> un-notified record
        self._lock = threading.Lock()

    def _post(self, payload: dict) -> httpx.Response:
        try:
            if self._client is not None:
                r = self._client.post(self.url, json=payload, timeout=self.timeout)
            else:
                r = httpx.post(self.url, json=payload, timeout=self.timeout)
            r.raise_for_status()
            return r
        except httpx.HTTPError as e:
            raise EscalationSinkError(f"webhook_failed: {type(e).__name__}") from e

    def record(self, user_id: str, reason: str, urgency_tier: UrgencyTier, latest_message: str) -> str:
        with self._lock:
            pending = self._pending.get(user_id)
            if pending is not None and pending.covers(urgency_tier):
                pending.latest_message = latest_message
                log_event("escalation_reused", escalation_id=pending.escalation_id, priority=pending.priority)
                return pending.escalation_id

        rec = _new_record(user_id, reason, urgency_tier, latest_message)
        r = self._post({
            "type": "escalation",
            "escalation_id": rec.escalation_id,
            "user_id": user_id,
            "reason": reason,
            "trigger_type": rec.trigger_type,
            "priority": rec.priority,
            "urgency_tier": urgency_tier.value,
            "status": "pending",
            "created_at": rec.created_at,
        })
        try:
            body = r.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("id"):
            rec.escalation_id = str(body["id"])
        with self._lock:
            replaced = self._pending.get(user_id)
            self._pending[user_id] = rec
        if replaced is not None:
            log_event("escalation_superseded", escalation_id=replaced.escalation_id, by=rec.escalation_id)
        log_event("escalation_recorded", escalation_id=rec.escalation_id, priority=rec.priority)
        return rec.escalation_id

    def _find(self, escalation_id: str) -> Optional[EscalationRecord]:
        with self._lock:
            for rec in self._pending.values():
                if rec.escalation_id == escalation_id:
                    return rec
        return None

    def notify(self, escalation_id: str) -> None:
        rec = self._find(escalation_id)
        if rec is None:
            raise EscalationSinkError(f"unknown escalation '{escalation_id}'")
        self._post({
            "type": "notification",
            "escalation_id": escalation_id,
            "priority": rec.priority,
            "report": format_escalation_report(rec.report()),
        })
        rec.notified = True
        with self._lock:
            if self._pending.get(rec.user_id) is rec:
                del self._pending[rec.user_id]

    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)


def build_sink(url: Optional[str] = None) -> EscalationSink:
    url = url or KAI_ESCALATION_WEBHOOK_URL
    if url:
        return WebhookEscalationSink(url)
    return InMemoryEscalationSink()
