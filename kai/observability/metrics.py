from time import perf_counter
from typing import Optional

from prometheus_client import Counter, Histogram

# ---- METRICS (names are Prometheus-safe; units are in names) ----

TRIAGE_REQUESTS = Counter(
    "triage_requests_total",
    "Total /api/triage requests by resolved urgency tier",
    labelnames=("tier",),
)

SYMPTOM_MATCHES = Counter(
    "symptom_match_total",
    "Symptom resolution outcomes by match source",
    labelnames=("source",),
)

INTENT_DETECTIONS = Counter(
    "intent_detections_total",
    "Detected message intents (analytics only)",
    labelnames=("intent",),
)

ESCALATIONS = Counter(
    "escalations_total",
    "Escalations handed to the sink by path and outcome",
    labelnames=("path", "outcome"),
)

DEFLECTIONS = Counter(
    "escalation_deflections_total",
    "First-time escalation requests answered with guidance instead",
)

TRANSLATIONS = Counter(
    "translation_requests_total",
    "Krio->English translation fallback calls by outcome",
    labelnames=("outcome",),
)

REQUEST_LATENCY_MS = Histogram(
    "request_latency_ms",
    "End-to-end latency of /api/triage in milliseconds",
    # Translation fallback can take seconds; keep the upper buckets wide
    buckets=(5, 10, 25, 50, 100, 200, 400, 800, 1600, 3200, 6400, 12800)
)

ERRORS_TOTAL = Counter(
    "errors_total",
    "Count of errors by type",
    labelnames=("type",),
)

# ---- HELPERS ----

def timer_start() -> float:
    return perf_counter()

def timer_observe_ms(start: float) -> float:
    elapsed_ms = (perf_counter() - start) * 1000.0
    REQUEST_LATENCY_MS.observe(elapsed_ms)
    return elapsed_ms

def record_tier(tier: Optional[str]) -> None:
    TRIAGE_REQUESTS.labels(tier=tier or "NONE").inc()

def record_match(source: str) -> None:
    SYMPTOM_MATCHES.labels(source=source).inc()

def record_intent(intent: str) -> None:
    INTENT_DETECTIONS.labels(intent=intent).inc()

def record_escalation(path: str, outcome: str) -> None:
    ESCALATIONS.labels(path=path, outcome=outcome).inc()

def record_deflection() -> None:
    DEFLECTIONS.inc()

def record_translation(outcome: str) -> None:
    TRANSLATIONS.labels(outcome=outcome).inc()

def record_error(err_type: str) -> None:
    ERRORS_TOTAL.labels(type=err_type).inc()
