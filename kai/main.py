from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from kai.api.routes import router as api_router
from starlette.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

app = FastAPI(
    title="Kai Symptom Triage & Escalation Engine",
    version="0.1.0",
    description="Bilingual (English/Krio) symptom triage with human escalation.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    data = generate_latest()  # default registry
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
app.include_router(api_router, prefix="/api")
