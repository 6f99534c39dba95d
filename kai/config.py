import os
from dotenv import load_dotenv

# Load .env as soon as this module is imported (safe to call multiple times)
load_dotenv()


class ConfigurationError(RuntimeError):
    """Raised at startup when the engine cannot be built safely."""


KAI_TRANSLATION_URL: str | None = os.getenv("KAI_TRANSLATION_URL")
KAI_API_KEY: str | None = os.getenv("KAI_API_KEY")
# "http" | "llm" | "none"
KAI_TRANSLATOR: str = os.getenv("KAI_TRANSLATOR", "http" if KAI_TRANSLATION_URL else "none").lower()
KAI_TRANSLATION_TIMEOUT: float = float(os.getenv("KAI_TRANSLATION_TIMEOUT", "8.0"))  # seconds

TRANSLATION_LLM_MODEL: str = os.getenv("TRANSLATION_LLM_MODEL", "gpt-4o-mini")
OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY")

KAI_ESCALATION_WINDOW_MINUTES: float = float(os.getenv("KAI_ESCALATION_WINDOW_MINUTES", "30"))
KAI_FUZZY_THRESHOLD: float = float(os.getenv("KAI_FUZZY_THRESHOLD", "0.7"))
KAI_LEXICON_PATH: str | None = os.getenv("KAI_LEXICON_PATH")

KAI_ESCALATION_WEBHOOK_URL: str | None = os.getenv("KAI_ESCALATION_WEBHOOK_URL")
KAI_ESCALATION_TIMEOUT: float = float(os.getenv("KAI_ESCALATION_TIMEOUT", "10.0"))  # seconds
