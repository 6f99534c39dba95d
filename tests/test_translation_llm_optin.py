import os
import pytest
from kai.nlu.schema import Language
from kai.translation.translator import LLMTranslator

llm_enabled = os.getenv("KAI_TRANSLATOR", "none") == "llm" and os.getenv("OPENAI_API_KEY")

@pytest.mark.skipif(not llm_enabled, reason="KAI_TRANSLATOR=llm not enabled or key missing")
def test_llm_translates_krio_symptom():
    res = LLMTranslator().translate("mi bɛlɛ de pɛn", Language.KRI, Language.EN)
    assert res.success
    assert "stomach" in res.text.lower() or "belly" in res.text.lower()
