from __future__ import annotations

from typing import Optional

from kai.lexicon.loader import Lexicon
from kai.nlu.fuzzy import FuzzyMatcher, best_candidate
from kai.nlu.language import is_likely_krio
from kai.nlu.schema import Language, MatchSource, SymptomMatch
from kai.nlu.text import contains_any, normalize
from kai.observability.logs import log_event
from kai.observability.metrics import record_match, record_translation
from kai.translation.translator import Translator

TRANSLATED_CONFIDENCE = 0.75
EXACT_CONFIDENCE = 1.0


def keyword_scan(lexicon: Lexicon, text: str) -> Optional[SymptomMatch]:
    """
    Plain containment scan: every variant phrase first, then the raw keys
    with underscores read as spaces ("high_fever" -> "high fever").
    Returns the first hit in lexicon order with confidence 1.0; callers
    restamp source/confidence as needed.
    """
    phrase_to_key = {v.phrase: v.symptom_key for v in lexicon.variants}
    hits = contains_any(text, list(phrase_to_key))
    if hits:
        return SymptomMatch(symptom_key=phrase_to_key[hits[0]], confidence=EXACT_CONFIDENCE,
                            source=MatchSource.EXACT_KEYWORD, matched_phrase=hits[0])

    key_phrases = {k.replace("_", " "): k for k in lexicon.keys()}
    hits = contains_any(text, list(key_phrases))
    if hits:
        return SymptomMatch(symptom_key=key_phrases[hits[0]], confidence=EXACT_CONFIDENCE,
                            source=MatchSource.EXACT_KEYWORD, matched_phrase=hits[0])
    return None


class SymptomResolver:
    """
    Map free text to a symptom key:
      1) fuzzy candidates over the variant table
      2) Krio -> English translation, then a keyword scan of the translation
      3) keyword scan of the original text
      4) UNMATCHED
    """

    def __init__(self, lexicon: Lexicon, matcher: FuzzyMatcher, translator: Optional[Translator] = None):
        self.lexicon = lexicon
        self.matcher = matcher
        self.translator = translator

    def resolve(self, text: Optional[str], language_hint: Optional[Language] = None) -> SymptomMatch:
        match = self._resolve(text, language_hint)
        record_match(match.source.value)
        log_event(
            "symptom_resolved",
            symptom_key=match.symptom_key,
            source=match.source.value,
            confidence=round(match.confidence, 3),
            text_len=len(text or ""),
        )
        return match

    def _resolve(self, text: Optional[str], language_hint: Optional[Language]) -> SymptomMatch:
        if not normalize(text):
            return SymptomMatch()

        best = best_candidate(self.matcher.extract_candidates(text))
        if best is not None:
            return best

        if self.translator is not None and (language_hint == Language.KRI or is_likely_krio(text)):
            translated = self._translate(text)
            if translated:
                hit = keyword_scan(self.lexicon, translated)
                if hit is not None:
                    return hit.model_copy(update={
                        "source": MatchSource.TRANSLATED_FALLBACK,
                        "confidence": TRANSLATED_CONFIDENCE,
                    })

        hit = keyword_scan(self.lexicon, text)
        if hit is not None:
            return hit
        return SymptomMatch()

    def _translate(self, text: str) -> Optional[str]:
        try:
            result = self.translator.translate(text, Language.KRI, Language.EN)
        except Exception as e:
            # Translators report failure in the result; a raising one still falls through
            record_translation("error")
            log_event("translation_failed", error=f"raised_{type(e).__name__}")
            return None
        if not result.success:
            record_translation("error")
            log_event("translation_failed", error=result.error or "unknown")
            return None
        record_translation("ok")
        log_event("translation_ok", text_len=len(text), translated_len=len(result.text))
        return result.text
