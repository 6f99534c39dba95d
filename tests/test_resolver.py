import pytest

from kai.lexicon.loader import build_lexicon
from kai.nlu.fuzzy import FuzzyMatcher
from kai.nlu.schema import Language, MatchSource
from kai.reasoner.resolver import SymptomResolver, keyword_scan

KRIO_UNMATCHED = "duya wetin a fɔ du naw"


def _resolver(lexicon, translator=None):
    return SymptomResolver(lexicon, FuzzyMatcher(lexicon), translator)


@pytest.mark.parametrize("msg,key", [
    ("I have a headache", "headache"),
    ("mi ed de wori", "headache"),
    ("I can't breathe", "difficulty_breathing"),
    ("I can’t breathe", "difficulty_breathing"),
    ("mi bele de wori", "mild_stomach"),
    ("he is having a seizure", "convulsions"),
])
def test_fuzzy_resolution(lexicon, msg, key):
    m = _resolver(lexicon).resolve(msg)
    assert m.symptom_key == key
    assert m.source == MatchSource.FUZZY
    assert m.confidence >= 0.7


@pytest.mark.parametrize("msg", ["", "   ", None, "xyz nonsense text"])
def test_unmatched(lexicon, msg):
    m = _resolver(lexicon).resolve(msg)
    assert m.source == MatchSource.UNMATCHED
    assert m.symptom_key == "unknown"
    assert m.confidence == 0.0
    assert not m.matched


def test_translation_fallback(lexicon, stub_translator):
    tr = stub_translator("please what should I do, I have stomach pain")
    m = _resolver(lexicon, tr).resolve(KRIO_UNMATCHED)
    assert m.symptom_key == "mild_stomach"
    assert m.source == MatchSource.TRANSLATED_FALLBACK
    assert m.confidence == 0.75
    assert tr.calls == [(KRIO_UNMATCHED, Language.KRI, Language.EN)]


def test_translation_failure_falls_through(lexicon, stub_translator):
    tr = stub_translator(success=False)
    m = _resolver(lexicon, tr).resolve(KRIO_UNMATCHED)
    assert len(tr.calls) == 1
    assert m.source == MatchSource.UNMATCHED


def test_translator_that_raises_does_not_break_resolution(lexicon):
    class Broken:
        def translate(self, text, source, target):
            raise RuntimeError("boom")

    m = _resolver(lexicon, Broken()).resolve(KRIO_UNMATCHED)
    assert m.source == MatchSource.UNMATCHED


def test_translator_not_called_for_english(lexicon, stub_translator):
    tr = stub_translator("stomach pain")
    m = _resolver(lexicon, tr).resolve("xyz nonsense text")
    assert tr.calls == []
    assert m.source == MatchSource.UNMATCHED


def test_language_hint_forces_translation(lexicon, stub_translator):
    tr = stub_translator("I have stomach pain")
    m = _resolver(lexicon, tr).resolve("xyz nonsense text", language_hint=Language.KRI)
    assert m.source == MatchSource.TRANSLATED_FALLBACK
    assert m.symptom_key == "mild_stomach"


def test_translator_not_called_when_fuzzy_matches(lexicon, stub_translator):
    tr = stub_translator("stomach pain")
    m = _resolver(lexicon, tr).resolve("mi ed de wori")
    assert tr.calls == []
    assert m.symptom_key == "headache"


def test_keyword_scan_on_raw_key():
    lex = build_lexicon(
        [{"key": "sore_throat", "urgency": "MODERATE", "advice": {"EN": "warm drinks"}}],
        {},
    )
    m = _resolver(lex).resolve("since monday my sore throat is bad")
    assert m.symptom_key == "sore_throat"
    assert m.source == MatchSource.EXACT_KEYWORD
    assert m.confidence == 1.0


def test_keyword_scan_prefers_variants_in_lexicon_order(lexicon):
    hit = keyword_scan(lexicon, "chest pain and a fever")
    assert hit.symptom_key == "chest_pain"
    assert keyword_scan(lexicon, "nothing here") is None


def test_resolve_is_deterministic(lexicon):
    r = _resolver(lexicon)
    msg = "a get fiba ɛn mi skin de itch"
    first = r.resolve(msg)
    assert all(r.resolve(msg) == first for _ in range(5))
