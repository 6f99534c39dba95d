from datetime import timedelta

import pytest

from kai.handoff.sink import InMemoryEscalationSink
from kai.lexicon.loader import load_lexicon
from kai.nlu.fuzzy import FuzzyMatcher
from kai.nlu.intents import IntentClassifier
from kai.reasoner.engine import TriageEngine
from kai.reasoner.resolver import SymptomResolver
from kai.reasoner.responder import TriageResponder
from kai.storage.escalations import EscalationTracker
from kai.translation.translator import TranslationResult


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, minutes: float) -> None:
        self.now += minutes * 60


class StubTranslator:
    """Returns a canned translation and remembers what it was asked."""

    def __init__(self, text: str = "", success: bool = True):
        self.text = text
        self.success = success
        self.calls = []

    def translate(self, text, source, target):
        self.calls.append((text, source, target))
        if not self.success:
            return TranslationResult(False, error="stub_failure")
        return TranslationResult(True, text=self.text)


@pytest.fixture(scope="session")
def lexicon():
    return load_lexicon()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sink():
    return InMemoryEscalationSink()


@pytest.fixture
def stub_translator():
    return StubTranslator


@pytest.fixture
def make_engine(lexicon, clock, sink):
    def _make(translator=None):
        return TriageEngine(
            lexicon=lexicon,
            resolver=SymptomResolver(lexicon, FuzzyMatcher(lexicon), translator),
            responder=TriageResponder(lexicon),
            classifier=IntentClassifier(),
            tracker=EscalationTracker(window=timedelta(minutes=30), clock=clock),
            sink=sink,
        )
    return _make


@pytest.fixture
def engine(make_engine):
    return make_engine()
