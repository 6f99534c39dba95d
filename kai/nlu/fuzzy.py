from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from kai.lexicon.loader import Lexicon
from kai.nlu.schema import MatchSource, SymptomMatch
from kai.nlu.text import normalize, words

DEFAULT_THRESHOLD = 0.7
CONTAINMENT_SCORE = 0.8  # fixed, not length-proportional (low precision)
WINDOW_SIZES = (4, 3, 2)  # longest first


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance (insert/delete/substitute, all cost 1)."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        cur = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            cur.append(min(prev[j] + 1, cur[j - 1] + 1, prev[j - 1] + cost))
        prev = cur
    return prev[-1]


def similarity(a: str, b: str) -> float:
    """
    Score in [0, 1]:
      - 1.0 on exact match after normalization
      - 0.8 if either string contains the other
      - otherwise 1 - distance / max(len(a), len(b))
    An empty string never "contains" or is contained by a non-empty one.
    """
    s1, s2 = normalize(a), normalize(b)
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    if s1 in s2 or s2 in s1:
        return CONTAINMENT_SCORE
    max_len = max(len(s1), len(s2))
    # (max_len - d) / max_len keeps 7/10 == 0.7 exact at the threshold
    return (max_len - levenshtein(s1, s2)) / max_len


class FuzzyMatcher:
    def __init__(self, lexicon: Lexicon, threshold: float = DEFAULT_THRESHOLD):
        self.threshold = threshold
        self._variants: Tuple[Tuple[str, str], ...] = tuple(
            (normalize(v.phrase), v.symptom_key) for v in lexicon.variants
        )

    def match_symptom(self, text: str) -> Optional[SymptomMatch]:
        """Best variant for `text` scoring >= threshold; ties keep the first seen."""
        t = normalize(text)
        if not t:
            return None
        best: Optional[SymptomMatch] = None
        for phrase, key in self._variants:
            score = similarity(t, phrase)
            if score >= self.threshold and (best is None or score > best.confidence):
                best = SymptomMatch(
                    symptom_key=key,
                    confidence=score,
                    source=MatchSource.FUZZY,
                    matched_phrase=phrase,
                )
        return best

    def extract_candidates(self, message: str) -> List[SymptomMatch]:
        """
        Whole message first; if that fails, slide 4-, 3-, then 2-word windows
        and keep the best match per symptom key (in discovery order).
        """
        full = self.match_symptom(message)
        if full is not None:
            return [full]

        toks = words(message)
        found: Dict[str, SymptomMatch] = {}
        for size in WINDOW_SIZES:
            for i in range(0, len(toks) - size + 1):
                m = self.match_symptom(" ".join(toks[i:i + size]))
                if m is None:
                    continue
                existing = found.get(m.symptom_key)
                if existing is None or m.confidence > existing.confidence:
                    found[m.symptom_key] = m
        return list(found.values())


def best_candidate(candidates: List[SymptomMatch]) -> Optional[SymptomMatch]:
    best: Optional[SymptomMatch] = None
    for c in candidates:
        if best is None or c.confidence > best.confidence:
            best = c
    return best
