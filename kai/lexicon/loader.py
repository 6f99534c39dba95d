from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import yaml
from pydantic import ValidationError

from kai.config import ConfigurationError
from kai.nlu.schema import Language, SymptomEntry, UrgencyTier, VariantPhrase
from kai.nlu.text import normalize


class LexiconError(ConfigurationError):
    """The lexicon is corrupt; the engine must not serve with it."""


class Lexicon:
    """
    Read-only symptom tables. Construct through load_lexicon(), which validates;
    building one directly skips validation (tests use that to inject bad data).
    """

    def __init__(self, entries: Iterable[SymptomEntry], variants: Iterable[VariantPhrase]):
        self.entries: Tuple[SymptomEntry, ...] = tuple(entries)
        self.variants: Tuple[VariantPhrase, ...] = tuple(variants)
        self._by_key: Dict[str, SymptomEntry] = {e.key: e for e in self.entries}
        grouped: Dict[str, List[VariantPhrase]] = {}
        for v in self.variants:
            grouped.setdefault(v.symptom_key, []).append(v)
        self._variants_by_key: Dict[str, Tuple[VariantPhrase, ...]] = {
            k: tuple(vs) for k, vs in grouped.items()
        }

    def get(self, key: Optional[str]) -> Optional[SymptomEntry]:
        if key is None:
            return None
        return self._by_key.get(key)

    def keys(self) -> List[str]:
        return [e.key for e in self.entries]

    def variants_for(self, symptom_key: str) -> List[VariantPhrase]:
        return list(self._variants_by_key.get(symptom_key, ()))

    def __len__(self) -> int:
        return len(self.entries)


# ----------------------------
# Building from raw tables (code literals or YAML)
# ----------------------------

def _lang_map(raw: Any, field: str, key: str) -> Dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise LexiconError(f"{key}: '{field}' must be a mapping of language -> value")
    out: Dict[str, Any] = {}
    for lang, value in raw.items():
        try:
            out[Language(str(lang).upper())] = value
        except ValueError:
            raise LexiconError(f"{key}: unknown language '{lang}' in '{field}'")
    return out


def _build_entry(raw: Mapping[str, Any]) -> SymptomEntry:
    key = str(raw.get("key") or "").strip()
    if not key:
        raise LexiconError("symptom entry without a key")
    try:
        tier = UrgencyTier(str(raw.get("urgency", "")).upper())
    except ValueError:
        raise LexiconError(f"{key}: unknown urgency tier '{raw.get('urgency')}'")

    advice = _lang_map(raw.get("advice"), "advice", key)
    home_care = {l: tuple(v or ()) for l, v in _lang_map(raw.get("home_care"), "home_care", key).items()}
    questions = {l: tuple(v or ()) for l, v in _lang_map(raw.get("questions"), "questions", key).items()}
    try:
        return SymptomEntry(
            key=key,
            urgency_tier=tier,
            advice=advice,
            home_care={l: v for l, v in home_care.items() if v},
            follow_up_questions={l: v for l, v in questions.items() if v},
        )
    except ValidationError as e:
        raise LexiconError(f"{key}: {e.errors()[0].get('msg', 'invalid entry')}")


def build_lexicon(symptoms: Iterable[Mapping[str, Any]], variants: Mapping[str, Iterable[str]]) -> Lexicon:
    """Build and validate a Lexicon from raw tables."""
    raw_entries = list(symptoms)
    seen_keys: set = set()
    for raw in raw_entries:
        key = str(raw.get("key") or "").strip()
        if key in seen_keys:
            raise LexiconError(f"duplicate symptom key '{key}'")
        seen_keys.add(key)
    entries = [_build_entry(raw) for raw in raw_entries]

    # Variant phrases follow entry order so iteration order is the lexicon order
    phrase_owner: Dict[str, str] = {}
    phrases: List[VariantPhrase] = []
    for key in variants:
        if key not in seen_keys:
            raise LexiconError(f"variants reference unknown symptom key '{key}'")
    for entry in entries:
        for phrase in variants.get(entry.key, ()) or ():
            p = normalize(str(phrase))
            if not p:
                continue
            owner = phrase_owner.get(p)
            if owner is not None and owner != entry.key:
                raise LexiconError(f"phrase '{p}' maps to both '{owner}' and '{entry.key}'")
            if owner == entry.key:
                continue  # same phrase listed twice under one key
            phrase_owner[p] = entry.key
            phrases.append(VariantPhrase(phrase=p, symptom_key=entry.key))

    lex = Lexicon(entries, phrases)
    validate_lexicon(lex)
    return lex


def validate_lexicon(lex: Lexicon) -> None:
    """Fail fast on data that would make triage unsafe."""
    keys: set = set()
    for e in lex.entries:
        if e.key in keys:
            raise LexiconError(f"duplicate symptom key '{e.key}'")
        keys.add(e.key)
        if not (e.advice.get(Language.EN) or "").strip():
            raise LexiconError(f"{e.key}: missing EN advice")
        if e.urgency_tier == UrgencyTier.EMERGENCY and (
            any(e.home_care.values()) or any(e.follow_up_questions.values())
        ):
            raise LexiconError(f"{e.key}: EMERGENCY entries must not carry home care or follow-up questions")
    owners: Dict[str, str] = {}
    for v in lex.variants:
        if v.symptom_key not in keys:
            raise LexiconError(f"variant '{v.phrase}' references unknown symptom key '{v.symptom_key}'")
        prev = owners.setdefault(v.phrase, v.symptom_key)
        if prev != v.symptom_key:
            raise LexiconError(f"phrase '{v.phrase}' maps to both '{prev}' and '{v.symptom_key}'")


def read_yaml_tables(path: str) -> Tuple[List[Dict[str, Any]], Dict[str, List[str]]]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise LexiconError(f"{path}: expected a mapping with 'symptoms' and 'variants'")
    symptoms = data.get("symptoms") or []
    variants = data.get("variants") or {}
    if not isinstance(symptoms, list) or not isinstance(variants, dict):
        raise LexiconError(f"{path}: 'symptoms' must be a list and 'variants' a mapping")
    return symptoms, variants


def load_lexicon(path: Optional[str] = None) -> Lexicon:
    """
    Load the built-in tables, or a YAML lexicon when `path` is given.
    Raises LexiconError on any validation failure.
    """
    if path:
        try:
            symptoms, variants = read_yaml_tables(path)
        except (OSError, yaml.YAMLError) as e:
            raise LexiconError(f"cannot read lexicon '{path}': {e}")
    else:
        from kai.lexicon.data import SYMPTOMS, VARIANTS
        symptoms, variants = SYMPTOMS, VARIANTS
    return build_lexicon(symptoms, variants)


def dump_tables(lex: Lexicon) -> Dict[str, Any]:
    """Inverse of build_lexicon, for editing the built-in lexicon as YAML."""
    symptoms = []
    for e in lex.entries:
        raw: Dict[str, Any] = {
            "key": e.key,
            "urgency": e.urgency_tier.value,
            "advice": {l.value: t for l, t in e.advice.items()},
        }
        if e.home_care:
            raw["home_care"] = {l.value: list(t) for l, t in e.home_care.items()}
        if e.follow_up_questions:
            raw["questions"] = {l.value: list(t) for l, t in e.follow_up_questions.items()}
        symptoms.append(raw)
    variants = {k: [v.phrase for v in lex.variants_for(k)] for k in lex.keys() if lex.variants_for(k)}
    return {"symptoms": symptoms, "variants": variants}
