"""Keyword-overlap intent classifier. Telemetry only; triage never reads it."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from kai.nlu.schema import IntentResult
from kai.nlu.text import contains_any

UNKNOWN_INTENT = "Unknown"
UNKNOWN_CONFIDENCE = 0.1  # non-zero floor so Unknown still sorts above a zero score

# (display name, keywords). Order matters: on a full tie the earlier intent wins.
HEALTH_INTENTS: List[Tuple[str, List[str]]] = [
    ("Greeting", ["hello", "hi", "hey", "kushe", "aw di bodi", "good morning", "good afternoon", "good evening"]),

    ("Symptom Check", ["fever", "headache", "pain", "cough", "sick", "sik", "fiba", "belly", "vomit", "diarrhea", "rash", "itch", "swelling", "bleeding", "tired", "weak", "body pain", "joint pain", "red eyes", "dizzy", "pale", "yellow skin", "yellow eyes", "jaundice", "blood in urine", "blood in stool", "constipation", "cold", "flu", "sneeze", "trembling"]),

    ("Malaria Query", ["malaria", "mosquito", "antimalarial", "act", "coartem"]),
    ("Cholera Query", ["cholera", "watery stool", "ors", "dehydration"]),
    ("Typhoid Query", ["typhoid", "widal"]),
    ("COVID Query", ["covid", "corona", "coronavirus", "vaccine", "vaccination"]),
    ("TB Query", ["tuberculosis", "tb", "dots", "cough more than 2 weeks", "night sweat", "weight loss", "chest pain"]),
    ("VHF Query", ["ebola", "lassa fever", "marburg", "bleeding from nose", "bleeding from gums", "hemorrhagic"]),

    ("Pregnancy Query", ["pregnant", "pregnancy", "antenatal", "baby", "pikin", "bele", "labor", "delivery", "breastfeed", "birth control", "contraception", "family planning", "miscarriage", "complication", "bleeding in pregnancy", "morning sickness", "folic acid", "iron tablet"]),
    ("Child Health", ["child", "pikin", "baby", "infant", "immunization", "vaccination", "growth", "feeding", "under five", "measles", "polio", "pentavalent"]),

    ("Facility Query", ["hospital", "clinic", "health center", "ospitul", "where", "location", "address", "open", "hours"]),

    ("Medication Query", ["medicine", "drug", "tablet", "pill", "dose", "paracetamol", "antibiotic", "intake", "overdose", "side effect", "damage", "harm", "excessive", "capsule", "syrup", "injection", "treatment"]),

    ("Prevention Query", ["prevent", "protection", "avoid", "how to", "what is", "explain", "educate"]),

    ("Emergency", ["emergency", "urgent", "help", "dying", "unconscious", "bleeding", "accident", "poison", "cannot breathe"]),

    ("Escalation Request", ["escalate", "human", "nurse", "doctor", "person", "talk to", "speak to"]),

    ("Health Alert Query", ["outbreak", "alert", "news", "campaign", "what happening"]),

    ("General Health", ["health", "healthy", "wellness", "nutrition", "diet", "exercise", "water", "hygiene", "fitness", "lifestyle"]),

    ("NCD Query", ["diabetes", "sugar", "hypertension", "blood pressure", "high bp", "heart", "stroke", "cancer", "sickle cell", "asthma"]),

    ("Mental Health", ["mental", "depression", "anxiety", "stress", "suicide", "suicidal", "trauma", "grief", "sad", "cannot sleep", "worry", "madness", "psychology"]),
    ("SGBV Query", ["rape", "sexual assault", "domestic violence", "abuse", "beating", "violence", "hurt by partner", "forced sex", "harassment"]),
    ("STI/HIV Query", ["sti", "std", "hiv", "aids", "syphilis", "gonorrhea", "discharge", "sore on private part", "burning sensation", "safe sex", "condom"]),
    ("Sexual Anatomy", ["penis", "vagina", "anatomy", "size", "growth", "development", "body change", "puberty", "erection"]),

    ("WASH Query", ["water", "sanitation", "toilet", "hygiene", "latrine", "garbage", "waste", "dirty water", "handwash", "soap", "chlorine", "clean wata"]),

    ("Nutrition Query", ["malnutrition", "stunting", "underweight", "vitamin", "protein", "balanced diet", "breastfeeding", "kwashiorkor", "marasmus"]),

    ("First Aid", ["first aid", "burn", "wound", "injury", "snake bite", "dog bite", "cut", "bleed", "accident", "fracture", "broken bone"]),
    ("Zoonotic Query", ["rabies", "monkeypox", "animal bite", "bat", "rat", "bushmeat"]),

    ("Sensory Query", ["eye", "blind", "ear", "deaf", "cataract", "glaucoma", "ear discharge", "hearing", "vision"]),
    ("Dental Query", ["tooth", "teeth", "gum", "dentist", "toothache", "mouth sore"]),
    ("Skin Query", ["skin", "scabies", "krawl-krawl", "fungal", "ringworm", "eczema", "sores"]),
]


class IntentClassifier:
    def __init__(self, intents: Optional[Sequence[Tuple[str, Sequence[str]]]] = None):
        self.intents = list(intents if intents is not None else HEALTH_INTENTS)

    def classify(self, text: Optional[str]) -> IntentResult:
        """
        Pick the intent with the highest min(matches/2, 1.0); on equal
        confidence the one with more matched keywords wins.
        """
        best_name, best_conf, best_kws = UNKNOWN_INTENT, 0.0, []
        for name, keywords in self.intents:
            matched = contains_any(text, keywords)
            if not matched:
                continue
            conf = min(len(matched) / 2, 1.0)
            if conf > best_conf or (conf == best_conf and len(matched) > len(best_kws)):
                best_name, best_conf, best_kws = name, conf, matched

        if best_conf == 0:
            return IntentResult(intent_name=UNKNOWN_INTENT, confidence=UNKNOWN_CONFIDENCE, matched_keywords=[])
        return IntentResult(intent_name=best_name, confidence=best_conf, matched_keywords=best_kws)
