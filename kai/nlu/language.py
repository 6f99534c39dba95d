from typing import Optional

from kai.nlu.schema import Language
from kai.nlu.text import contains_any

# Common Krio words and fragments. Substring hits, so short entries are noisy;
# two distinct hits are required before a message counts as Krio.
KRIO_MARKERS = [
    "kushe", "kabo", "kabɔ", "adu", "aw di bodi", "tenki", "tɛnki", "duya", "wetin",
    "de wori", "de pen", "de pɛn", "na ospitul", "go ospitul", "na klinik",
    "mi bodi", "fiba", "a de", "yu de", "wi de", "dɛn de",
    "na ya", "naw naw", "lef am", "noh", "dɛn", "dem",
    "pikin", "uman", "opin", "sik", "bad bad", "siryɔs",
    "smol smol", "smɔl smɔl", "plenty", "bɔku", "komot", "kɔmɔt", "go kam",
    "di bodi", "ed de", "ɛd de", "bele", "bɛlɛ", "kof", "kɔf", "wata",
    "lek", "mek", "foh", "fo", "fɔ", "ya", "dey",
    "fambul", "usai", "aw yu", "a no", "a nɔ", "ondastand", "ɔndastand",
    "gladi", "sabi", "kech", "gud", "fayn", "wɛl", "bɔk ɔp",
    "troway", "trowe", "ronbele", "rɔnbɛlɛ", "edik", "edek", "ɛdɛk",
    "dokto", "dɔktɔ", "nos", "nɔs", "meresin", "mɛrɛsin", "blod", "blɔd",
    "wund", "injuri", "pawa", "wik", "dizi", "swel", "swɛl",
    "brid", "sniz", "shɛk", "bon", "bɔn", "itch", "stif", "posin", "pɔsin",
    "mami", "papa", "dadi", "titi", "boy", "padi", "olrayt", "sun sun",
    "jis nau", "tumara", "yestɛdɛ", "us tɛm", "aw lɔng", "wan wan",
]

MIN_MARKERS = 2


def is_likely_krio(text: Optional[str]) -> bool:
    """Heuristic: at least two distinct Krio markers occur in the text."""
    return len(contains_any(text, KRIO_MARKERS)) >= MIN_MARKERS


def detect_language(text: Optional[str]) -> Language:
    return Language.KRI if is_likely_krio(text) else Language.EN
