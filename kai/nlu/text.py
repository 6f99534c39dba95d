from __future__ import annotations

import re
from typing import Iterable, List, Optional

_WS_RE = re.compile(r"\s+")
_APOSTROPHES = str.maketrans({"’": "'", "‘": "'", "ʼ": "'", "`": "'"})


def normalize(text: Optional[str]) -> str:
    """Lower-case, trim, collapse whitespace, and unify apostrophes (can’t -> can't)."""
    if not text:
        return ""
    return _WS_RE.sub(" ", text.translate(_APOSTROPHES).lower()).strip()


def words(text: Optional[str]) -> List[str]:
    t = normalize(text)
    return t.split(" ") if t else []


def contains_any(text: Optional[str], phrases: Iterable[str]) -> List[str]:
    """
    Return every phrase found in `text` by plain substring containment,
    in the order given. No word boundaries: "cold" matches inside "scold".

    Every permissive keyword check in the engine goes through here so that a
    boundary-aware version can replace it in one place.
    """
    t = normalize(text)
    if not t:
        return []
    hits: List[str] = []
    for p in phrases:
        p_norm = normalize(p)
        if p_norm and p_norm in t and p not in hits:
            hits.append(p)
    return hits
