#!/usr/bin/env python3
"""
Validate a YAML symptom lexicon, or dump the built-in one as YAML for editing.

Usage:
  python scripts/check_lexicon.py                       # validate built-in tables
  python scripts/check_lexicon.py --path lexicon.yaml   # validate a YAML lexicon
  python scripts/check_lexicon.py --dump > lexicon.yaml # export built-in tables

Exit code 1 on any validation error.
"""

import argparse
import sys
from collections import Counter

import yaml

from kai.lexicon.loader import LexiconError, dump_tables, load_lexicon
from kai.nlu.schema import Language


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--path", default=None, help="YAML lexicon to validate (default: built-in tables)")
    ap.add_argument("--dump", action="store_true", help="Print the lexicon as YAML and exit")
    args = ap.parse_args()

    try:
        lex = load_lexicon(args.path)
    except LexiconError as e:
        print(f"INVALID: {e}", file=sys.stderr)
        return 1

    if args.dump:
        yaml.safe_dump(dump_tables(lex), sys.stdout, allow_unicode=True, sort_keys=False)
        return 0

    tiers = Counter(e.urgency_tier.value for e in lex.entries)
    no_krio = [e.key for e in lex.entries if not e.advice.get(Language.KRI)]
    print(f"OK: {len(lex)} symptoms, {len(lex.variants)} variant phrases")
    for tier, n in sorted(tiers.items()):
        print(f"- {tier}: {n}")
    if no_krio:
        print(f"warning: no Krio advice for {', '.join(no_krio)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
