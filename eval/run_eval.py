#!/usr/bin/env python3
"""
Offline evaluation runner:
- Loads YAML cases under eval/cases/*.yaml
- Plays turns against /api/triage with a unique user_id per case
- Checks the last turn's symptom key, tier, escalate flag and tracker state
- Writes eval/report.json

Usage:
  python eval/run_eval.py --base-url http://localhost:8000
  python eval/run_eval.py --fast    # only the first 5 cases
"""

import argparse
import glob
import json
import os
import uuid
from typing import Any, Dict, List

import httpx
import yaml

DEFAULT_BASE_URL = "http://localhost:8000"
CASES_GLOB = os.path.join(os.path.dirname(__file__), "cases", "*.yaml")
TIMEOUT = 15.0  # translation fallback may take a while

# case field -> TriageOut field
CHECKS = {
    "expect_symptom": "symptom_key",
    "expect_tier": "urgency_tier",
    "expect_escalate": "escalate",
    "expect_state": "escalation_state",
}


def load_cases(limit: int | None = None) -> List[Dict[str, Any]]:
    paths = sorted(glob.glob(CASES_GLOB))
    cases: List[Dict[str, Any]] = []
    for p in paths:
        with open(p, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or []
            if isinstance(data, list):
                cases.extend(data)
    if limit is not None:
        cases = cases[:limit]
    return cases


def post_triage(client: httpx.Client, base_url: str, user_id: str, message: str) -> Dict[str, Any]:
    r = client.post(f"{base_url}/api/triage", json={"user_id": user_id, "message": message}, timeout=TIMEOUT)
    r.raise_for_status()
    return r.json()


def eval_case(client: httpx.Client, base_url: str, case: Dict[str, Any]) -> Dict[str, Any]:
    # Fresh user per run so tracker state from earlier runs can't leak in
    uid = f"eval-{case['id']}-{uuid.uuid4().hex[:8]}"
    last: Dict[str, Any] = {}
    for msg in case["turns"]:
        last = post_triage(client, base_url, uid, msg)

    checks: Dict[str, bool] = {}
    for case_key, out_key in CHECKS.items():
        if case_key in case:
            checks[case_key] = last.get(out_key) == case[case_key]

    return {
        "id": case["id"],
        "turns": case["turns"],
        "checks": checks,
        "ok": all(checks.values()),
        "got": {k: last.get(k) for k in CHECKS.values()},
        "match_source": last.get("match_source"),
    }


def summarize(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    n = len(results)
    summary: Dict[str, Any] = {
        "total_cases": n,
        "case_accuracy": round(sum(r["ok"] for r in results) / max(1, n), 3),
    }
    for case_key in CHECKS:
        relevant = [r["checks"][case_key] for r in results if case_key in r["checks"]]
        if relevant:
            summary[f"{case_key[len('expect_'):]}_accuracy"] = round(sum(relevant) / len(relevant), 3)
    return summary


def print_table(results: List[Dict[str, Any]], summary: Dict[str, Any]) -> None:
    headers = ["id", "symptom", "tier", "escalate", "state", "ok"]
    rows = []
    for r in results:
        got = r.get("got", {})
        rows.append([
            r["id"],
            got.get("symptom_key"),
            got.get("urgency_tier"),
            got.get("escalate"),
            got.get("escalation_state"),
            "✓" if r["ok"] else "✗",
        ])
    colw = [max(len(str(x)) for x in col) for col in zip(*([headers] + rows))]
    def fmt_row(row): return "  ".join(str(x).ljust(w) for x, w in zip(row, colw))

    print(fmt_row(headers))
    print("-" * (sum(colw) + 2 * (len(headers) - 1)))
    for row in rows:
        print(fmt_row(row))
    print("\nSummary:")
    for k, v in summary.items():
        print(f"- {k}: {v}")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--base-url", default=DEFAULT_BASE_URL)
    ap.add_argument("--fast", action="store_true", help="Run only the first 5 cases")
    ap.add_argument("--out", default=os.path.join(os.path.dirname(__file__), "report.json"))
    ap.add_argument("--min-accuracy", type=float, default=0.0,
                    help="Exit non-zero when case accuracy is below this (CI gating)")
    args = ap.parse_args()

    cases = load_cases(limit=5 if args.fast else None)
    if not cases:
        print("No cases found under eval/cases/*.yaml")
        return

    results: List[Dict[str, Any]] = []
    with httpx.Client() as client:
        for c in cases:
            try:
                results.append(eval_case(client, args.base_url, c))
            except httpx.HTTPError as e:
                results.append({
                    "id": c["id"],
                    "turns": c.get("turns", []),
                    "error": f"{type(e).__name__}: {e}",
                    "checks": {},
                    "ok": False,
                    "got": {},
                })

    summary = summarize(results)

    with open(args.out, "w", encoding="utf-8") as f:
        json.dump({"summary": summary, "results": results}, f, ensure_ascii=False, indent=2)

    print_table(results, summary)

    if summary["case_accuracy"] < args.min_accuracy:
        print(f"\nCase accuracy below target ({summary['case_accuracy']} < {args.min_accuracy})")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
