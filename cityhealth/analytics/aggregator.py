from __future__ import annotations

from collections import Counter
from typing import Any

from .store import DISMISSED_EVENT, SUGGESTIONS_EVENT


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    runs = [e for e in events if e["type"] == SUGGESTIONS_EVENT]
    dismissals = [e for e in events if e["type"] == DISMISSED_EVENT]
    total = len(runs)

    # Average response time
    times = [r["response_time_ms"] for r in runs if "response_time_ms" in r]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    over_budget = sum(1 for r in runs if r.get("over_budget"))
    empty_runs = sum(1 for r in runs if r.get("results_returned", 0) == 0)
    with_location = sum(1 for r in runs if r.get("has_location"))

    # Top queries
    query_counter: Counter[str] = Counter()
    for r in runs:
        if r.get("query"):
            query_counter[r["query"]] += 1
    top_queries = [{"name": n, "count": c} for n, c in query_counter.most_common(10)]

    # Reason distribution across returned suggestions
    reason_counter: Counter[str] = Counter()
    for r in runs:
        for reason, count in (r.get("reasons") or {}).items():
            reason_counter[reason] += count

    return {
        "total_runs": total,
        "avg_response_time_ms": avg_time,
        "over_budget_runs": over_budget,
        "empty_runs": empty_runs,
        "location_usage": round(with_location / total * 100, 1) if total else 0.0,
        "top_queries": top_queries,
        "reason_counts": dict(reason_counter),
        "dismissals": len(dismissals),
        "dismissal_rate": round(len(dismissals) / total * 100, 1) if total else 0.0,
    }
