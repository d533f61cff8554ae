# src/tracking/stats_aggregator.py — v1
"""Summaries over call records: hit, fallback and error rates, latency, cost."""

from __future__ import annotations

from collections import Counter, defaultdict

from aigate.tracking.cost_calculator import compute_call_cost
from aigate.tracking.models import CallRecord, MetricsSummary, ModelPricing, OperationStats


def percentile(values: list[float], pct: float) -> float:
    """Value at index ``floor(n * pct / 100)`` of the sorted list (0 when empty)."""
    if not values:
        return 0.0
    ordered = sorted(values)
    index = min(int(len(ordered) * pct / 100), len(ordered) - 1)
    return float(ordered[index])


def summarize(
    records: list[CallRecord],
    pricing: dict[str, ModelPricing] | None = None,
) -> MetricsSummary:
    """Aggregate call records into a MetricsSummary."""
    total = len(records)
    if total == 0:
        return MetricsSummary()

    latencies = [float(r.latency_ms) for r in records]
    by_op: dict[str, list[CallRecord]] = defaultdict(list)
    for r in records:
        by_op[r.operation].append(r)

    operations = {
        op: OperationStats(
            operation=op,
            total_calls=len(op_records),
            live_calls=sum(1 for r in op_records if r.source == "live"),
            total_tokens=sum(r.total_tokens for r in op_records),
            avg_latency_ms=sum(r.latency_ms for r in op_records) / len(op_records),
            estimated_cost_usd=sum(compute_call_cost(r, pricing) for r in op_records),
        )
        for op, op_records in sorted(by_op.items())
    }

    return MetricsSummary(
        total_requests=total,
        cache_hit_rate=sum(1 for r in records if r.cache_hit) / total,
        fallback_rate=sum(1 for r in records if r.source == "fallback") / total,
        error_rate=sum(1 for r in records if not r.success) / total,
        avg_latency_ms=sum(latencies) / total,
        p95_latency_ms=percentile(latencies, 95),
        total_tokens=sum(r.total_tokens for r in records),
        estimated_cost_usd=sum(s.estimated_cost_usd for s in operations.values()),
        by_operation=operations,
        errors=dict(Counter(r.error.value for r in records if r.error is not None)),
    )
