# src/tracking/models.py — v1
"""Tracking domain models: CallRecord, OperationStats, MetricsSummary, ModelPricing."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from aigate.core.errors import ErrorKind


class CallRecord(BaseModel):
    """One resolved request, whatever path answered it."""

    call_id: str
    timestamp: datetime
    operation: str
    source: str | None = None  # cache, remote, live, fallback; None on error
    provider: str | None = None
    model: str | None = None
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    latency_ms: int
    cache_hit: bool = False
    success: bool
    error: ErrorKind | None = None
    retry_count: int = 0
    estimated_cost_usd: float = 0.0


class OperationStats(BaseModel):
    """Per-operation aggregated stats."""

    operation: str
    total_calls: int
    live_calls: int
    total_tokens: int
    avg_latency_ms: float
    estimated_cost_usd: float = 0.0


class MetricsSummary(BaseModel):
    """Aggregate view over a set of call records."""

    total_requests: int = 0
    cache_hit_rate: float = 0.0
    fallback_rate: float = 0.0
    error_rate: float = 0.0
    avg_latency_ms: float = 0.0
    p95_latency_ms: float = 0.0
    total_tokens: int = 0
    estimated_cost_usd: float = 0.0
    by_operation: dict[str, OperationStats] = Field(default_factory=dict)
    errors: dict[str, int] = Field(default_factory=dict)


class ModelPricing(BaseModel):
    """LLM model pricing configuration."""

    model: str
    input_price_per_1m: float
    output_price_per_1m: float
