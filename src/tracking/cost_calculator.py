# src/tracking/cost_calculator.py — v1
"""Cost calculation from call records.

Only live calls cost anything; cache hits and fallbacks are free.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from aigate.tracking.models import ModelPricing

if TYPE_CHECKING:
    from aigate.tracking.models import CallRecord

# Default pricing per 1M tokens.
DEFAULT_PRICING: dict[str, ModelPricing] = {
    "gemini-2.0-flash-exp": ModelPricing(
        model="gemini-2.0-flash-exp",
        input_price_per_1m=0.075, output_price_per_1m=0.30,
    ),
    "gemini-2.0-flash": ModelPricing(
        model="gemini-2.0-flash",
        input_price_per_1m=0.10, output_price_per_1m=0.40,
    ),
    "gpt-4o": ModelPricing(
        model="gpt-4o",
        input_price_per_1m=2.50, output_price_per_1m=10.0,
    ),
    "gpt-4o-mini": ModelPricing(
        model="gpt-4o-mini",
        input_price_per_1m=0.15, output_price_per_1m=0.60,
    ),
    "claude-3-5-haiku-latest": ModelPricing(
        model="claude-3-5-haiku-latest",
        input_price_per_1m=0.80, output_price_per_1m=4.0,
    ),
}

# Unknown hosted models are priced like the default Gemini Flash model.
_FALLBACK_PRICING = DEFAULT_PRICING["gemini-2.0-flash-exp"]


def compute_call_cost(
    record: CallRecord, pricing: dict[str, ModelPricing] | None = None,
) -> float:
    """Compute estimated cost for a single call in USD."""
    if record.source != "live" or record.model is None or record.provider == "ollama":
        return 0.0
    pricing = pricing or DEFAULT_PRICING
    p = pricing.get(record.model, _FALLBACK_PRICING)
    return (record.input_tokens * p.input_price_per_1m / 1_000_000
            + record.output_tokens * p.output_price_per_1m / 1_000_000)


def compute_total_cost(
    records: list[CallRecord],
    pricing: dict[str, ModelPricing] | None = None,
) -> float:
    """Compute total estimated cost across all records."""
    return sum(compute_call_cost(r, pricing) for r in records)
