# src/tracking/call_logger.py — v1
"""Call logging: one record per resolved request, for cost and SLA tracking."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path

from aigate.core.errors import ErrorKind
from aigate.tracking.cost_calculator import compute_call_cost
from aigate.tracking.models import CallRecord

logger = logging.getLogger(__name__)


class CallLogger:
    """Accumulates call records, optionally capped to the most recent ones."""

    def __init__(self, max_records: int | None = 1000) -> None:
        self._records: list[CallRecord] = []
        self._max_records = max_records

    def record(
        self,
        operation: str,
        latency_ms: int,
        source: str | None = None,
        success: bool = True,
        provider: str | None = None,
        model: str | None = None,
        input_tokens: int = 0,
        output_tokens: int = 0,
        error: ErrorKind | None = None,
        retry_count: int = 0,
    ) -> CallRecord:
        """Record a resolved request.

        Args:
            operation: analysis, suggestions, enhancement or chat.
            latency_ms: End-to-end resolve latency.
            source: Where the value came from (None on error).
            success: Whether a value was returned.
            provider: Provider of the live call, if one was made.
            model: Model of the live call, if one was made.
            input_tokens: Prompt tokens (reported or estimated).
            output_tokens: Completion tokens (reported or estimated).
            error: Failure kind (on error or when fallback covered one).
            retry_count: Retries spent on the live call.

        Returns:
            The recorded CallRecord.
        """
        record = CallRecord(
            call_id=str(uuid.uuid4()),
            timestamp=datetime.now(timezone.utc),
            operation=operation,
            source=source,
            provider=provider,
            model=model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            total_tokens=input_tokens + output_tokens,
            latency_ms=latency_ms,
            cache_hit=source in ("cache", "remote"),
            success=success,
            error=error,
            retry_count=retry_count,
        )
        record.estimated_cost_usd = compute_call_cost(record)
        self._records.append(record)
        if self._max_records is not None and len(self._records) > self._max_records:
            del self._records[: len(self._records) - self._max_records]
        return record

    @property
    def records(self) -> list[CallRecord]:
        """All recorded calls."""
        return list(self._records)

    @property
    def total_tokens(self) -> int:
        """Total tokens consumed across all calls."""
        return sum(r.total_tokens for r in self._records)

    @property
    def total_calls(self) -> int:
        return len(self._records)

    def clear(self) -> None:
        self._records.clear()

    def save(self, path: Path) -> None:
        """Save all records to a JSON Lines file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w") as f:
            for record in self._records:
                f.write(json.dumps(record.model_dump(mode="json")) + "\n")
        logger.debug("Saved %d call records to %s", len(self._records), path)

    @staticmethod
    def load(path: Path) -> list[CallRecord]:
        """Read records written by ``save`` (missing file = none)."""
        if not path.exists():
            return []
        records = []
        for line in path.read_text(encoding="utf-8").splitlines():
            if line.strip():
                records.append(CallRecord.model_validate_json(line))
        return records
