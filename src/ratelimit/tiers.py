# src/ratelimit/tiers.py — v1
"""Premium tier registry: which identities bypass the rate limiter.

An identity is privileged when it is listed statically (PRIVILEGED_IDENTITIES)
or holds an unexpired premium grant in the state store. Expired grants are
downgraded to "free" the first time they are looked at.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable

from aigate.ratelimit.models import TierRecord
from aigate.store.base_store import BaseStateStore

logger = logging.getLogger(__name__)


class TierRegistry:
    """Resolves and persists premium status per identity."""

    def __init__(
        self,
        store: BaseStateStore | None = None,
        static_identities: Iterable[str] = (),
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._static = frozenset(static_identities)
        self._clock = clock

    async def is_privileged(self, identity: str) -> bool:
        if identity in self._static:
            return True
        record = await self.get(identity)
        return record.is_premium

    async def get(self, identity: str) -> TierRecord:
        """Current tier (``free`` when unknown, unreadable or expired)."""
        if identity in self._static:
            return TierRecord(is_premium=True, tier="premium")
        if self._store is None:
            return TierRecord()
        try:
            raw = await self._store.get(identity)
        except Exception as e:
            logger.warning("Tier record unreadable for %s: %s", identity, e)
            return TierRecord()
        if raw is None:
            return TierRecord()

        try:
            record = TierRecord.model_validate(raw)
        except ValueError as e:
            logger.warning("Discarding corrupt tier record for %s: %s", identity, e)
            return TierRecord()

        if record.is_premium and record.expires_at is not None:
            if self._now_ms() > record.expires_at:
                logger.info("Premium tier expired for %s", identity)
                await self.revoke(identity)
                return TierRecord()
        return record

    async def grant(self, identity: str, expires_at: float | None = None) -> TierRecord:
        """Mark ``identity`` premium until ``expires_at`` (epoch seconds, None = never)."""
        record = TierRecord(
            is_premium=True,
            tier="premium",
            activated_at=self._now_ms(),
            expires_at=int(expires_at * 1000) if expires_at is not None else None,
        )
        await self._save(identity, record)
        logger.info(
            "Premium granted to %s (expires=%s)",
            identity, "never" if expires_at is None else expires_at,
        )
        return record

    async def revoke(self, identity: str) -> None:
        await self._save(identity, TierRecord())

    async def _save(self, identity: str, record: TierRecord) -> None:
        if self._store is None:
            return
        try:
            await self._store.set(identity, record.model_dump(by_alias=True))
        except Exception as e:
            logger.warning("Tier record not saved for %s: %s", identity, e)

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)
