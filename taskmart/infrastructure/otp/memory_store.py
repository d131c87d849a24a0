from __future__ import annotations

import logging
import math
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable

import taskmart.domain.services as domain_services
from taskmart.domain.entities import OTPRecord
from taskmart.domain.ports.otp_store import OTPStorePort

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryOTPStore(OTPStorePort):
    """
    Process-local OTP table.

    NOTE:
    - One instance per process; state is lost on restart.
    - Every access to the map happens under `_lock`. Nothing inside the lock
      awaits or does I/O, so the async methods never hold it across a switch.
    - Expired records are swept on each `issue` rather than by a timer.
    """

    def __init__(
        self,
        ttl_seconds: int = 600,
        *,
        clock: Callable[[], datetime] = _utcnow,
        code_generator: Callable[[], str] | None = None,
    ) -> None:
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._generate = code_generator
        self._records: dict[str, OTPRecord] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _new_code(self) -> str:
        if self._generate is not None:
            return self._generate()
        # looked up at call time so tests can monkeypatch the generator
        return domain_services.generate_otp_code()

    async def issue(self, identity: str) -> str:
        key = domain_services.normalize_identity(identity)
        code = self._new_code().upper()
        now = self._clock()
        record = OTPRecord(identity=key, code=code, expires_at=now + self._ttl)

        with self._lock:
            self._records[key] = record
            swept = self._sweep_expired(now)

        if swept:
            logger.debug("evicted expired otp records", extra={"count": swept})
        return code

    async def verify(self, identity: str, code: str) -> bool:
        key = domain_services.normalize_identity(identity)
        now = self._clock()

        with self._lock:
            record = self._records.get(key)
            if record is None:
                return False
            if record.is_expired(now):
                del self._records[key]
                return False
            if not domain_services.secure_compare(record.code, code.upper()):
                return False
            record.mark_verified()
            return True

    async def is_verified(self, identity: str) -> bool:
        key = domain_services.normalize_identity(identity)
        now = self._clock()

        with self._lock:
            record = self._records.get(key)
            if record is None or record.is_expired(now):
                return False
            return record.verified

    async def claim(self, identity: str) -> bool:
        key = domain_services.normalize_identity(identity)
        now = self._clock()

        with self._lock:
            record = self._records.get(key)
            if record is None or record.is_expired(now):
                return False
            return record.claim()

    async def release(self, identity: str) -> None:
        key = domain_services.normalize_identity(identity)
        with self._lock:
            record = self._records.get(key)
            if record is not None:
                record.release()

    async def remove(self, identity: str) -> None:
        key = domain_services.normalize_identity(identity)
        with self._lock:
            self._records.pop(key, None)

    async def remaining_seconds(self, identity: str) -> int | None:
        key = domain_services.normalize_identity(identity)
        now = self._clock()

        with self._lock:
            record = self._records.get(key)
            if record is None or record.is_expired(now):
                return None
            left = (record.expires_at - now).total_seconds()
        return math.ceil(left)

    def _sweep_expired(self, now: datetime) -> int:
        # caller holds the lock
        dead = [k for k, r in self._records.items() if r.is_expired(now)]
        for k in dead:
            del self._records[k]
        return len(dead)
