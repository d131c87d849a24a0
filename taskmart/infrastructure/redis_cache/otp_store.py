from __future__ import annotations

import math

from redis.asyncio import Redis

import taskmart.domain.services as domain_services
from taskmart.domain.ports.otp_store import OTPStorePort


_LUA_VERIFY = """
-- KEYS[1]: otp key
-- ARGV[1]: submitted code (upper-cased)
local key = KEYS[1]
local submitted = ARGV[1]
local cur = redis.call('HGET', key, 'code')
if not cur then
  return 0
end
if cur ~= submitted then
  return 0
end
redis.call('HSET', key, 'verified', '1')
return 1
"""


_LUA_CLAIM = """
-- KEYS[1]: otp key
local key = KEYS[1]
if redis.call('HGET', key, 'verified') ~= '1' then
  return 0
end
if redis.call('HSETNX', key, 'claimed', '1') == 0 then
  return 0
end
return 1
"""


class RedisOTPStore(OTPStorePort):
    """
    Shared OTP table for deployments running more than one process.
    Redis key expiry replaces the sweep done by the in-memory store.
    """

    def __init__(
        self, redis: Redis, ttl_seconds: int = 600, *, key_prefix: str = "otp:"
    ) -> None:
        self._redis = redis
        self._ttl = ttl_seconds
        self._prefix = key_prefix

    def _key(self, identity: str) -> str:
        return f"{self._prefix}{domain_services.normalize_identity(identity)}"

    async def issue(self, identity: str) -> str:
        key = self._key(identity)
        code = domain_services.generate_otp_code()
        pipe = self._redis.pipeline(transaction=True)
        pipe.delete(key)
        pipe.hset(key, mapping={"code": code, "verified": "0"})
        pipe.expire(key, self._ttl)
        await pipe.execute()
        return code

    async def verify(self, identity: str, code: str) -> bool:
        # atomic compare-and-mark; an expired key is already gone
        res = await self._redis.eval(_LUA_VERIFY, 1, self._key(identity), code.upper())
        return int(res) == 1

    async def is_verified(self, identity: str) -> bool:
        return await self._redis.hget(self._key(identity), "verified") == "1"

    async def claim(self, identity: str) -> bool:
        res = await self._redis.eval(_LUA_CLAIM, 1, self._key(identity))
        return int(res) == 1

    async def release(self, identity: str) -> None:
        await self._redis.hdel(self._key(identity), "claimed")

    async def remove(self, identity: str) -> None:
        await self._redis.delete(self._key(identity))

    async def remaining_seconds(self, identity: str) -> int | None:
        ttl_ms = await self._redis.pttl(self._key(identity))
        if ttl_ms is None or ttl_ms < 0:
            return None
        return math.ceil(ttl_ms / 1000)
