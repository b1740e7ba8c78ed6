from datetime import date

import pytest

from zensai.apps.engine.quota import AFFIRMATION_FEATURE, QUOTE_FEATURE, QuotaGuard
from zensai.libs.storage import InMemoryKeyValueBackend, SafeKeyValueStore


class BrokenBackend:
    async def get(self, key):
        raise ConnectionError("storage offline")

    async def set(self, key, value, ttl=None):
        raise ConnectionError("storage offline")


@pytest.mark.asyncio
async def test_free_user_gets_two_uses_per_day(quota):
    results = [await quota.check_and_consume(AFFIRMATION_FEATURE, False) for _ in range(3)]

    assert results == [True, True, False]


@pytest.mark.asyncio
async def test_features_are_counted_separately(quota):
    await quota.check_and_consume(AFFIRMATION_FEATURE, False)
    await quota.check_and_consume(AFFIRMATION_FEATURE, False)

    assert await quota.check_and_consume(QUOTE_FEATURE, False) is True
    assert await quota.remaining(AFFIRMATION_FEATURE, False) == 0
    assert await quota.remaining(QUOTE_FEATURE, False) == 1


@pytest.mark.asyncio
async def test_premium_never_touches_storage(quota, kv_backend):
    for _ in range(5):
        assert await quota.check_and_consume(AFFIRMATION_FEATURE, True) is True

    assert kv_backend.keys() == []
    assert await quota.remaining(AFFIRMATION_FEATURE, True) is None


@pytest.mark.asyncio
async def test_counter_key_is_dated(quota, kv_backend):
    await quota.check_and_consume(AFFIRMATION_FEATURE, False)

    assert kv_backend.keys() == ["zensai-feature-affirmation-generator-2024-03-15"]


@pytest.mark.asyncio
async def test_new_day_starts_a_fresh_count(kv):
    clock = {"today": date(2024, 3, 15)}
    guard = QuotaGuard(kv, today=lambda: clock["today"])

    for _ in range(3):
        await guard.check_and_consume(AFFIRMATION_FEATURE, False)
    clock["today"] = date(2024, 3, 16)

    assert await guard.check_and_consume(AFFIRMATION_FEATURE, False) is True


@pytest.mark.asyncio
async def test_storage_failure_allows_the_request():
    guard = QuotaGuard(SafeKeyValueStore(BrokenBackend()), today=lambda: date(2024, 3, 15))

    assert await guard.check_and_consume(AFFIRMATION_FEATURE, False) is True
    assert await guard.check_and_consume(AFFIRMATION_FEATURE, False) is True
    assert await guard.check_and_consume(AFFIRMATION_FEATURE, False) is True


@pytest.mark.asyncio
async def test_explicit_limit_overrides_default():
    guard = QuotaGuard(SafeKeyValueStore(InMemoryKeyValueBackend()), today=lambda: date(2024, 3, 15))

    assert await guard.check_and_consume("voice", False, daily_limit=1) is True
    assert await guard.check_and_consume("voice", False, daily_limit=1) is False


@pytest.mark.asyncio
async def test_consume_reads_and_writes_one_day_across_midnight(kv):
    calls = {"count": 0}

    def today():
        calls["count"] += 1
        return date(2024, 3, 15) if calls["count"] == 1 else date(2024, 3, 16)

    await kv.set("zensai-feature-affirmation-generator-2024-03-15", 1)
    guard = QuotaGuard(kv, today=today)

    assert await guard.check_and_consume(AFFIRMATION_FEATURE, False) is True
    assert await kv.get("zensai-feature-affirmation-generator-2024-03-15") == 2
    assert await kv.get("zensai-feature-affirmation-generator-2024-03-16") is None


@pytest.mark.asyncio
async def test_namespace_keeps_users_apart(kv):
    first = QuotaGuard(kv, namespace="zensai-feature-user-1", today=lambda: date(2024, 3, 15))
    second = QuotaGuard(kv, namespace="zensai-feature-user-2", today=lambda: date(2024, 3, 15))

    await first.check_and_consume(AFFIRMATION_FEATURE, False)
    await first.check_and_consume(AFFIRMATION_FEATURE, False)

    assert await first.check_and_consume(AFFIRMATION_FEATURE, False) is False
    assert await second.check_and_consume(AFFIRMATION_FEATURE, False) is True
    assert first.key_for(AFFIRMATION_FEATURE) == "zensai-feature-user-1-affirmation-generator-2024-03-15"
