"""Tests for the in-memory admin token store."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from elevate.domain.error import AlreadyConsumedError, DuplicateValueError, NotFoundError
from elevate.domain.model import AdminToken
from elevate.domain.value import Email, PrincipalId, TokenStatus, TokenValue
from elevate.persistence.repository.inmemory import InMemoryAdminTokenRepository
from tests.conftest import OPERATOR_ID

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_token(value: str = "token-abc", **fields) -> AdminToken:
    defaults = {
        "value": TokenValue(value),
        "bound_email": Email("alice@example.com"),
        "issued_by": OPERATOR_ID,
        "issued_at": NOW,
        "expires_at": NOW + timedelta(days=7),
    }
    defaults.update(fields)
    return AdminToken(**defaults)


class TestInMemoryAdminTokenRepository:
    """Tests for InMemoryAdminTokenRepository."""

    @pytest.mark.asyncio
    async def test_duplicate_insert_rejected(self):
        repo = InMemoryAdminTokenRepository()
        await repo.insert(make_token())

        with pytest.raises(DuplicateValueError):
            await repo.insert(make_token())

    @pytest.mark.asyncio
    async def test_mark_consumed_sets_both_fields(self):
        repo = InMemoryAdminTokenRepository()
        await repo.insert(make_token())
        principal_id = PrincipalId(uuid4())

        consumed = await repo.mark_consumed(TokenValue("token-abc"), principal_id, NOW)

        assert consumed.consumed_at == NOW
        assert consumed.consumed_by == principal_id
        stored = await repo.find_by_value(TokenValue("token-abc"))
        assert stored == consumed

    @pytest.mark.asyncio
    async def test_mark_consumed_twice(self):
        repo = InMemoryAdminTokenRepository()
        await repo.insert(make_token())
        first = PrincipalId(uuid4())
        await repo.mark_consumed(TokenValue("token-abc"), first, NOW)

        with pytest.raises(AlreadyConsumedError):
            await repo.mark_consumed(TokenValue("token-abc"), PrincipalId(uuid4()), NOW)

        stored = await repo.find_by_value(TokenValue("token-abc"))
        assert stored.consumed_by == first

    @pytest.mark.asyncio
    async def test_mark_consumed_missing(self):
        repo = InMemoryAdminTokenRepository()

        with pytest.raises(NotFoundError):
            await repo.mark_consumed(TokenValue("missing"), PrincipalId(uuid4()), NOW)

    @pytest.mark.asyncio
    async def test_list_all_newest_first_with_status(self):
        repo = InMemoryAdminTokenRepository()
        await repo.insert(
            make_token(
                "older",
                issued_at=NOW - timedelta(days=10),
                expires_at=NOW - timedelta(days=3),
            )
        )
        await repo.insert(make_token("newer"))

        listing = await repo.list_all(NOW)

        assert [item.token.value.root for item in listing] == ["newer", "older"]
        assert [item.status for item in listing] == [
            TokenStatus.ACTIVE,
            TokenStatus.EXPIRED,
        ]

    @pytest.mark.asyncio
    async def test_delete_expired_unconsumed_keeps_history(self):
        repo = InMemoryAdminTokenRepository()
        past = {
            "issued_at": NOW - timedelta(days=10),
            "expires_at": NOW - timedelta(days=3),
        }
        await repo.insert(make_token("expired", **past))
        await repo.insert(make_token("used", **past))
        await repo.mark_consumed(
            TokenValue("used"), PrincipalId(uuid4()), NOW - timedelta(days=5)
        )
        await repo.insert(make_token("active"))

        deleted = await repo.delete_expired_unconsumed(NOW)

        assert deleted == 1
        assert await repo.find_by_value(TokenValue("expired")) is None
        assert await repo.find_by_value(TokenValue("used")) is not None
        assert await repo.find_by_value(TokenValue("active")) is not None

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self):
        repo = InMemoryAdminTokenRepository()
        await repo.insert(make_token())

        await repo.delete(TokenValue("token-abc"))
        await repo.delete(TokenValue("token-abc"))

        assert await repo.find_by_value(TokenValue("token-abc")) is None
