"""Tests for the subscription service."""

import pytest

from storefront.domain.exceptions import InvalidInputError
from storefront.subscriptions.repository import InMemorySubscriptionRepository
from storefront.subscriptions.service import SubscriptionService, normalize_email


class TestNormalizeEmail:
    """Tests for email validation."""

    def test_strips_whitespace(self) -> None:
        assert normalize_email("  reader@example.com\n") == "reader@example.com"

    @pytest.mark.parametrize(
        "value",
        [None, "", "   ", 42, "reader", "reader@", "@example.com", "a b@example.com", "reader@example"],
    )
    def test_rejects(self, value) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            normalize_email(value)
        assert exc_info.value.field == "email"

    def test_rejects_overlong(self) -> None:
        with pytest.raises(InvalidInputError):
            normalize_email("a" * 320 + "@example.com")


class TestSubscriptionService:
    """Tests for SubscriptionService.subscribe."""

    @pytest.mark.asyncio
    async def test_subscribe(self) -> None:
        repository = InMemorySubscriptionRepository()
        service = SubscriptionService(repository)

        entry = await service.subscribe("reader@example.com")

        assert entry.email == "reader@example.com"
        assert await repository.list_all() == [entry]

    @pytest.mark.asyncio
    async def test_invalid_email_writes_nothing(self) -> None:
        repository = InMemorySubscriptionRepository()
        service = SubscriptionService(repository)

        with pytest.raises(InvalidInputError):
            await service.subscribe("nope")
        assert await repository.list_all() == []

    @pytest.mark.asyncio
    async def test_duplicates_are_kept(self) -> None:
        repository = InMemorySubscriptionRepository()
        service = SubscriptionService(repository)

        await service.subscribe("reader@example.com")
        await service.subscribe("reader@example.com")

        assert len(await repository.list_all()) == 2
