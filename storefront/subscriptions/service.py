"""Subscription service."""

import re
from typing import Any

import structlog

from storefront.domain.entities import SubscriptionEntry
from storefront.domain.exceptions import InvalidInputError
from storefront.subscriptions.repository import SubscriptionRepository

logger = structlog.get_logger()

# local@domain.tld, no whitespace; deliverability is not checked
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MAX_EMAIL_LENGTH = 320


def normalize_email(value: Any) -> str:
    """Validate and normalize an email address.

    Raises:
        InvalidInputError: If the address is empty or implausible.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError("email", "is required")
    email = value.strip()
    if len(email) > MAX_EMAIL_LENGTH or not EMAIL_PATTERN.match(email):
        raise InvalidInputError("email", "is not a valid email address")
    return email


class SubscriptionService:
    """Records newsletter sign-ups."""

    def __init__(
        self,
        repository: SubscriptionRepository,
        request_id: str | None = None,
    ) -> None:
        self.repository = repository
        self.request_id = request_id

    async def subscribe(self, email: Any) -> SubscriptionEntry:
        """Record an email address.

        Raises:
            InvalidInputError: If the address is not plausible.
            PersistenceFailedError: If it could not be stored.
        """
        entry = SubscriptionEntry(email=normalize_email(email))
        await self.repository.add(entry)
        logger.info("Subscription recorded", request_id=self.request_id)
        return entry
