"""Newsletter subscriptions.

A store-and-forward log of email addresses.
"""

from storefront.subscriptions.repository import (
    InMemorySubscriptionRepository,
    SqlSubscriptionRepository,
    SubscriptionRepository,
)
from storefront.subscriptions.service import SubscriptionService

__all__ = [
    "InMemorySubscriptionRepository",
    "SqlSubscriptionRepository",
    "SubscriptionRepository",
    "SubscriptionService",
]
