"""External service adapters."""

from src.adapters.firestore_client import FirestoreClient
from src.adapters.subscription_client import SubscriptionClient, SubscriptionFetchError

__all__ = [
    "FirestoreClient",
    "SubscriptionClient",
    "SubscriptionFetchError",
]
