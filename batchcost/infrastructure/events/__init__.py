"""Change notification implementations."""

from batchcost.infrastructure.events.change_feed import (
    InMemoryChangeFeed,
    Subscription,
    get_change_feed,
    reset_change_feed,
)

__all__ = [
    "InMemoryChangeFeed",
    "Subscription",
    "get_change_feed",
    "reset_change_feed",
]
