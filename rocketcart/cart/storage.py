"""
Cart persistence - snapshot codec and Upstash Redis store.

The snapshot is a JSON array of entry objects, in cart order:
    [{"id": 1, "name": "...", "price": "179.90", "image_url": "...", "amount": 2}]
"""
import json
from typing import Iterable, Optional

from upstash_redis import Redis

from rocketcart import config
from rocketcart.errors import CartDecodeError
from rocketcart.logging import get_logger
from .models import CartEntry
from .ports import PersistenceStore

logger = get_logger(__name__)


def encode_cart(entries: Iterable[CartEntry]) -> str:
    """Serialize cart entries to the persisted snapshot format."""
    return json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False)


def decode_cart(raw: str) -> tuple[CartEntry, ...]:
    """
    Parse a persisted snapshot.

    Raises:
        CartDecodeError: if the snapshot is not a list of valid entries or
            repeats a product id
    """
    try:
        data = json.loads(raw)
    except (ValueError, TypeError, RecursionError) as e:
        raise CartDecodeError(f"Snapshot is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise CartDecodeError("Snapshot must be a JSON array")

    entries = []
    seen: set[int] = set()
    for item in data:
        try:
            entry = CartEntry.from_dict(item)
        except (KeyError, TypeError, ValueError) as e:
            raise CartDecodeError(f"Invalid cart entry {item!r}: {e}") from e
        if entry.id in seen:
            raise CartDecodeError(f"Duplicate product id {entry.id} in snapshot")
        seen.add(entry.id)
        entries.append(entry)
    return tuple(entries)


def load_snapshot(store: PersistenceStore, key: str) -> tuple[CartEntry, ...]:
    """Load the cart from store; missing or corrupt snapshots give an empty cart."""
    try:
        raw = store.load(key)
    except Exception as e:
        logger.warning(f"Failed to read cart snapshot {key}: {e}")
        return ()

    if not raw:
        return ()

    try:
        return decode_cart(raw)
    except CartDecodeError as e:
        logger.warning(f"Corrupted cart snapshot {key}, starting empty: {e}")
        return ()


class RedisCartStore:
    """PersistenceStore backed by the synchronous Upstash Redis client."""

    def __init__(self, redis: Redis):
        self.redis = redis

    def load(self, key: str) -> Optional[str]:
        return self.redis.get(key)

    def save(self, key: str, value: str) -> None:
        self.redis.set(key, value)


def get_redis_sync() -> Redis:
    """
    Create a sync Upstash Redis client from configuration.

    Uses UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN.
    """
    config.validate_config()
    return Redis(url=config.UPSTASH_REDIS_REST_URL, token=config.UPSTASH_REDIS_REST_TOKEN)
