"""
Price Cache - Keeps menu item prices stable for one order flow.

Each order session owns its own cache. Once a price is stored for an item,
later reads return that same value until it is invalidated, so the cart,
the order summary and the persisted totals never disagree.
"""
import logging
import threading
from typing import Optional

logger = logging.getLogger(__name__)


class PriceCache:
    """
    Mapping of menu item id → price in cents, scoped to one session.

    Guarded by a lock so a session shared between request threads
    still sees one consistent price per item.
    """

    def __init__(self):
        self._prices: dict[str, int] = {}
        self._lock = threading.Lock()

    def get(self, menu_item_id: str) -> Optional[int]:
        """Cached price for an item, or None."""
        with self._lock:
            return self._prices.get(str(menu_item_id))

    def set(self, menu_item_id: str, price: int):
        """Store a price for an item."""
        with self._lock:
            self._prices[str(menu_item_id)] = price
        logger.debug("Cached price for item #%s: %s cents", menu_item_id, price)

    def setdefault(self, menu_item_id: str, price: int) -> int:
        """Store a price unless one is already cached; return the cached value."""
        key = str(menu_item_id)
        with self._lock:
            if key in self._prices:
                return self._prices[key]
            self._prices[key] = price
        logger.debug("Cached price for item #%s: %s cents", menu_item_id, price)
        return price

    def invalidate(self, menu_item_id: Optional[str] = None):
        """Drop one cached price, or all of them when no id is given."""
        with self._lock:
            if menu_item_id is None:
                self._prices.clear()
            else:
                self._prices.pop(str(menu_item_id), None)
        if menu_item_id is None:
            logger.debug("Price cache cleared")
        else:
            logger.debug("Price cache entry #%s removed", menu_item_id)

    def snapshot(self) -> dict[str, int]:
        """Copy of the current cache contents."""
        with self._lock:
            return dict(self._prices)

    def __contains__(self, menu_item_id) -> bool:
        with self._lock:
            return str(menu_item_id) in self._prices

    def __len__(self) -> int:
        with self._lock:
            return len(self._prices)
