"""
Name Price Table - Fixed prices keyed by display name.

Transitional lookup for catalog entries that cannot be resolved by id.
Unknown names get one fixed default price instead of failing.
"""
import logging
import threading
from pathlib import Path
from typing import Optional

import pandas as pd

logger = logging.getLogger(__name__)


class NamePriceTable:
    """
    Display name → price in cents.

    Loaded from name_prices.csv (columns: name, price). A missing or
    unreadable file leaves the table empty, so every name gets the default.
    """

    def __init__(self, path: Optional[Path] = None, default_price: int = 1000):
        """Load the name table."""
        self.prices: dict[str, int] = {}
        self.default_price = default_price
        self.loaded = False

        if path and path.exists():
            self._load(path)

    def _load(self, path: Path):
        """Load prices from CSV."""
        try:
            df = pd.read_csv(path, dtype={'name': str})
            df = df.dropna(subset=['name', 'price'])
            prices = {self._key(name): int(price) for name, price in zip(df['name'], df['price'])}
        except (OSError, KeyError, ValueError) as e:
            logger.warning("Could not read name price table %s: %s", path, e)
            return

        self.prices = prices
        self.loaded = True
        logger.info("Loaded %d name prices from %s", len(self.prices), path)

    @staticmethod
    def _key(name: str) -> str:
        return str(name).strip().casefold()

    def __contains__(self, name) -> bool:
        return self._key(name) in self.prices

    def get(self, name: str) -> int:
        """Fixed price for a name, or the default price."""
        return self.prices.get(self._key(name), self.default_price)


# Loaded tables, shared by every session
_tables: dict[tuple, NamePriceTable] = {}
_tables_lock = threading.Lock()


def get_name_price_table(path: Optional[Path] = None, default_price: int = 1000) -> NamePriceTable:
    """Get the shared table for a file, reading it from disk only once."""
    key = (str(path) if path else None, default_price)
    with _tables_lock:
        table = _tables.get(key)
        if table is None:
            table = NamePriceTable(path, default_price=default_price)
            _tables[key] = table
        return table
