"""
Menu Catalog - Loads menu items and their per-location prices.

The catalog CSV carries one "<LOCATION>_Price" column per kitchen,
each holding integer cents. A blank cell means the item is not sold there.
"""
import hashlib
import logging
from pathlib import Path
from typing import Iterator, Optional

import pandas as pd

from ..config.settings import get_settings, Settings, normalize_location
from ..engine.models import MenuItem

logger = logging.getLogger(__name__)

PRICE_SUFFIX = '_Price'


def get_file_hash(path: Path) -> str:
    """Get SHA256 hash of a file."""
    if not path.exists():
        return ""
    with open(path, 'rb') as f:
        return hashlib.sha256(f.read()).hexdigest()[:12]


def _parse_available(value) -> bool:
    if pd.isna(value):
        return True
    return str(value).strip().lower() in ('true', '1', 'yes', 'on')


class MenuCatalog:
    """In-memory menu catalog keyed by item id."""

    def __init__(self, items: Optional[dict[str, MenuItem]] = None, file_hash: Optional[str] = None):
        self.items: dict[str, MenuItem] = items or {}
        self.file_hash = file_hash
        self._by_name = {item.name.strip().casefold(): item for item in self.items.values()}

    @classmethod
    def load(cls, path: Optional[Path] = None, settings: Optional[Settings] = None) -> 'MenuCatalog':
        """
        Load the catalog from CSV.

        Args:
            path: Catalog CSV, defaults to settings.menu_catalog
            settings: Optional settings override

        Returns:
            MenuCatalog with one MenuItem per unique id
        """
        settings = settings or get_settings()
        path = Path(path) if path else settings.menu_catalog

        if not path.exists():
            raise FileNotFoundError(f"Menu catalog not found at {path}.")

        df = pd.read_csv(path, dtype={'id': str, 'name': str})
        df['id'] = df['id'].str.strip()
        df = df.dropna(subset=['id']).drop_duplicates('id')

        price_columns = [c for c in df.columns if c.endswith(PRICE_SUFFIX)]
        for col in price_columns:
            df[col] = pd.to_numeric(df[col], errors='coerce')

        items = {}
        for _, row in df.iterrows():
            prices = {}
            for col in price_columns:
                if pd.notna(row[col]):
                    prices[normalize_location(col[:-len(PRICE_SUFFIX)])] = int(row[col])

            items[row['id']] = MenuItem(
                item_id=row['id'],
                name=row['name'] if pd.notna(row.get('name')) else "N/A",
                prices=prices,
                category=row['category'] if pd.notna(row.get('category')) else None,
                unit=row['unit'] if pd.notna(row.get('unit')) else None,
                available=_parse_available(row.get('available')),
            )

        unknown = {
            normalize_location(c[:-len(PRICE_SUFFIX)]) for c in price_columns
        } - set(settings.active_locations)
        if unknown:
            logger.warning("Catalog has prices for inactive locations: %s", ", ".join(sorted(unknown)))

        logger.info("Loaded %d menu items from %s", len(items), path)
        return cls(items, file_hash=get_file_hash(path))

    @property
    def locations(self) -> list[str]:
        """Location codes that have at least one price in the catalog."""
        found = set()
        for item in self.items.values():
            found.update(item.prices)
        return sorted(found)

    def get(self, menu_item_id) -> Optional[MenuItem]:
        """Menu item by id, or None."""
        if menu_item_id is None:
            return None
        return self.items.get(str(menu_item_id).strip())

    def find_by_name(self, name: str) -> Optional[MenuItem]:
        """Menu item by display name (case-insensitive), or None."""
        if not name:
            return None
        return self._by_name.get(str(name).strip().casefold())

    def __contains__(self, menu_item_id) -> bool:
        return self.get(menu_item_id) is not None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[MenuItem]:
        return iter(self.items.values())
