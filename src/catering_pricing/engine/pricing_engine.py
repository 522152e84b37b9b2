"""
Pricing Engine - Single source of truth for what an order line costs.

Resolves location prices in cents and pins them for the order flow so the
cart, order summary and persisted totals agree:
- Per-session price cache (cached price always wins)
- Zero-price fallback with a "resolved vs. defaulted" signal
- Integer subtotal / delivery fee / total computation
- Euro display formatting
- Execution trace and warnings on every quote
"""
import logging
from decimal import Decimal, ROUND_HALF_EVEN, localcontext
from typing import Iterable, Optional, Union

from ..config.settings import get_settings, Settings, normalize_location
from .formatting import format_display, to_decimal, working_precision
from .models import (
    CartLine, MenuItem, OrderTotals, PriceLookup,
    SOURCE_CACHE, SOURCE_CATALOG, SOURCE_DEFAULT, SOURCE_NAME_TABLE,
)
from .name_prices import NamePriceTable, get_name_price_table
from .price_cache import PriceCache

logger = logging.getLogger(__name__)

CartItems = Union[dict, Iterable[CartLine]]


class PricingEngine:
    """
    Pricing for one order session.

    Price resolution order:
    1. Price already cached for this session
    2. Menu item's price for the requested location (then cached)
    3. Zero, flagged as a default

    Nothing in here raises for missing or partial data; every input maps
    to a number. Callers check PriceLookup.resolved or the quote warnings
    before trusting a zero for billing.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        location: Optional[str] = None,
        catalog=None,
        cache: Optional[PriceCache] = None,
    ):
        """Start a session with an empty cache."""
        self.settings = settings or get_settings()
        self.location = normalize_location(location)
        self.catalog = catalog
        self.cache = cache if cache is not None else PriceCache()

    @property
    def name_prices(self) -> NamePriceTable:
        """Display-name table, loaded on first use and shared between sessions."""
        return get_name_price_table(
            self.settings.name_prices,
            default_price=self.settings.default_name_price,
        )

    def load_catalog(self, path=None):
        """Load the menu catalog from disk and attach it to this session."""
        from ..data.catalog import MenuCatalog

        self.catalog = MenuCatalog.load(path, settings=self.settings)
        return self.catalog

    # ------------------------------------------------------------------
    # Price resolution
    # ------------------------------------------------------------------

    def lookup_price(
        self,
        menu_item_id,
        menu_item: Optional[MenuItem] = None,
        location: Optional[str] = None,
    ) -> PriceLookup:
        """
        Resolve a price and report where it came from.

        A cached price is returned as is, even if menu_item or location
        would give a different value now. Items without an id are priced
        but never cached.
        """
        menu_item_id = str(menu_item_id).strip() if menu_item_id is not None else ""

        if menu_item_id:
            cached = self.cache.get(menu_item_id)
            if cached is not None:
                return PriceLookup(menu_item_id, cached, SOURCE_CACHE)

        if menu_item is not None and location:
            price = menu_item.price_for(location)
            if price is not None:
                if menu_item_id:
                    price = self.cache.setdefault(menu_item_id, price)
                return PriceLookup(menu_item_id, price, SOURCE_CATALOG)
            logger.debug(
                "Item #%s has no price for %s, using 0", menu_item_id, normalize_location(location)
            )
        else:
            logger.debug("No cached price or catalog data for item #%s, using 0", menu_item_id)

        return PriceLookup(menu_item_id, 0, SOURCE_DEFAULT)

    def resolve_price(
        self,
        menu_item_id,
        menu_item: Optional[MenuItem] = None,
        location: Optional[str] = None,
    ) -> int:
        """Price in cents for a menu item; 0 when it cannot be resolved."""
        return self.lookup_price(menu_item_id, menu_item, location).price

    def resolve_price_by_name(self, name: str) -> PriceLookup:
        """Fixed price from the display-name table, or its default price."""
        name = str(name).strip() if name is not None else ""
        if name in self.name_prices:
            return PriceLookup(name, self.name_prices.get(name), SOURCE_NAME_TABLE)
        logger.debug("Name %r not in name price table, using default", name)
        return PriceLookup(name, self.name_prices.default_price, SOURCE_DEFAULT)

    def invalidate(self, menu_item_id=None):
        """Forget one cached price, or every cached price when no id is given."""
        if menu_item_id is None:
            self.cache.invalidate()
        else:
            self.cache.invalidate(str(menu_item_id).strip())

    def change_location(self, location: Optional[str]):
        """Switch kitchen; cached prices belong to the old location and are dropped."""
        code = normalize_location(location)
        if code != self.location:
            logger.debug("Location changed %s → %s, clearing price cache", self.location, code)
            self.cache.invalidate()
        self.location = code

    # ------------------------------------------------------------------
    # Order arithmetic (integer cents)
    # ------------------------------------------------------------------

    @staticmethod
    def compute_subtotal(lines: Iterable[CartLine]) -> int:
        """Sum of unit_price × quantity over all lines."""
        return sum((line.unit_price * line.quantity for line in lines), 0)

    def resolve_delivery_fee(self, location: Optional[str] = None) -> int:
        """Fixed delivery fee for a location; unknown locations get the default fee."""
        return self.settings.delivery_fee_for(location)

    @staticmethod
    def compute_total(subtotal: int, delivery_fee: int) -> int:
        """Subtotal plus delivery fee."""
        return subtotal + delivery_fee

    def compute_vat(self, amount: int, rate=None) -> int:
        """VAT in cents for an amount in cents, rounded half-even to the cent."""
        rate = self.settings.vat_rate if rate is None else rate
        base = to_decimal(amount)
        vat_rate = to_decimal(rate)
        with localcontext() as ctx:
            ctx.prec = working_precision(base, vat_rate)
            return int((base * vat_rate).quantize(Decimal(1), rounding=ROUND_HALF_EVEN))

    def format_display(self, minor_units) -> str:
        """Render cents as "€X.YY"."""
        return format_display(minor_units, self.settings.currency_symbol)

    # ------------------------------------------------------------------
    # Whole orders
    # ------------------------------------------------------------------

    def _price_entries(self, items: CartItems, catalog, location: Optional[str]) -> list[tuple[CartLine, PriceLookup]]:
        """Resolve a consistent unit price for each cart entry."""
        if isinstance(items, dict):
            entries = [(item_id, qty, None) for item_id, qty in items.items()]
        else:
            entries = [(line.menu_item_id, line.quantity, line.name) for line in items]

        priced = []
        for item_id, qty, name in entries:
            menu_item = catalog.get(item_id) if catalog is not None else None
            lookup = self.lookup_price(item_id, menu_item, location)
            if name is None and menu_item is not None:
                name = menu_item.name
            line = CartLine(menu_item_id=lookup.menu_item_id, unit_price=lookup.price, quantity=qty, name=name)
            priced.append((line, lookup))
        return priced

    def apply_consistent_prices(
        self,
        items: CartItems,
        catalog=None,
        location: Optional[str] = None,
    ) -> list[CartLine]:
        """
        Snapshot a session-consistent unit price onto every cart entry.

        Args:
            items: Dict of {menu_item_id: quantity} or CartLines
            catalog: Catalog to read prices from, defaults to the session's
            location: Kitchen location, defaults to the session's

        Returns:
            New CartLines; the input is not modified
        """
        catalog = catalog if catalog is not None else self.catalog
        location = normalize_location(location) or self.location
        return [line for line, _ in self._price_entries(items, catalog, location)]

    def quote(
        self,
        items: CartItems,
        catalog=None,
        location: Optional[str] = None,
    ) -> OrderTotals:
        """
        Price a whole order with full traceability.

        Args:
            items: Dict of {menu_item_id: quantity} or CartLines
            catalog: Catalog to read prices from, defaults to the session's
            location: Kitchen location, defaults to the session's

        Returns:
            OrderTotals with lines, subtotal, delivery fee, total, trace and warnings
        """
        catalog = catalog if catalog is not None else self.catalog
        location = normalize_location(location) or self.location

        result = OrderTotals(
            location=location,
            lines=[],
            catalog_hash=getattr(catalog, 'file_hash', None),
        )
        result.add_trace("Location", "Pricing for kitchen location", location or "unspecified")

        for line, lookup in self._price_entries(items, catalog, location):
            result.lines.append(line)

            if lookup.source == SOURCE_CACHE:
                result.add_trace("Price Resolution", f"Item #{line.menu_item_id} using cached price", self.format_display(line.unit_price))
            elif lookup.source == SOURCE_CATALOG:
                result.add_trace("Price Resolution", f"Item #{line.menu_item_id} using {location} price", self.format_display(line.unit_price))
            else:
                result.add_trace("Price Resolution", f"Item #{line.menu_item_id} has no price, using zero", self.format_display(0))
                result.add_warning(f"No price found for item #{line.menu_item_id}")

            result.add_trace(
                "Extension",
                f"Quantity {line.quantity} × {self.format_display(line.unit_price)}",
                self.format_display(line.extended_price),
            )

        result.subtotal = self.compute_subtotal(result.lines)
        result.delivery_fee = self.resolve_delivery_fee(location)
        result.total = self.compute_total(result.subtotal, result.delivery_fee)

        result.add_trace("Subtotal", "Sum of line totals", self.format_display(result.subtotal))
        if location not in self.settings.delivery_fees:
            result.add_warning(f"No delivery fee for location {location or 'unspecified'}, default fee applied")
        result.add_trace("Delivery Fee", f"Fee for {location or 'unspecified location'}", self.format_display(result.delivery_fee))
        result.add_trace("Total", "Subtotal + delivery fee", self.format_display(result.total))

        return result
