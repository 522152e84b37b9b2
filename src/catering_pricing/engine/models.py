"""
Data models for the pricing engine.

Uses dataclasses for structured, type-safe data representation.
All money fields are integer cents.
"""
from dataclasses import dataclass, field
from typing import Optional

from ..config.settings import normalize_location
from .formatting import format_display


# Where a resolved price came from
SOURCE_CACHE = "Cache"
SOURCE_CATALOG = "Catalog"
SOURCE_NAME_TABLE = "NameTable"
SOURCE_DEFAULT = "Default"


@dataclass
class TraceStep:
    """A single step in the pricing resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class MenuItem:
    """A catalog entry with one price per location."""
    item_id: str
    name: str
    prices: dict[str, int] = field(default_factory=dict)  # location → cents
    category: Optional[str] = None
    unit: Optional[str] = None
    available: bool = True

    def price_for(self, location: Optional[str]) -> Optional[int]:
        """Price in cents at a location, or None if the item has none there."""
        code = normalize_location(location)
        if code is None:
            return None
        return self.prices.get(code)

    @property
    def price_thessaloniki(self) -> Optional[int]:
        return self.price_for('THESSALONIKI')

    @property
    def price_mykonos(self) -> Optional[int]:
        return self.price_for('MYKONOS')


@dataclass
class CartLine:
    """A cart entry with the unit price snapshotted when it was added."""
    menu_item_id: str
    unit_price: int
    quantity: int
    name: Optional[str] = None

    @property
    def extended_price(self) -> int:
        return self.unit_price * self.quantity


@dataclass
class PriceLookup:
    """A resolved price together with where it came from."""
    menu_item_id: str
    price: int
    source: str

    @property
    def resolved(self) -> bool:
        """False when the price is a zero/default fallback rather than real data."""
        return self.source != SOURCE_DEFAULT


@dataclass
class OrderTotals:
    """Complete result of pricing an order."""
    location: Optional[str]
    lines: list[CartLine]
    subtotal: int = 0
    delivery_fee: int = 0
    total: int = 0
    warnings: list[str] = field(default_factory=list)
    trace: list[TraceStep] = field(default_factory=list)

    # Metadata
    catalog_hash: Optional[str] = None

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the order-level trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def add_warning(self, warning: str):
        """Add an order-level warning."""
        if warning not in self.warnings:
            self.warnings.append(warning)

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)

    def to_display_dict(self, symbol: str = "€") -> dict:
        """Convert to the formatted dict used by order summaries and invoices."""
        return {
            "Location": self.location,
            "Subtotal": format_display(self.subtotal, symbol),
            "Delivery Fee": format_display(self.delivery_fee, symbol),
            "Total": format_display(self.total, symbol),
            "Lines": [
                {
                    "Item": line.menu_item_id,
                    "Name": line.name or "N/A",
                    "Quantity": line.quantity,
                    "Unit Price": format_display(line.unit_price, symbol),
                    "Total": format_display(line.extended_price, symbol),
                }
                for line in self.lines
            ]
        }
