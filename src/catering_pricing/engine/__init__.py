"""Engine subpackage - core pricing logic and resolution."""
from .pricing_engine import PricingEngine
from .price_cache import PriceCache
from .models import MenuItem, CartLine, PriceLookup, OrderTotals
from .formatting import format_display

__all__ = ['PricingEngine', 'PriceCache', 'MenuItem', 'CartLine', 'PriceLookup', 'OrderTotals', 'format_display']
