"""
Centralized settings and path configuration for the pricing engine.
"""
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional


DEFAULT_LOCATIONS = ('THESSALONIKI', 'MYKONOS')


def normalize_location(location: Optional[str]) -> Optional[str]:
    """Normalize a location name to its code ("Mykonos" -> "MYKONOS")."""
    if location is None:
        return None
    code = str(location).strip().upper()
    return code or None


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 4 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path

    # Input files
    menu_catalog: Path
    name_prices: Optional[Path] = None

    # Kitchens with their own price list
    active_locations: tuple = DEFAULT_LOCATIONS

    # Delivery fees in cents, keyed by location code
    delivery_fees: dict[str, int] = field(default_factory=lambda: {
        'THESSALONIKI': 10000,  # €100
        'MYKONOS': 15000,       # €150
    })
    default_delivery_fee: int = 10000

    # Display
    currency_symbol: str = "€"

    # Invoicing
    vat_rate: str = "0.13"

    # Price for names missing from the name table
    default_name_price: int = 1000

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure."""
        root = project_root or get_project_root()
        data_dir = Path(__file__).resolve().parent.parent / 'data'

        return cls(
            project_root=root,
            menu_catalog=data_dir / 'menu_catalog.csv',
            name_prices=data_dir / 'name_prices.csv',
        )

    def delivery_fee_for(self, location: Optional[str]) -> int:
        """Fixed delivery fee for a location, or the default fee."""
        code = normalize_location(location)
        if code is None:
            return self.default_delivery_fee
        return self.delivery_fees.get(code, self.default_delivery_fee)


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
