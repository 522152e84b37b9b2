import sys
import os
import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from catering_pricing.config.settings import Settings, normalize_location
from catering_pricing.data.catalog import MenuCatalog, get_file_hash


@pytest.fixture(scope="module")
def settings():
    return Settings.load()


def test_seed_catalog_loads(settings):
    catalog = MenuCatalog.load(settings=settings)

    assert len(catalog) == 60
    assert catalog.locations == ["MYKONOS", "THESSALONIKI"]

    bagels = catalog.get("3")
    assert bagels.name == "Bagels"
    assert bagels.price_thessaloniki == 500
    assert bagels.price_mykonos == 900
    assert bagels.category == "breads"
    assert bagels.available is True
    assert catalog.file_hash == get_file_hash(settings.menu_catalog)


def test_lookup_by_id_and_name(settings):
    catalog = MenuCatalog.load(settings=settings)

    assert catalog.get(3) is catalog.get(" 3 ")
    assert catalog.get("404") is None
    assert catalog.get(None) is None
    assert "3" in catalog
    assert catalog.find_by_name("avocado TOAST").item_id == "36"
    assert catalog.find_by_name("") is None


def test_blank_price_means_not_sold_there(tmp_path, settings):
    path = tmp_path / "menu.csv"
    path.write_text(
        "id,name,category,unit,available,Thessaloniki_Price,Mykonos_Price\n"
        "1,Bread rolls,breads,per piece,true,300,\n"
        "2,Caviar,specials,per tin,false,,12000\n"
        "2,Caviar duplicate,specials,per tin,true,1,1\n",
        encoding="utf-8",
    )

    catalog = MenuCatalog.load(path, settings=settings)

    assert len(catalog) == 2
    rolls = catalog.get("1")
    assert rolls.prices == {"THESSALONIKI": 300}
    assert rolls.price_for("Mykonos") is None

    caviar = catalog.get("2")
    assert caviar.name == "Caviar"
    assert caviar.available is False
    assert caviar.price_for("mykonos") == 12000


def test_extra_location_column(tmp_path, settings):
    """New kitchens only need a new price column."""
    path = tmp_path / "menu.csv"
    path.write_text(
        "id,name,THESSALONIKI_Price,ATHENS_Price\n"
        "1,Bread rolls,300,320\n",
        encoding="utf-8",
    )

    catalog = MenuCatalog.load(path, settings=settings)

    assert catalog.get("1").price_for("Athens") == 320
    assert catalog.get("1").category is None


def test_missing_catalog_raises(tmp_path, settings):
    with pytest.raises(FileNotFoundError):
        MenuCatalog.load(tmp_path / "nope.csv", settings=settings)


def test_normalize_location():
    assert normalize_location(" Mykonos ") == "MYKONOS"
    assert normalize_location("") is None
    assert normalize_location(None) is None


def test_settings_delivery_fee(settings):
    assert settings.delivery_fee_for("thessaloniki") == 10000
    assert settings.delivery_fee_for("MYKONOS") == 15000
    assert settings.delivery_fee_for("Athens") == settings.default_delivery_fee
