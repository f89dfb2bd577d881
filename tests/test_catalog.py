import pytest

from frysim.catalog import ProductCatalog, batch_count, default_catalog, parse_number
from frysim.errors import UnknownFieldError
from frysim.scheduler import EVERY_DAY, INTERVAL, WEEKDAY_RANDOM, WEEKDAY_SET


@pytest.mark.parametrize("raw, expected", [
    ("12.5", 12.5),
    (" 7 ", 7.0),
    (3, 3.0),
    ("abc", 0.0),
    ("", 0.0),
    (None, 0.0),
    ("inf", 0.0),
    ("nan", 0.0),
])
def test_parse_number_is_lenient(raw, expected):
    assert parse_number(raw) == expected


def test_default_catalog_order_and_values():
    catalog = default_catalog()
    assert catalog.names() == ["Empanaditas", "Sopaipillas", "Camarones", "Bolitas de Carne"]
    emp = catalog[0]
    assert emp.units_per_batch == 5000
    assert emp.batches_per_day == 3
    assert emp.target_temp_c == 180
    assert [p.schedule.kind for p in catalog] == [EVERY_DAY, WEEKDAY_RANDOM, WEEKDAY_SET, INTERVAL]


def test_default_catalog_is_fresh_each_time():
    a, b = default_catalog(), default_catalog()
    a.update_field(0, "units_per_batch", "1")
    assert b[0].units_per_batch == 5000


def test_update_field_stores_parsed_value():
    catalog = default_catalog()
    assert catalog.update_field(1, "target_temp_c", "190.5") == 190.5
    assert catalog[1].target_temp_c == 190.5


def test_update_field_coerces_garbage_to_zero():
    catalog = default_catalog()
    assert catalog.update_field(2, "units_per_batch", "lots") == 0.0
    assert catalog[2].units_per_batch == 0.0


def test_update_field_rejects_unknown_field():
    catalog = default_catalog()
    with pytest.raises(UnknownFieldError):
        catalog.update_field(0, "name", "Churros")
    with pytest.raises(KeyError):
        catalog.update_field(0, "colour", "1")
    assert catalog[0].name == "Empanaditas"


def test_list_is_a_copy(make_product):
    catalog = ProductCatalog([make_product("A"), make_product("B")])
    listed = catalog.list()
    listed.append(make_product("C"))
    assert len(catalog) == 2
    assert catalog.find("B").name == "B"
    assert catalog.find("C") is None


@pytest.mark.parametrize("batches, expected", [(3, 3), (2.5, 3), (0, 0), (-1, 0)])
def test_batch_count(make_product, batches, expected):
    assert batch_count(make_product(batches=batches)) == expected
