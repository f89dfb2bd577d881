import random

import pytest

from frysim.config import MONTHLY_REVENUE
from frysim.fryer import day_cost, daily_revenue, run_day, simulate_batch
from frysim.profiles import get_profile
from frysim.scheduler import ScheduleRule


# ── Batch simulator ──────────────────────────────────────────────────────────

def test_batch_oil_figures(test_profile, make_product, fixed_random):
    batch = simulate_batch(make_product(), test_profile, fixed_random(0.5))
    assert batch.oil_used_liters == 40
    assert batch.oil_lost_liters == pytest.approx(40 * (0.15 / 30))
    assert batch.oil_lost_liters == pytest.approx(0.2)


def test_in_range_batch_loss(test_profile, make_product, fixed_random):
    batch = simulate_batch(make_product(units=100, batches=2), test_profile, fixed_random(0.5))
    assert batch.in_range
    assert batch.actual_temp_c == pytest.approx(180)
    assert batch.units == 50
    assert batch.product_units_lost == pytest.approx(0.2)


def test_out_of_range_batch_loss(test_profile, make_product, fixed_random):
    batch = simulate_batch(make_product(units=100, batches=2), test_profile, fixed_random(0.0))
    assert not batch.in_range
    assert batch.actual_temp_c == pytest.approx(165)
    assert batch.temp_deviation_c == pytest.approx(-15)
    assert batch.product_units_lost == pytest.approx(0.3)


def test_tolerance_is_five_degrees(test_profile, make_product, fixed_random):
    # deviation = (r - 0.5) * 30
    assert simulate_batch(make_product(), test_profile, fixed_random(0.6)).in_range
    assert not simulate_batch(make_product(), test_profile, fixed_random(0.7)).in_range
    assert not simulate_batch(make_product(), test_profile, fixed_random(0.3)).in_range


def test_temperature_stays_within_variance(make_product):
    profile = get_profile("actual")
    rng = random.Random(11)
    product = make_product(temp=175)
    for _ in range(500):
        b = simulate_batch(product, profile, rng)
        assert 160 <= b.actual_temp_c <= 190


def test_nuevo_is_always_in_range(make_product):
    profile = get_profile("nuevo")
    rng = random.Random(2)
    assert all(simulate_batch(make_product(), profile, rng).in_range for _ in range(200))


def test_simulate_batch_is_deterministic_for_a_seed(make_product):
    profile = get_profile("actual")
    product = make_product()
    assert simulate_batch(product, profile, random.Random(9)) == \
        simulate_batch(product, profile, random.Random(9))


def test_batch_passes_through_process_fields(test_profile, make_product, fixed_random):
    batch = simulate_batch(make_product(name="Churros", cycle=95), test_profile, fixed_random())
    assert batch.product_name == "Churros"
    assert batch.cycle_time_s == 95
    assert batch.efficiency == pytest.approx(0.8)


# ── Day aggregator ───────────────────────────────────────────────────────────

def test_day_fills_oil_once(test_profile, make_product, make_catalog, fixed_random):
    catalog = make_catalog(make_product("A", batches=3), make_product("B", batches=2))
    day = run_day(1, catalog, test_profile, fixed_random(0.5))
    assert day.total_batches == 5
    assert day.oil_used_liters == 40
    assert sum(b.oil_used_liters for b in day.batches) == 200


def test_day_sums_losses_and_costs(test_profile, make_product, make_catalog, fixed_random):
    catalog = make_catalog(make_product("A", units=100, batches=2))
    day = run_day(3, catalog, test_profile, fixed_random(0.5, 0.0))
    assert day.day_index == 3
    assert day.oil_lost_liters == pytest.approx(0.4)
    assert day.product_units_lost == pytest.approx(0.2 + 0.3)
    assert day.cost == pytest.approx(0.4 * 1750 + 0.5 * 100)
    assert day.cost == pytest.approx(day_cost(day.oil_lost_liters, day.product_units_lost))
    assert day.revenue == pytest.approx(MONTHLY_REVENUE / 30)


def test_single_batch_day(test_profile, make_product, make_catalog, fixed_random):
    catalog = make_catalog(make_product(batches=1))
    day = run_day(1, catalog, test_profile, fixed_random())
    assert day.oil_used_liters == 40
    assert day.oil_lost_liters == pytest.approx(0.2)


def test_empty_day(test_profile, make_product, make_catalog):
    catalog = make_catalog(make_product(schedule=ScheduleRule.on_day_of_month(15)))
    day = run_day(1, catalog, test_profile, random.Random(0))
    assert day.batches == ()
    assert day.oil_used_liters == 0
    assert day.oil_lost_liters == 0
    assert day.product_units_lost == 0
    assert day.cost == 0
    assert day.revenue == pytest.approx(daily_revenue())


def test_batches_follow_catalog_order(test_profile, make_product, make_catalog):
    catalog = make_catalog(make_product("A", batches=2), make_product("B", batches=1))
    day = run_day(1, catalog, test_profile, random.Random(0))
    assert [b.product_name for b in day.batches] == ["A", "A", "B"]
    assert day.products == ("A", "B")


def test_explicit_schedule_overrides_rules(test_profile, make_product, make_catalog):
    catalog = make_catalog(make_product("A"), make_product("B"))
    day = run_day(1, catalog, test_profile, random.Random(0), scheduled=["B"])
    assert day.products == ("B",)


def test_zero_batch_product_is_skipped(test_profile, make_product, make_catalog):
    catalog = make_catalog(make_product("A", batches=0), make_product("B", batches=1))
    day = run_day(1, catalog, test_profile, random.Random(0))
    assert day.products == ("B",)


def test_day_record_is_immutable(test_profile, make_catalog):
    day = run_day(1, make_catalog(), test_profile, random.Random(0))
    with pytest.raises(AttributeError):
        day.cost = 0
