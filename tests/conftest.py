import random

import pytest

from frysim.catalog import ProductCatalog
from frysim.models import Product, SystemProfile
from frysim.scheduler import ScheduleRule


class FixedRandom(random.Random):
    """Random source whose ``random()`` replays *values* in a cycle."""

    def __init__(self, *values: float) -> None:
        super().__init__(0)
        self._values = values or (0.5,)
        self._i = 0

    def random(self) -> float:
        v = self._values[self._i % len(self._values)]
        self._i += 1
        return v


@pytest.fixture
def fixed_random():
    return FixedRandom


@pytest.fixture
def test_profile():
    """40 L fryer with a wide temperature swing, so both in- and out-of-range batches occur."""
    return SystemProfile(
        name="Test 40L",
        capacity_liters=40,
        temp_variance_c=15,
        oil_loss_rate=0.15,
        product_loss_rate=0.004,
        efficiency=0.8,
        has_filtration=True,
    )


@pytest.fixture
def make_product():
    def _make(name="Test", units=100, batches=2, temp=180, cycle=120, schedule=None):
        return Product(
            name=name,
            target_temp_c=temp,
            cycle_time_s=cycle,
            units_per_batch=units,
            batches_per_day=batches,
            schedule=schedule or ScheduleRule.every_day(),
        )
    return _make


@pytest.fixture
def make_catalog(make_product):
    def _make(*products):
        return ProductCatalog(products or [make_product()])
    return _make
