"""
Batch simulation and daily aggregation.

A scheduled product runs ``batches_per_day`` batches.  Each batch draws an
actual frying temperature uniformly within ±``temp_variance_c`` of the
target; batches outside ±``TEMP_TOLERANCE_C`` spoil 1.5× more product.

Oil accounting: the fryer is filled once per production day, so the day's
``oil_used_liters`` is the fryer capacity, not the sum of the per-batch
figures.  Each batch still reports the full capacity it fried in.
"""

from __future__ import annotations

import random
from typing import Iterable, Optional

from .catalog import batch_count
from .config import FINANCIAL, MONTHLY_REVENUE, OFF_TARGET_LOSS_FACTOR, SIM_DAYS, TEMP_TOLERANCE_C
from .models import Batch, DayRecord, Product, SystemProfile
from .scheduler import products_scheduled_on


def simulate_batch(product: Product, profile: SystemProfile, rng: random.Random) -> Batch:
    """Fry one batch of *product* on *profile*.  Consumes one draw from *rng*."""
    actual_temp = product.target_temp_c + (rng.random() - 0.5) * 2 * profile.temp_variance_c
    in_range = abs(actual_temp - product.target_temp_c) < TEMP_TOLERANCE_C

    oil_used = profile.capacity_liters
    oil_lost = oil_used * (profile.oil_loss_rate / SIM_DAYS)
    units    = product.units_per_run
    lost     = units * profile.product_loss_rate * (1.0 if in_range else OFF_TARGET_LOSS_FACTOR)

    return Batch(
        product_name       = product.name,
        actual_temp_c      = actual_temp,
        target_temp_c      = product.target_temp_c,
        in_range           = in_range,
        oil_used_liters    = oil_used,
        oil_lost_liters    = oil_lost,
        product_units_lost = lost,
        cycle_time_s       = product.cycle_time_s,
        units              = units,
        efficiency         = profile.efficiency,
    )


def daily_revenue() -> float:
    return MONTHLY_REVENUE / SIM_DAYS


def day_cost(oil_lost_liters: float, product_units_lost: float) -> float:
    return (oil_lost_liters * FINANCIAL["oil_cost_per_liter"]
            + product_units_lost * FINANCIAL["product_unit_cost"])


def run_day(
    day_index: int,
    catalog,
    profile: SystemProfile,
    rng: random.Random,
    scheduled: Optional[Iterable[str]] = None,
) -> DayRecord:
    """
    Simulate every scheduled batch of day *day_index*.

    *scheduled* overrides the scheduler (e.g. a decision remembered by the
    controller); otherwise the scheduler is asked with *rng*.
    """
    if scheduled is None:
        scheduled = products_scheduled_on(day_index, catalog, rng)
    scheduled = set(scheduled)

    batches = []
    oil_lost = 0.0
    units_lost = 0.0
    for product in catalog:
        if product.name not in scheduled:
            continue
        for _ in range(batch_count(product)):
            batch = simulate_batch(product, profile, rng)
            batches.append(batch)
            oil_lost   += batch.oil_lost_liters
            units_lost += batch.product_units_lost

    return DayRecord(
        day_index          = day_index,
        oil_used_liters    = profile.capacity_liters if scheduled else 0.0,
        oil_lost_liters    = oil_lost,
        product_units_lost = units_lost,
        revenue            = daily_revenue(),
        cost               = day_cost(oil_lost, units_lost),
        batches            = tuple(batches),
    )
