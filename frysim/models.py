"""Data-model classes shared across the simulation."""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import Tuple

from .scheduler import ScheduleRule


@dataclass(frozen=True)
class SystemProfile:
    """A fryer hardware configuration.  Never mutated during a run."""

    name:              str
    capacity_liters:   float
    temp_variance_c:   float
    oil_loss_rate:     float        # fraction of capacity lost per month
    product_loss_rate: float        # fraction of batch units lost on-target
    efficiency:        float = 0.0  # reported only
    has_filtration:    bool  = False


@dataclass
class Product:
    """One editable catalog entry."""

    name:            str
    target_temp_c:   float
    cycle_time_s:    float
    units_per_batch: float
    batches_per_day: float
    schedule:        ScheduleRule = field(default_factory=ScheduleRule.every_day)

    @property
    def units_per_run(self) -> float:
        """Units fried in a single batch (daily units split across batches)."""
        return self.units_per_batch / self.batches_per_day


@dataclass(frozen=True)
class Batch:
    """Outcome of frying one batch of one product."""

    product_name:       str
    actual_temp_c:      float
    target_temp_c:      float
    in_range:           bool
    oil_used_liters:    float
    oil_lost_liters:    float
    product_units_lost: float
    cycle_time_s:       float
    units:              float
    efficiency:         float = 0.0

    @property
    def temp_deviation_c(self) -> float:
        return self.actual_temp_c - self.target_temp_c


@dataclass(frozen=True)
class BatchProgress:
    """The batch currently shown as "in progress" for a day."""

    batch:         Batch
    batch_number:  int      # 1-based position within the day
    total_batches: int


@dataclass(frozen=True)
class DayRecord:
    """Aggregated, immutable result of all batches fried on one day."""

    day_index:          int
    oil_used_liters:    float = 0.0
    oil_lost_liters:    float = 0.0
    product_units_lost: float = 0.0
    revenue:            float = 0.0
    cost:               float = 0.0
    batches:            Tuple[Batch, ...] = ()

    @property
    def total_batches(self) -> int:
        return len(self.batches)

    @property
    def products(self) -> Tuple[str, ...]:
        """Names of the products fried this day, first-batch order."""
        return tuple(dict.fromkeys(b.product_name for b in self.batches))


@dataclass
class RunningTotals:
    """Cumulative sums over every committed day record."""

    oil_used_liters:    float = 0.0
    oil_lost_liters:    float = 0.0
    product_units_lost: float = 0.0
    revenue:            float = 0.0
    cost:               float = 0.0

    def add(self, day: DayRecord) -> None:
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) + getattr(day, f.name))

    def reset(self) -> None:
        for f in fields(self):
            setattr(self, f.name, 0.0)

    @property
    def oil_loss_pct(self) -> float:
        """Oil lost as a percentage of oil used; 0 before any oil is used."""
        if self.oil_used_liters == 0:
            return 0.0
        return self.oil_lost_liters / self.oil_used_liters * 100
