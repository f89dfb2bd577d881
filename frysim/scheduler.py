"""
Production scheduling — which products are fried on which day.

Days are numbered from 1 and ``weekday = day_index % 7`` (0–6).  Rules:

    every-day        always produced
    weekday-pattern  core weekdays always, optional weekdays with probability p
    weekday-set      only on the listed weekdays
    day-of-month     only on one day of the month
    interval         every N days (day_index % N == 0)

Only ``weekday-pattern`` draws random numbers.  Each call to
:func:`products_scheduled_on` draws afresh, so two queries for the same day
can disagree; :class:`Scheduler` remembers the first answer per day.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from .config import (
    DEFAULT_DAY_OF_MONTH, DEFAULT_INTERVAL_DAYS, DEFAULT_WEEKDAY_SET,
    WEEKDAY_PATTERN,
)

EVERY_DAY       = "every-day"
WEEKDAY_RANDOM  = "weekday-pattern"
WEEKDAY_SET     = "weekday-set"
DAY_OF_MONTH    = "day-of-month"
INTERVAL        = "interval"

RULE_KINDS = (EVERY_DAY, WEEKDAY_RANDOM, WEEKDAY_SET, DAY_OF_MONTH, INTERVAL)


def weekday_of(day_index: int) -> int:
    return day_index % 7


@dataclass(frozen=True)
class ScheduleRule:
    kind:              str = EVERY_DAY
    weekdays:          FrozenSet[int] = frozenset()
    optional_weekdays: FrozenSet[int] = frozenset()
    probability:       float = 0.0
    day_of_month:      Optional[int] = None
    interval_days:     Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind not in RULE_KINDS:
            raise ValueError(f"unknown schedule rule {self.kind!r}")

    # ── Constructors ─────────────────────────────────────────────────────────

    @classmethod
    def every_day(cls) -> "ScheduleRule":
        return cls(EVERY_DAY)

    @classmethod
    def weekday_pattern(
        cls,
        core: Iterable[int] = WEEKDAY_PATTERN["core_weekdays"],
        optional: Iterable[int] = WEEKDAY_PATTERN["optional_weekdays"],
        probability: float = WEEKDAY_PATTERN["probability"],
    ) -> "ScheduleRule":
        return cls(
            WEEKDAY_RANDOM,
            weekdays=frozenset(core),
            optional_weekdays=frozenset(optional),
            probability=probability,
        )

    @classmethod
    def weekday_set(cls, weekdays: Iterable[int] = DEFAULT_WEEKDAY_SET) -> "ScheduleRule":
        return cls(WEEKDAY_SET, weekdays=frozenset(weekdays))

    @classmethod
    def on_day_of_month(cls, day_of_month: int = DEFAULT_DAY_OF_MONTH) -> "ScheduleRule":
        return cls(DAY_OF_MONTH, day_of_month=day_of_month)

    @classmethod
    def every_n_days(cls, interval_days: int = DEFAULT_INTERVAL_DAYS) -> "ScheduleRule":
        if interval_days < 1:
            raise ValueError("interval must be at least one day")
        return cls(INTERVAL, interval_days=interval_days)

    @classmethod
    def from_config(cls, spec: Tuple[str, dict]) -> "ScheduleRule":
        """Build a rule from a ``(kind, params)`` entry of ``config.PRODUCTS``."""
        kind, params = spec
        builders = {
            EVERY_DAY:      cls.every_day,
            WEEKDAY_RANDOM: cls.weekday_pattern,
            WEEKDAY_SET:    cls.weekday_set,
            DAY_OF_MONTH:   cls.on_day_of_month,
            INTERVAL:       cls.every_n_days,
        }
        if kind not in builders:
            raise ValueError(f"unknown schedule rule {kind!r}")
        return builders[kind](**params)

    # ── Evaluation ───────────────────────────────────────────────────────────

    def includes(self, day_index: int, rng: random.Random) -> bool:
        weekday = weekday_of(day_index)
        if self.kind == EVERY_DAY:
            return True
        if self.kind == WEEKDAY_RANDOM:
            if weekday in self.weekdays:
                return True
            # Draw only on optional weekdays
            if weekday in self.optional_weekdays:
                return rng.random() < self.probability
            return False
        if self.kind == WEEKDAY_SET:
            return weekday in self.weekdays
        if self.kind == DAY_OF_MONTH:
            return day_index == self.day_of_month
        return day_index % self.interval_days == 0


def products_scheduled_on(day_index: int, catalog, rng: random.Random) -> Tuple[str, ...]:
    """
    Names of the products fried on *day_index*, in catalog order.

    Each product appears at most once.  Randomised rules draw from *rng* on
    every call.
    """
    names = []
    for product in catalog:
        if product.name in names:
            continue
        if product.schedule.includes(day_index, rng):
            names.append(product.name)
    return tuple(names)


class Scheduler:
    """Remembers the schedule decided for each day so repeated queries agree."""

    def __init__(self) -> None:
        self._decided: Dict[int, Tuple[str, ...]] = {}

    def scheduled_on(self, day_index: int, catalog, rng: random.Random) -> Tuple[str, ...]:
        if day_index not in self._decided:
            self._decided[day_index] = products_scheduled_on(day_index, catalog, rng)
        return self._decided[day_index]

    def peek(self, day_index: int) -> Optional[Tuple[str, ...]]:
        """The decision for *day_index* if already taken, else ``None``."""
        return self._decided.get(day_index)

    def clear(self) -> None:
        self._decided.clear()
