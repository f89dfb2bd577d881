"""
SimulationController — owns the running state of one 30-day run.

State machine::

    IDLE ──start──▶ RUNNING ──pause──▶ PAUSED ──start──▶ RUNNING
                       │
                       └─tick (day == SIM_DAYS)──▶ COMPLETED
    any state ──reset / select_profile──▶ IDLE

The controller has no clock.  Whatever drives it (a SimPy process, a UI
timer, a test loop) calls :meth:`tick` at its own cadence while
:attr:`is_running` is true.  A day can also be played back batch by batch
with :meth:`begin_day`, :meth:`reveal_batch` and :meth:`commit_day`; the
day is computed in full by ``begin_day`` and committed in full by
``commit_day`` regardless of pauses in between.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .catalog import ProductCatalog, default_catalog
from .config import DEFAULT_PROFILE, SIM_DAYS
from .fryer import run_day
from .log import get_logger
from .models import BatchProgress, DayRecord, RunningTotals, SystemProfile
from .profiles import get_profile
from .scheduler import Scheduler

log = get_logger(__name__)

Listener = Callable[["SimulationController", str], None]


class SimState(str, Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    PAUSED    = "paused"
    COMPLETED = "completed"


class SimulationController:
    """
    Day-by-day stepper over a fixed horizon.

    Usage::

        ctrl = SimulationController("nuevo", seed=7)
        ctrl.start()
        while ctrl.is_running:
            ctrl.tick()
        ctrl.totals.cost
    """

    def __init__(
        self,
        profile_key: str = DEFAULT_PROFILE,
        catalog: Optional[ProductCatalog] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        horizon: int = SIM_DAYS,
    ) -> None:
        self._profile_key = profile_key
        self._profile     = get_profile(profile_key)
        self.catalog      = catalog if catalog is not None else default_catalog()
        self.rng          = rng if rng is not None else random.Random(seed)
        self.horizon      = horizon

        self._scheduler = Scheduler()
        self._listeners: List[Listener] = []

        self._state   = SimState.IDLE
        self._day     = 0
        self._history: List[DayRecord] = []
        self._totals  = RunningTotals()

        self._pending:   Optional[DayRecord] = None
        self._last_batch: Optional[BatchProgress] = None
        self._processed: List[str] = []

    # =========================================================================
    # Read-only views
    # =========================================================================

    @property
    def state(self) -> SimState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is SimState.RUNNING

    @property
    def current_day(self) -> int:
        return self._day

    @property
    def history(self) -> Tuple[DayRecord, ...]:
        return tuple(self._history)

    @property
    def totals(self) -> RunningTotals:
        # Copy so callers cannot break the totals/history invariant
        return RunningTotals(**vars(self._totals))

    @property
    def last_batch(self) -> Optional[BatchProgress]:
        return self._last_batch

    @property
    def profile(self) -> SystemProfile:
        return self._profile

    @property
    def profile_key(self) -> str:
        return self._profile_key

    @property
    def pending_day(self) -> Optional[DayRecord]:
        return self._pending

    @property
    def scheduled_today(self) -> Tuple[str, ...]:
        """Products scheduled on the day being shown (pending, else last committed)."""
        day = self._pending.day_index if self._pending else self._day
        if day == 0:
            return ()
        return self._scheduler.peek(day) or ()

    @property
    def processed_today(self) -> Tuple[str, ...]:
        return tuple(self._processed)

    # =========================================================================
    # Listeners
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener(controller, event)* on every state change.  Returns an unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(self, event)

    # =========================================================================
    # Transitions
    # =========================================================================

    def start(self) -> bool:
        if self._state not in (SimState.IDLE, SimState.PAUSED) or self._day >= self.horizon:
            return False
        self._state = SimState.RUNNING
        log.info("run started at day %d on %s", self._day, self._profile.name)
        self._notify("start")
        return True

    def pause(self) -> bool:
        if self._state is not SimState.RUNNING:
            return False
        self._state = SimState.PAUSED
        log.info("run paused at day %d", self._day)
        self._notify("pause")
        return True

    def reset(self) -> None:
        self._state = SimState.IDLE
        self._day = 0
        self._history.clear()
        self._totals.reset()
        self._scheduler.clear()
        self._pending = None
        self._last_batch = None
        self._processed = []
        log.info("run reset")
        self._notify("reset")

    def select_profile(self, key: str) -> None:
        """Switch the active fryer; the run starts over."""
        self._profile = get_profile(key)
        self._profile_key = key
        log.info("profile switched to %s", self._profile.name)
        self.reset()

    # =========================================================================
    # Stepping
    # =========================================================================

    def tick(self) -> Optional[DayRecord]:
        """Simulate and commit the next day.  No-op unless running."""
        if not self.is_running:
            return None
        if self._pending is None and self.begin_day() is None:
            return None
        return self.commit_day()

    def begin_day(self) -> Optional[DayRecord]:
        """Compute the next day without committing it.  Returns the pending record."""
        if self._pending is not None:
            return self._pending
        if self._day >= self.horizon:
            return None

        day_index = self._day + 1
        scheduled = self._scheduler.scheduled_on(day_index, self.catalog, self.rng)
        self._pending = run_day(day_index, self.catalog, self._profile, self.rng, scheduled)
        self._processed = []
        log.debug("day %d planned: %s (%d batches)",
                  day_index, ", ".join(scheduled) or "-", self._pending.total_batches)
        self._notify("begin_day")
        return self._pending

    def reveal_batch(self, index: int) -> BatchProgress:
        """Expose batch *index* of the pending day as the batch in progress."""
        if self._pending is None:
            raise RuntimeError("no day in progress")
        batch = self._pending.batches[index]
        self._last_batch = BatchProgress(batch, index + 1, self._pending.total_batches)
        if batch.product_name not in self._processed:
            self._processed.append(batch.product_name)
        self._notify("batch")
        return self._last_batch

    def commit_day(self) -> Optional[DayRecord]:
        """Append the pending day to the history and fold it into the totals."""
        day = self._pending
        if day is None:
            return None
        self._pending = None

        self._history.append(day)
        self._totals.add(day)
        self._day = day.day_index
        self._processed = list(day.products)
        if day.batches:
            self._last_batch = BatchProgress(day.batches[-1], day.total_batches, day.total_batches)

        log.debug("day %d committed: oil lost %.2f L, cost %.0f",
                  day.day_index, day.oil_lost_liters, day.cost)

        if self._day >= self.horizon:
            self._state = SimState.COMPLETED
            log.info("run completed after %d days", self._day)
        self._notify("day")
        return day

    def run_to_completion(self) -> Tuple[DayRecord, ...]:
        """Start (if needed) and tick until the horizon is reached."""
        self.start()
        while self.is_running:
            self.tick()
        return self.history
