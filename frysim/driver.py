"""
SimPy processes that pace a :class:`SimulationController`.

The controller has no notion of time; these processes play the role of the
interactive screen's timer.  With a plain ``simpy.Environment`` a whole month
runs instantly; with ``simpy.rt.RealtimeEnvironment`` each simulated second
is one wall-clock second, so ``TICK_INTERVAL_S`` gives the live cadence.
"""

from __future__ import annotations

from typing import Callable, Optional

import simpy
import simpy.rt

from .config import BATCH_REVEAL_S, DAY_HOLD_S, TICK_INTERVAL_S
from .controller import SimState, SimulationController
from .log import get_logger

log = get_logger(__name__)


def ticker(env: simpy.Environment, controller: SimulationController,
           interval: float = TICK_INTERVAL_S):
    """One ``tick()`` per *interval* while the controller is running."""
    while controller.is_running:
        yield env.timeout(interval)
        # Paused or reset while waiting: stop scheduling days
        if not controller.is_running:
            break
        controller.tick()


def slow_reveal(env: simpy.Environment, controller: SimulationController,
                reveal_s: float = BATCH_REVEAL_S, hold_s: float = DAY_HOLD_S):
    """
    Play each day back one batch at a time.

    The day is computed up front and always committed in full, even if the
    controller is paused while its batches are being revealed.
    """
    while controller.is_running:
        day = controller.begin_day()
        if day is None:
            break
        for i in range(day.total_batches):
            controller.reveal_batch(i)
            yield env.timeout(reveal_s)
            if controller.pending_day is not day:
                # Reset mid-day discards the pending record
                return
        controller.commit_day()
        yield env.timeout(hold_s)


def run_month(
    controller: SimulationController,
    slow: bool = False,
    realtime: bool = False,
    on_update: Optional[Callable[[SimulationController, str], None]] = None,
    interval: float = TICK_INTERVAL_S,
) -> SimulationController:
    """
    Drive *controller* from its current day to the end of the horizon.

    *on_update* is subscribed for the duration of the run and receives every
    controller event (use it to refresh a display).
    """
    if realtime:
        env = simpy.rt.RealtimeEnvironment(factor=1.0, strict=False)
    else:
        env = simpy.Environment()

    unsubscribe = controller.subscribe(on_update) if on_update else None
    try:
        if not controller.start() and controller.state is not SimState.RUNNING:
            log.warning("controller in state %s; nothing to run", controller.state.value)
            return controller
        proc = slow_reveal(env, controller) if slow else ticker(env, controller, interval)
        env.process(proc)
        env.run()
    finally:
        if unsubscribe:
            unsubscribe()
    return controller
