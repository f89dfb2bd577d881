#!/usr/bin/env python3
"""
FrySim — Salvia S.A. Deep-Fryer Replacement Simulator
======================================================

Run the current (ATFS-75) and proposed (Western Kitchen 40L) fryers through
the same 30-day production month, print per-system KPI tables and a
comparison, then save Matplotlib dashboards to ./reports/.

Usage
-----
    python main.py                  # both systems
    python main.py --system nuevo   # single system
    python main.py --seed 99        # different random seed
    python main.py --no-charts      # skip chart generation
    python main.py --live --slow    # real-time pacing, batch-by-batch
"""

import argparse
import time
from typing import Dict, Tuple

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from frysim.config import PROFILES, SIM_DAYS
from frysim.controller import SimulationController
from frysim.driver import run_month
from frysim.metrics import compare_systems, compute_kpis
from frysim.reports import (
    RICH_COLORS,
    console,
    plot_comparison_chart,
    plot_system_dashboard,
    print_banner,
    print_comparison_table,
    print_kpi_table,
)

REPORT_DIR = "reports"


# ─────────────────────────────────────────────────────────────────────────────
# Simulation runner
# ─────────────────────────────────────────────────────────────────────────────

def run_system(
    system_key: str,
    seed: int = 42,
    live: bool = False,
    slow: bool = False,
    progress: Progress | None = None,
    task_id=None,
) -> Tuple[SimulationController, dict]:
    """Run one full month on *system_key* and return the controller and its KPIs."""
    controller = SimulationController(system_key, seed=seed)
    label = f"{PROFILES[system_key]['name']:<22}"

    def on_update(ctrl: SimulationController, event: str) -> None:
        if progress is None or task_id is None:
            return
        if event == "day":
            progress.update(task_id, completed=ctrl.current_day)
        elif event == "batch" and ctrl.last_batch is not None:
            b = ctrl.last_batch
            progress.update(
                task_id,
                description=(f"{label} {b.batch.product_name:<16} "
                             f"{b.batch_number}/{b.total_batches} "
                             f"{b.batch.actual_temp_c:5.1f} °C"),
            )

    run_month(controller, slow=slow, realtime=live, on_update=on_update)
    if progress is not None and task_id is not None:
        progress.update(task_id, description=label)
    return controller, compute_kpis(controller)


# ─────────────────────────────────────────────────────────────────────────────
# Main
# ─────────────────────────────────────────────────────────────────────────────

def main() -> None:
    parser = argparse.ArgumentParser(description="Salvia S.A. — Fryer replacement simulation")
    parser.add_argument("--system", choices=list(PROFILES.keys()),
                        default=None, help="Run a single fryer system (default: both)")
    parser.add_argument("--seed",      type=int, default=42,
                        help="Random seed for reproducibility (default: 42)")
    parser.add_argument("--no-charts", action="store_true",
                        help="Skip Matplotlib chart generation")
    parser.add_argument("--live",      action="store_true",
                        help="Pace the run in real time (one day per 0.5 s)")
    parser.add_argument("--slow",      action="store_true",
                        help="Reveal each day batch by batch")
    args = parser.parse_args()

    print_banner()

    system_keys = [args.system] if args.system else list(PROFILES.keys())
    results: Dict[str, Tuple[SimulationController, dict]] = {}

    # ── Run simulations with a progress bar ──────────────────────────────────
    console.print("[bold]Running simulations…[/bold]\n")
    wall_start = time.perf_counter()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(bar_width=35),
        MofNCompleteColumn(),
        TextColumn("days"),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    ) as progress:
        tasks = {}
        for key in system_keys:
            colour = RICH_COLORS.get(key, "white")
            tasks[key] = progress.add_task(
                f"[{colour}]{PROFILES[key]['name']:<22}[/{colour}]",
                total=SIM_DAYS,
            )

        for key in system_keys:
            results[key] = run_system(
                key, seed=args.seed, live=args.live, slow=args.slow,
                progress=progress, task_id=tasks[key],
            )

    wall_elapsed = time.perf_counter() - wall_start
    console.print(
        f"\n[dim]All simulations finished in {wall_elapsed:.1f}s "
        f"(simulated {SIM_DAYS * len(system_keys)} production days)[/dim]\n"
    )

    # ── Print per-system KPI tables ──────────────────────────────────────────
    for key in system_keys:
        _, kpis = results[key]
        print_kpi_table(key, kpis)

    # ── Print cross-system comparison ────────────────────────────────────────
    savings = {}
    if "actual" in results and "nuevo" in results:
        savings = compare_systems({k: v[1] for k, v in results.items()})
    if len(results) > 1:
        print_comparison_table(results, savings)

    # ── Generate Matplotlib dashboards ───────────────────────────────────────
    if not args.no_charts:
        console.print("[bold]Generating charts…[/bold]")
        for key, (controller, kpis) in results.items():
            path = plot_system_dashboard(controller, kpis, key, REPORT_DIR)
            if path:
                console.print(f"  [green]✓[/green]  {path}")

        if len(results) > 1:
            path = plot_comparison_chart(results, REPORT_DIR)
            if path:
                console.print(f"  [green]✓[/green]  {path}")

        console.print()


if __name__ == "__main__":
    main()
