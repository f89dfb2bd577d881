import os

import numpy as np
import pytest

from frysim import reports
from frysim.controller import SimulationController
from frysim.metrics import compare_systems, compute_kpis


def _run(key, days=5):
    ctrl = SimulationController(key, seed=2, horizon=days)
    ctrl.run_to_completion()
    return ctrl, compute_kpis(ctrl)


def test_dashboard_written(tmp_path):
    ctrl, kpis = _run("actual")
    path = reports.plot_system_dashboard(ctrl, kpis, "actual", str(tmp_path))
    assert os.path.exists(path)
    assert path.endswith("dashboard_actual.png")


def test_dashboard_skipped_without_history(tmp_path):
    ctrl = SimulationController("actual")
    assert reports.plot_system_dashboard(ctrl, compute_kpis(ctrl), "actual", str(tmp_path)) == ""


def test_comparison_chart_and_tables(tmp_path):
    results = {k: _run(k) for k in ("actual", "nuevo")}
    path = reports.plot_comparison_chart(results, str(tmp_path))
    assert os.path.exists(path)

    with reports.console.capture() as cap:
        reports.print_banner()
        for key, (_, kpis) in results.items():
            reports.print_kpi_table(key, kpis)
        reports.print_comparison_table(results, compare_systems({k: v[1] for k, v in results.items()}))
    out = cap.get()
    assert "Western Kitchen 40L" in out
    assert "Oil lost" in out


def test_cost_evolution_series():
    ctrl, _ = _run("actual", days=4)
    days, daily, cumulative = reports.cost_evolution(ctrl.history)
    assert days == [1, 2, 3, 4]
    assert list(daily) == pytest.approx([d.cost / 1e3 for d in ctrl.history])
    assert cumulative[-1] == pytest.approx(ctrl.totals.cost / 1e3)


def test_dashboard_cost_panel_plots_daily_and_cumulative(tmp_path, monkeypatch):
    figures = []
    close = reports.plt.close
    monkeypatch.setattr(reports.plt, "close", figures.append)
    ctrl, kpis = _run("nuevo", days=6)
    reports.plot_system_dashboard(ctrl, kpis, "nuevo", str(tmp_path))

    ax = figures[0].axes[3]
    assert ax.get_title() == "Loss Cost Evolution"
    lines = {line.get_label(): line for line in ax.get_lines()}
    assert set(lines) == {"Daily cost", "Cumulative cost"}
    daily = [d.cost / 1e3 for d in ctrl.history]
    assert list(lines["Daily cost"].get_xdata()) == [1, 2, 3, 4, 5, 6]
    assert list(lines["Daily cost"].get_ydata()) == pytest.approx(daily)
    assert list(lines["Cumulative cost"].get_ydata()) == pytest.approx(list(np.cumsum(daily)))
    for fig in figures:
        close(fig)


def test_comparison_prints_roi_and_payback():
    results = {k: _run(k, days=30) for k in ("actual", "nuevo")}
    savings = compare_systems({k: v[1] for k, v in results.items()})
    with reports.console.capture() as cap:
        reports.print_comparison_table(results, savings)
    out = cap.get()
    assert "monthly ROI" in out
    assert f"{savings['payback_months']:.1f} months" in out
