"""
Rich console output and Matplotlib dashboard generation.
"""

from __future__ import annotations

import math
import os
from typing import Dict, List, Tuple

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import (
    CURRENCY, FINANCIAL, PLANT_LOCATION, PLANT_NAME, PRODUCTS, PROFILES,
    SIM_DAYS, TEMP_TOLERANCE_C,
)

console = Console()

# Colour palette
PRODUCT_COLORS = {p["name"]: p["color"] for p in PRODUCTS}
SYSTEM_COLORS  = {key: cfg["color"] for key, cfg in PROFILES.items()}
RICH_COLORS    = {"actual": "red", "nuevo": "green"}


# ─────────────────────────────────────────────────────────────────────────────
# Banner
# ─────────────────────────────────────────────────────────────────────────────

def print_banner() -> None:
    lines = [
        f"[bold white]{PLANT_NAME}[/bold white]",
        f"[dim]{PLANT_LOCATION}  ·  frying line[/dim]",
        "",
        "[bold cyan]Deep-Fryer Replacement What-If Simulation[/bold cyan]",
        f"[dim]{PROFILES['actual']['name']}  vs  {PROFILES['nuevo']['name']}"
        f"  ·  {SIM_DAYS}-day horizon[/dim]",
    ]
    console.print(Panel("\n".join(lines), style="bold blue", expand=False))
    console.print()


# ─────────────────────────────────────────────────────────────────────────────
# Per-system KPI summary
# ─────────────────────────────────────────────────────────────────────────────

def print_kpi_table(system_key: str, kpis: dict) -> None:
    cfg = PROFILES[system_key]
    colour = RICH_COLORS.get(system_key, "white")
    console.rule(f"[bold {colour}]{cfg['label']}[/bold {colour}]  —  {cfg['name']}")

    t = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold magenta")
    t.add_column("KPI",        style="cyan",  min_width=30)
    t.add_column("Value",      style="white", justify="right", min_width=16)
    t.add_column("Assessment", style="dim",   min_width=20)

    def row(label, value, assessment=""):
        t.add_row(label, value, assessment)

    def pct_style(v, good_below):
        colour = "green" if v <= good_below else ("yellow" if v <= good_below * 2 else "red")
        return f"[{colour}]{v:.1f}%[/{colour}]"

    # Oil
    row("── Oil ─────────────────────────", "", "")
    row("  Oil used (L)",
        f"{kpis['oil_used_l']:>12,.1f}",
        f"{kpis['production_days']} production days × {kpis['capacity_l']:.0f} L")
    row("  Oil lost (L)",
        f"{kpis['oil_lost_l']:>12,.1f}", "")
    row("  Oil loss rate",
        pct_style(kpis["oil_loss_pct"], 0.5), "of oil used")

    # Product
    row("── Product ─────────────────────", "", "")
    row("  Batches fried",
        f"{kpis['total_batches']:>12,d}", "")
    row("  Units fried",
        f"{kpis['units_fried']:>12,.0f}", "")
    row("  Product loss (units)",
        f"{kpis['product_loss_units']:>12,.0f}",
        pct_style(kpis["product_loss_pct"], 0.5))
    row("  Batches within ±%.0f °C" % TEMP_TOLERANCE_C,
        f"{kpis['in_range_pct']:>11.1f}%", "")
    row("  Avg temperature deviation",
        f"{kpis['avg_temp_dev_c']:>10.1f} °C",
        f"max {kpis['max_temp_dev_c']:.1f} °C")

    # Hardware
    row("── Hardware ────────────────────", "", "")
    row("  Efficiency",
        f"{kpis['efficiency_pct']:>11.0f}%", "")
    row("  Oil filtration",
        f"{'yes' if kpis['has_filtration'] else 'no':>12}", "")

    # Financial
    row(f"── Financial ({kpis['days_simulated']}-day) ───────────", "", "")
    row("  Revenue",
        f"${kpis['revenue']:>14,.0f}", CURRENCY)
    row("  Oil loss cost",
        f"${kpis['oil_cost']:>14,.0f}",
        f"{FINANCIAL['oil_cost_per_liter']:,} {CURRENCY}/L")
    row("  Product loss cost",
        f"${kpis['product_cost']:>14,.0f}",
        f"{FINANCIAL['product_unit_cost']:,} {CURRENCY}/unit")
    row("  Total loss cost",
        f"${kpis['cost']:>14,.0f}",
        f"{kpis['cost_pct_revenue']:.2f}% of revenue")
    row("  Avg daily cost",
        f"${kpis['avg_daily_cost']:>14,.0f}", "")

    console.print(t)
    console.print()


# ─────────────────────────────────────────────────────────────────────────────
# Cross-system comparison table
# ─────────────────────────────────────────────────────────────────────────────

def print_comparison_table(results: Dict[str, Tuple], savings: dict) -> None:
    console.rule(f"[bold yellow]System Comparison ({SIM_DAYS}-day summary)[/bold yellow]")

    t = Table(box=box.DOUBLE_EDGE, show_header=True, header_style="bold yellow")
    t.add_column("Metric", style="cyan", min_width=28)

    keys = list(results.keys())
    for key in keys:
        colour = RICH_COLORS.get(key, "white")
        t.add_column(
            Text(PROFILES[key]["name"], style=f"bold {colour}"),
            justify="right", min_width=16,
        )

    kpis_list = [results[k][1] for k in keys]

    rows = [
        ("Oil used (L)",            "oil_used_l",         "f1"),
        ("Oil lost (L)",            "oil_lost_l",         "f1"),
        ("Oil loss rate",           "oil_loss_pct",       "pct"),
        ("Product loss (units)",    "product_loss_units", ","),
        ("Batches in range",        "in_range_pct",       "pct"),
        ("Avg temp deviation (°C)", "avg_temp_dev_c",     "f1"),
        ("Efficiency",              "efficiency_pct",     "pct"),
        ("Loss cost ($)",           "cost",               ","),
        ("Avg daily cost ($)",      "avg_daily_cost",     ","),
    ]

    for label, key, fmt in rows:
        vals = []
        for k in kpis_list:
            v = k.get(key, 0)
            if fmt == "pct":
                vals.append(f"{v:.1f}%")
            elif fmt == "f1":
                vals.append(f"{v:.1f}")
            else:
                vals.append(f"{v:,.0f}")
        t.add_row(label, *vals)

    console.print(t)

    if savings:
        saved = savings["cost_saved"]
        colour = "green" if saved >= 0 else "red"
        console.print(
            f"  Loss cost saved by switching: [{colour}]${saved:,.0f}[/{colour}] "
            f"([{colour}]{savings['cost_reduction_pct']:.1f}%[/{colour}]),  "
            f"oil loss down {savings['oil_lost_reduction_pct']:.1f}%,  "
            f"product loss down {savings['product_loss_reduction_pct']:.1f}%"
        )
        payback = savings["payback_months"]
        console.print(
            f"  Investment ${FINANCIAL['proposed_investment']:,.0f}:  "
            f"monthly ROI [{colour}]{savings['monthly_roi_pct']:.1f}%[/{colour}],  "
            f"payback {'never' if math.isinf(payback) else f'{payback:.1f} months'}"
        )
    console.print()


# ─────────────────────────────────────────────────────────────────────────────
# Matplotlib dashboard
# ─────────────────────────────────────────────────────────────────────────────

def _style_ax(ax, title):
    ax.set_title(title, fontsize=9, fontweight="bold", pad=6)
    ax.tick_params(labelsize=7)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.grid(axis="y", alpha=0.3)


def cost_evolution(history) -> Tuple[List[int], np.ndarray, np.ndarray]:
    """Day indices, daily loss cost and cumulative loss cost (thousands)."""
    days  = [d.day_index for d in history]
    daily = np.array([d.cost for d in history], dtype=float) / 1e3
    return days, daily, np.cumsum(daily)


def plot_system_dashboard(controller, kpis: dict, system_key: str, out_dir: str) -> str:
    """
    Generate a 2×2 matplotlib dashboard for a single fryer system.
    Returns the saved file path.
    """
    history = controller.history
    if not history:
        return ""

    days   = [d.day_index for d in history]
    colour = SYSTEM_COLORS.get(system_key, "#2E86AB")
    names  = controller.catalog.names()

    fig, axes = plt.subplots(2, 2, figsize=(12, 8))
    fig.suptitle(
        f"{PLANT_NAME}  ·  {PROFILES[system_key]['name']}\n"
        f"{kpis['days_simulated']} days  ·  loss cost ${kpis['cost']:,.0f}",
        fontsize=11, fontweight="bold", y=1.01,
    )
    plt.subplots_adjust(hspace=0.45, wspace=0.3)

    # ── (0,0) Daily oil lost ───────────────────────────────────────────────
    ax = axes[0][0]
    ax.bar(days, [d.oil_lost_liters for d in history], color=colour, alpha=0.85, width=0.8)
    ax.set_ylabel("Litres / day", fontsize=8)
    ax.set_xlabel("Day", fontsize=8)
    _style_ax(ax, "Daily Oil Lost")

    # ── (0,1) Daily product loss by product ────────────────────────────────
    ax = axes[0][1]
    bottom = np.zeros(len(days))
    for name in names:
        vals = np.array([
            sum(b.product_units_lost for b in d.batches if b.product_name == name)
            for d in history
        ])
        ax.bar(days, vals, bottom=bottom, color=PRODUCT_COLORS.get(name),
               label=name, alpha=0.85, width=0.8)
        bottom += vals
    ax.set_ylabel("Units / day", fontsize=8)
    ax.set_xlabel("Day", fontsize=8)
    ax.legend(fontsize=6, loc="upper right")
    _style_ax(ax, "Daily Product Loss by Product")

    # ── (1,0) Batch temperature deviation ──────────────────────────────────
    ax = axes[1][0]
    for name in names:
        pts = [(d.day_index, b.temp_deviation_c)
               for d in history for b in d.batches if b.product_name == name]
        if pts:
            xs, ys = zip(*pts)
            ax.scatter(xs, ys, s=8, color=PRODUCT_COLORS.get(name), label=name, alpha=0.7)
    ax.axhspan(-TEMP_TOLERANCE_C, TEMP_TOLERANCE_C, color="green", alpha=0.08,
               label=f"±{TEMP_TOLERANCE_C:.0f} °C")
    ax.set_ylabel("Actual − target (°C)", fontsize=8)
    ax.set_xlabel("Day", fontsize=8)
    ax.legend(fontsize=6, loc="upper right")
    _style_ax(ax, "Batch Temperature Deviation")

    # ── (1,1) Daily vs cumulative loss cost ────────────────────────────────
    ax = axes[1][1]
    _, daily_k, cum_k = cost_evolution(history)
    ax.plot(days, daily_k, color=colour, linewidth=1.2, marker="o", markersize=2,
            label="Daily cost")
    ax.plot(days, cum_k, color="#1D3557", linewidth=1.6, label="Cumulative cost")
    ax.set_ylabel(f"{CURRENCY} thousands", fontsize=8)
    ax.set_xlabel("Day", fontsize=8)
    ax.legend(fontsize=6)
    _style_ax(ax, "Loss Cost Evolution")

    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, f"dashboard_{system_key}.png")
    fig.savefig(path, dpi=130, bbox_inches="tight")
    plt.close(fig)
    return path


def plot_comparison_chart(results: Dict[str, Tuple], out_dir: str) -> str:
    """
    Side-by-side bar chart comparing the fryer systems on key KPIs.
    Returns the saved file path.
    """
    keys   = list(results.keys())
    labels = [PROFILES[k]["name"] for k in keys]
    colors = [SYSTEM_COLORS[k] for k in keys]

    metrics_to_compare = [
        ("oil_lost_l",         "Oil Lost\n(L)"),
        ("oil_loss_pct",       "Oil Loss Rate\n(%)"),
        ("product_loss_units", "Product Loss\n(units)"),
        ("avg_temp_dev_c",     "Avg Temp Deviation\n(°C)"),
        ("efficiency_pct",     "Efficiency\n(%)"),
        ("cost",               f"Loss Cost\n({CURRENCY})"),
    ]

    fig, axes = plt.subplots(2, 3, figsize=(13, 7))
    fig.suptitle(
        f"{PLANT_NAME}  ·  {SIM_DAYS}-Day Fryer Comparison",
        fontsize=12, fontweight="bold",
    )
    plt.subplots_adjust(hspace=0.55, wspace=0.40)

    for idx, (key, title) in enumerate(metrics_to_compare):
        ax   = axes[idx // 3][idx % 3]
        vals = [results[k][1].get(key, 0) for k in keys]
        bars = ax.bar(labels, vals, color=colors, alpha=0.85, edgecolor="white")

        for bar, v in zip(bars, vals):
            fmt = f"{v:,.0f}" if abs(v) >= 100 else f"{v:.1f}"
            ax.text(
                bar.get_x() + bar.get_width() / 2,
                bar.get_height() * 1.01,
                fmt, ha="center", va="bottom", fontsize=7,
            )

        ax.set_xticks(range(len(labels)))
        ax.set_xticklabels(labels, fontsize=7, rotation=10, ha="right")
        _style_ax(ax, title)

    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, "fryer_comparison.png")
    fig.savefig(path, dpi=130, bbox_inches="tight")
    plt.close(fig)
    return path
