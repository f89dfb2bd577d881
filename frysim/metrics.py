"""KPI computation over a controller's history and totals."""

from __future__ import annotations
import math
from typing import Dict

import numpy as np

from .config import FINANCIAL, SIM_DAYS
from .controller import SimulationController


def loss_pct(part: float, whole: float) -> float:
    """``part / whole`` as a percentage; 0 when *whole* is 0."""
    if not whole:
        return 0.0
    return part / whole * 100


def compute_kpis(controller: SimulationController) -> dict:
    k: dict = {}
    totals  = controller.totals
    history = controller.history
    profile = controller.profile
    days    = controller.current_day

    # ── Oil ───────────────────────────────────────────────────────────────────
    k["oil_used_l"]   = totals.oil_used_liters
    k["oil_lost_l"]   = totals.oil_lost_liters
    k["oil_loss_pct"] = loss_pct(totals.oil_lost_liters, totals.oil_used_liters)
    k["production_days"] = sum(1 for d in history if d.batches)

    # ── Product ───────────────────────────────────────────────────────────────
    batches = [b for d in history for b in d.batches]
    units   = sum(b.units for b in batches)
    k["units_fried"]        = units
    k["product_loss_units"] = totals.product_units_lost
    k["product_loss_pct"]   = loss_pct(totals.product_units_lost, units)
    k["total_batches"]      = len(batches)

    if batches:
        deviations = np.abs(np.array([b.temp_deviation_c for b in batches]))
        k["in_range_pct"]      = sum(1 for b in batches if b.in_range) / len(batches) * 100
        k["avg_temp_dev_c"]    = float(deviations.mean())
        k["max_temp_dev_c"]    = float(deviations.max())
    else:
        k["in_range_pct"]   = 0.0
        k["avg_temp_dev_c"] = 0.0
        k["max_temp_dev_c"] = 0.0

    k["batches_by_product"] = {}
    for name in controller.catalog.names():
        k["batches_by_product"][name] = sum(1 for b in batches if b.product_name == name)

    # ── Financial ─────────────────────────────────────────────────────────────
    k["revenue"]          = totals.revenue
    k["cost"]             = totals.cost
    k["cost_pct_revenue"] = loss_pct(totals.cost, totals.revenue)
    k["avg_daily_cost"]   = totals.cost / days if days else 0.0
    k["oil_cost"]         = totals.oil_lost_liters * FINANCIAL["oil_cost_per_liter"]
    k["product_cost"]     = totals.product_units_lost * FINANCIAL["product_unit_cost"]

    # ── Hardware (pass-through) ───────────────────────────────────────────────
    k["days_simulated"] = days
    k["efficiency_pct"] = profile.efficiency * 100
    k["has_filtration"] = profile.has_filtration
    k["capacity_l"]     = profile.capacity_liters

    return k


def compare_systems(kpis_by_key: Dict[str, dict],
                    current: str = "actual", proposed: str = "nuevo") -> dict:
    """
    Savings of *proposed* over *current*.

    ``*_saved`` fields are ``current - proposed`` (positive means the proposed
    fryer is better); ``*_reduction_pct`` are relative to the current fryer.

    ``monthly_roi_pct`` and ``payback_months`` weigh the monthly loss-cost
    saving against ``FINANCIAL["proposed_investment"]``; payback is ``inf``
    when the proposed fryer saves nothing.
    """
    cur, new = kpis_by_key[current], kpis_by_key[proposed]
    c: dict = {}
    for key, label in (
        ("oil_lost_l",         "oil_lost"),
        ("product_loss_units", "product_loss"),
        ("cost",               "cost"),
        ("avg_temp_dev_c",     "temp_dev"),
    ):
        saved = cur[key] - new[key]
        c[f"{label}_saved"]         = saved
        c[f"{label}_reduction_pct"] = loss_pct(saved, cur[key])
    c["in_range_gain_pct"]   = new["in_range_pct"] - cur["in_range_pct"]
    c["efficiency_gain_pct"] = new["efficiency_pct"] - cur["efficiency_pct"]

    # Investment payback, on savings scaled to a full month
    investment = FINANCIAL["proposed_investment"]
    monthly = (cur["avg_daily_cost"] - new["avg_daily_cost"]) * SIM_DAYS
    c["monthly_cost_saved"] = monthly
    c["monthly_roi_pct"]    = loss_pct(monthly, investment)
    c["payback_months"]     = investment / monthly if monthly > 0 else math.inf
    return c
