# Salvia S.A. — Deep-fryer replacement what-if simulation
# Temperatures in °C, oil in litres, money in CLP, time in seconds.

# ── Simulation horizon ────────────────────────────────────────────────────────
SIM_DAYS = 30

# ── Plant metadata ────────────────────────────────────────────────────────────
PLANT_NAME     = "Salvia S.A."
PLANT_LOCATION = "Santiago, Chile"
CURRENCY       = "CLP"

# ── Fryer systems ─────────────────────────────────────────────────────────────
# capacity_l         : oil capacity, refilled once per production day
# temp_variance_c    : max symmetric deviation from the product target temperature
# oil_loss_rate      : fraction of capacity lost per month (pro-rated /30 per batch)
# product_loss_rate  : fraction of batch units spoiled at on-target temperature
# efficiency         : reported operating efficiency (display only)
# has_filtration     : built-in oil filtration (display only)
PROFILES = {
    "actual": {
        "name":              "ATFS-75 (Gas)",
        "label":             "Current",
        "capacity_l":        34,
        "temp_variance_c":   15,
        "oil_loss_rate":     0.30,
        "product_loss_rate": 0.008,
        "efficiency":        0.65,
        "has_filtration":    False,
        "color":             "#E63946",
    },
    "nuevo": {
        "name":              "Western Kitchen 40L",
        "label":             "Proposed",
        "capacity_l":        40,
        "temp_variance_c":   2,
        "oil_loss_rate":     0.15,
        "product_loss_rate": 0.004,
        "efficiency":        0.82,
        "has_filtration":    True,
        "color":             "#2EC4B6",
    },
}
DEFAULT_PROFILE = "actual"

# ── Product catalog ───────────────────────────────────────────────────────────
# schedule: (kind, params) — see frysim.scheduler.ScheduleRule.from_config
PRODUCTS = [
    {
        "name":            "Empanaditas",
        "cycle_time_s":    180,
        "target_temp_c":   180,
        "units_per_batch": 5000,
        "batches_per_day": 3,
        "schedule":        ("every-day", {}),
        "color":           "#3b82f6",
    },
    {
        "name":            "Sopaipillas",
        "cycle_time_s":    120,
        "target_temp_c":   175,
        "units_per_batch": 3000,
        "batches_per_day": 2,
        "schedule":        ("weekday-pattern", {}),
        "color":           "#10b981",
    },
    {
        "name":            "Camarones",
        "cycle_time_s":    240,
        "target_temp_c":   185,
        "units_per_batch": 2000,
        "batches_per_day": 2,
        "schedule":        ("weekday-set", {"weekdays": (2, 4, 6)}),
        "color":           "#f59e0b",
    },
    {
        "name":            "Bolitas de Carne",
        "cycle_time_s":    200,
        "target_temp_c":   182,
        "units_per_batch": 1500,
        "batches_per_day": 2,
        "schedule":        ("interval", {"interval_days": 14}),
        "color":           "#ef4444",
    },
]

# ── Scheduling rules ──────────────────────────────────────────────────────────
# weekday = day_index % 7
WEEKDAY_PATTERN = {
    "core_weekdays":     (1, 3, 5),   # always produced
    "optional_weekdays": (2, 4),      # produced with probability below
    "probability":       0.3,
}
DEFAULT_WEEKDAY_SET   = (2, 4, 6)
DEFAULT_INTERVAL_DAYS = 14
DEFAULT_DAY_OF_MONTH  = 15

# ── Process quality ───────────────────────────────────────────────────────────
TEMP_TOLERANCE_C       = 5.0   # |actual - target| below this counts as in range
OFF_TARGET_LOSS_FACTOR = 1.5   # spoilage multiplier when out of range

# ── Financial parameters ──────────────────────────────────────────────────────
MONTHLY_REVENUE = 21_466_428          # fixed, schedule independent
FINANCIAL = {
    "oil_cost_per_liter": 1_750,
    "product_unit_cost":    100,
    "proposed_investment": 2_500_000,   # purchase + install of the proposed fryer
}

# ── Pacing for the interactive driver (seconds of wall clock) ────────────────
TICK_INTERVAL_S = 0.5    # one simulated day per tick
BATCH_REVEAL_S  = 0.2    # slow mode: pause after each revealed batch
DAY_HOLD_S      = 0.25   # slow mode: hold the last batch before the next day
