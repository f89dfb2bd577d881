"""Registry of the fixed fryer hardware profiles."""

from __future__ import annotations
from typing import Dict, Tuple

from .config import PROFILES
from .errors import UnknownProfileError
from .models import SystemProfile


def _build(cfg: dict) -> SystemProfile:
    return SystemProfile(
        name              = cfg["name"],
        capacity_liters   = cfg["capacity_l"],
        temp_variance_c   = cfg["temp_variance_c"],
        oil_loss_rate     = cfg["oil_loss_rate"],
        product_loss_rate = cfg["product_loss_rate"],
        efficiency        = cfg["efficiency"],
        has_filtration    = cfg["has_filtration"],
    )


_REGISTRY: Dict[str, SystemProfile] = {key: _build(cfg) for key, cfg in PROFILES.items()}


def get_profile(key: str) -> SystemProfile:
    try:
        return _REGISTRY[key]
    except KeyError:
        raise UnknownProfileError(key) from None


def profile_keys() -> Tuple[str, ...]:
    return tuple(_REGISTRY)
