"""Editable product catalog."""

from __future__ import annotations

import math
from typing import Iterable, Iterator, List, Optional

from .config import PRODUCTS
from .errors import UnknownFieldError
from .log import get_logger
from .models import Product
from .scheduler import ScheduleRule

log = get_logger(__name__)

EDITABLE_FIELDS = ("target_temp_c", "cycle_time_s", "units_per_batch", "batches_per_day")


def parse_number(raw) -> float:
    """
    Lenient numeric parse used for form input.

    Anything that is not a finite number becomes ``0.0``; never raises.
    """
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def batch_count(product: Product) -> int:
    """Number of batches a product runs on a day it is scheduled (0 if none)."""
    return max(0, math.ceil(product.batches_per_day))


class ProductCatalog:
    """
    Fixed-size, ordered list of products.

    Insertion order is preserved and drives display order and the order in
    which the scheduler evaluates products.  Products cannot be added or
    removed after construction; only their numeric fields can be edited.
    """

    def __init__(self, products: Iterable[Product]) -> None:
        self._products: List[Product] = list(products)

    def list(self) -> List[Product]:
        return list(self._products)

    def names(self) -> List[str]:
        return [p.name for p in self._products]

    def find(self, name: str) -> Optional[Product]:
        for p in self._products:
            if p.name == name:
                return p
        return None

    def update_field(self, index: int, field: str, raw_value) -> float:
        """Parse *raw_value* and store it on product *index*; returns the stored value."""
        if field not in EDITABLE_FIELDS:
            raise UnknownFieldError(field)
        product = self._products[index]
        value = parse_number(raw_value)
        setattr(product, field, value)
        log.debug("catalog[%d] %s.%s = %r (raw %r)", index, product.name, field, value, raw_value)
        return value

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def __getitem__(self, index: int) -> Product:
        return self._products[index]


def default_catalog() -> ProductCatalog:
    """A fresh catalog holding the configured products."""
    return ProductCatalog(
        Product(
            name            = cfg["name"],
            target_temp_c   = cfg["target_temp_c"],
            cycle_time_s    = cfg["cycle_time_s"],
            units_per_batch = cfg["units_per_batch"],
            batches_per_day = cfg["batches_per_day"],
            schedule        = ScheduleRule.from_config(cfg["schedule"]),
        )
        for cfg in PRODUCTS
    )
