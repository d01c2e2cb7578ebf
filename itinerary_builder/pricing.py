"""Derived pricing for the costing step of the itinerary form.

The reconciler keeps ``total_pax`` and ``total_cost`` consistent with the
counts and per-head prices an agent types in. Prices are free text ("5,000/-",
"Rs. 2000") so only their digits are significant. A manual ``total_cost``
such as "Price on Request" survives whenever the computed total is zero.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Union

from .config import get_settings
from .models import CostInputs


logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"[^0-9]")

Number = Union[int, float]


@dataclass
class PricingUpdate:
    total_pax: Number
    raw_total: Number
    total_cost: str


def parse_price(value: Any) -> int:
    """Extract the digits of a price string as an integer; anything else is 0."""

    if not value or not isinstance(value, str):
        return 0
    digits = _NON_DIGITS.sub("", value)
    if not digits:
        return 0
    return int(digits)


def to_count(value: Any) -> Number:
    """Coerce a form count to a number, treating blanks and junk as 0."""

    if value is None or isinstance(value, bool):
        return int(bool(value))
    if isinstance(value, (int, float)):
        number = value
    else:
        text = str(value).strip()
        if not text:
            return 0
        try:
            number = float(text)
        except ValueError:
            return 0
    if number != number or number in (float("inf"), float("-inf")):
        return 0
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def _group_digits(digits: str, locale: str) -> str:
    if locale.lower() == "en-in" and len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        return ",".join(pairs + [tail])
    return f"{int(digits):,}"


def format_amount(amount: Number, locale: Optional[str] = None, suffix: Optional[str] = None) -> str:
    """Format ``amount`` with the locale's thousands grouping and append ``suffix``.

    ``en-IN`` groups the last three digits and then pairs (``12,34,567``);
    other locales group in threes. Fractions keep up to three digits.
    """

    settings = get_settings()
    locale = locale or settings.price_locale
    suffix = settings.price_suffix if suffix is None else suffix

    sign = "-" if amount < 0 else ""
    magnitude = abs(amount)
    fraction = ""
    if isinstance(magnitude, float) and not magnitude.is_integer():
        text = f"{magnitude:.3f}".rstrip("0").rstrip(".")
        whole, _, fraction = text.partition(".")
    else:
        whole = str(int(magnitude))
    grouped = _group_digits(whole, locale)
    if fraction:
        grouped = f"{grouped}.{fraction}"
    return f"{sign}{grouped}{suffix}"


def compute_pricing(pricing: CostInputs) -> PricingUpdate:
    """Compute the derived fields without touching ``pricing``."""

    adults = to_count(pricing.adults)
    children = to_count(pricing.children)
    extra_beds = to_count(pricing.extra_beds)
    cnb_count = to_count(pricing.cnb_count)

    total_pax = adults + children
    raw_total = (
        adults * parse_price(pricing.per_adult_price)
        + children * parse_price(pricing.per_child_price)
        + extra_beds * parse_price(pricing.extra_bed_price)
        + cnb_count * parse_price(pricing.cnb_price)
    )
    total_cost = format_amount(raw_total) if raw_total > 0 else pricing.total_cost
    return PricingUpdate(total_pax=total_pax, raw_total=raw_total, total_cost=total_cost)


def reconcile_pricing(pricing: CostInputs) -> bool:
    """Write the derived fields back into ``pricing`` when they changed.

    Returns ``True`` if a write happened. Calling it again with the same
    inputs is a no-op.
    """

    update = compute_pricing(pricing)
    pax_changed = update.total_pax != pricing.total_pax
    cost_changed = update.raw_total > 0 and update.total_cost != pricing.total_cost
    if not (pax_changed or cost_changed):
        return False

    pricing.total_pax = update.total_pax
    if update.raw_total > 0:
        pricing.total_cost = update.total_cost
    logger.debug(
        "Pricing reconciled: total_pax=%s total_cost=%s", pricing.total_pax, pricing.total_cost
    )
    return True
