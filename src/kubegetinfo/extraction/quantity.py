#!/usr/bin/env python3
"""
KUBEGETINFO QUANTITIES
----------------------
Resource-quantity arithmetic for the opt-in 'sum' merge policy. Values are
parsed by kubernetes.utils; this module tracks the suffix so a total can be
written back in the inputs' finest unit. Supports plain numbers, decimal
exponents (1e3), decimal SI suffixes (n, u, m, k, M, G, T, P, E) and binary
suffixes (Ki .. Ei).

Author: KubeGetInfo Team
Date: 2026-10-18
"""

import re
from decimal import Decimal
from typing import Optional, Sequence, Tuple

from kubernetes import utils as k8s_utils

SUFFIX_MULTIPLIERS = {
    "n": Decimal("1e-9"),
    "u": Decimal("1e-6"),
    "m": Decimal("1e-3"),
    "": Decimal(1),
    "k": Decimal("1e3"),
    "M": Decimal("1e6"),
    "G": Decimal("1e9"),
    "T": Decimal("1e12"),
    "P": Decimal("1e15"),
    "E": Decimal("1e18"),
    "Ki": Decimal(2) ** 10,
    "Mi": Decimal(2) ** 20,
    "Gi": Decimal(2) ** 30,
    "Ti": Decimal(2) ** 40,
    "Pi": Decimal(2) ** 50,
    "Ei": Decimal(2) ** 60,
}

QUANTITY_PATTERN = re.compile(
    r"^(?P<number>[+-]?(?:\d+\.?\d*|\.\d+))(?P<suffix>Ki|Mi|Gi|Ti|Pi|Ei|[numkMGTPE]|[eE][+-]?\d+)?$"
)


def parse_quantity(raw: str) -> Optional[Tuple[Decimal, str]]:
    """
    Splits a quantity string into (value in base units, suffix).
    Returns None for anything that is not a valid quantity.
    """
    if not isinstance(raw, str):
        return None
    raw = raw.strip()
    # The pattern gate also keeps out what Decimal alone would accept (NaN, 1_000)
    match = QUANTITY_PATTERN.match(raw)
    if not match:
        return None

    try:
        value = k8s_utils.parse_quantity(raw)
    except ValueError:
        return None

    suffix = match.group("suffix") or ""
    if suffix not in SUFFIX_MULTIPLIERS:
        # Exponent form (1e3) is reported as unit-less
        suffix = ""
    return value, suffix


def format_quantity(value: Decimal, suffix: str) -> str:
    scaled = value / SUFFIX_MULTIPLIERS[suffix]
    text = format(scaled.normalize(), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text}{suffix}"


def sum_quantities(values: Sequence[str]) -> Optional[str]:
    """
    Adds quantities and expresses the total in the finest suffix among
    the inputs ('1' + '500m' -> '1500m'). None if any input is invalid.
    """
    parsed = [parse_quantity(v) for v in values]
    if not parsed or any(p is None for p in parsed):
        return None

    total = sum((p[0] for p in parsed), Decimal(0))
    finest = min((p[1] for p in parsed), key=lambda s: SUFFIX_MULTIPLIERS[s])
    return format_quantity(total, finest)
