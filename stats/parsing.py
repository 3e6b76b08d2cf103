# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Defensive parsing of loosely-typed stat values.

Upstream stat lines mix strings (``".287"``, ``"180.1"``), integers and
floats, and omit fields freely.  Every numeric read in the stats engine goes
through :func:`parse_number`, which never raises and returns ``None`` for
anything that is not a finite number.
"""

from __future__ import annotations

import logging
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping

logger = logging.getLogger(__name__)

_INNINGS_RE = re.compile(r"^(\d*)(?:\.(\d))?$")


def parse_number(value: Any) -> float | None:
    """Parse *value* as a finite float, or return ``None``.

    Accepts ints, floats and numeric strings (surrounding whitespace is
    ignored).  ``None``, empty strings, booleans, NaN, infinities and
    anything else that fails to parse yield ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def number_or_zero(value: Any) -> float:
    parsed = parse_number(value)
    return 0.0 if parsed is None else parsed


def count_value(value: Any) -> int:
    """Parse a counting stat, truncating toward zero; unparseable -> 0."""
    parsed = parse_number(value)
    return 0 if parsed is None else int(parsed)


def stat_count(stat: Mapping[str, Any] | None, key: str) -> int:
    if not stat:
        return 0
    return count_value(stat.get(key))


def to_fixed(value: float, digits: int) -> str:
    """Format *value* with *digits* decimals, rounding ties away from zero.

    Matches JavaScript's ``Number.prototype.toFixed`` on the exact binary
    value, so ``to_fixed(0.125, 2) == "0.13"`` and ``to_fixed(-0.0, 3) == "0.000"``.
    """
    if value == 0:
        value = 0.0
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def js_round(value: float) -> int:
    """Round half up (toward positive infinity), like ``Math.round``."""
    return math.floor(value + 0.5)


# ---------------------------------------------------------------------------
# Innings pitched
# ---------------------------------------------------------------------------

def innings_to_outs(value: Any) -> int | None:
    """Convert an innings-pitched value to a whole number of outs.

    The upstream notation encodes partial innings as thirds: ``"180.1"`` is
    180 1/3 innings (541 outs) and ``"120.2"`` is 120 2/3 (362 outs).  A
    fractional digit other than 0, 1 or 2, more than one fractional digit,
    or a negative value is malformed and yields ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value * 3 if value >= 0 else None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        text = repr(value)
    elif isinstance(value, str):
        text = value.strip()
    else:
        return None

    match = _INNINGS_RE.match(text)
    if match is None or (not match.group(1) and match.group(2) is None):
        if parse_number(text) is not None:
            logger.warning("Malformed innings pitched value %r", value)
        return None
    whole = int(match.group(1) or 0)
    fraction = int(match.group(2) or 0)
    if fraction > 2:
        logger.warning("Malformed innings pitched value %r (fraction .%d)", value, fraction)
        return None
    return whole * 3 + fraction


def innings_to_float(value: Any) -> float | None:
    """Return innings pitched as an exact decimal count (``"180.1"`` -> 180.333...)."""
    outs = innings_to_outs(value)
    return None if outs is None else outs / 3


def outs_to_innings(outs: int) -> str:
    """Format a number of outs in innings notation, e.g. ``903`` -> ``"301.0"``."""
    whole, remainder = divmod(outs, 3)
    return f"{whole}.{remainder}"


def stat_number(stat: Mapping[str, Any] | None, key: str) -> float | None:
    """Read *key* from *stat* as a float, reading innings pitched as thirds."""
    if not stat:
        return None
    value = stat.get(key)
    if key == "inningsPitched":
        return innings_to_float(value)
    return parse_number(value)
