from __future__ import annotations

from ..errors import InvalidConditionError

NEW = "NEW"
SEMI_NEW = "SEMI_NEW"
USED = "USED"
DAMAGED = "DAMAGED"

CONDITIONS = (NEW, SEMI_NEW, USED, DAMAGED)

FACTORS: dict[str, float] = {
    NEW: 0.0,
    SEMI_NEW: 0.05,
    USED: 0.10,
    DAMAGED: 0.15,
}

# Labels used by the legacy console menu (NOVO | SEMI_NOVO | USADO | BATIDO)
ALIASES: dict[str, str] = {
    "NOVO": NEW,
    "SEMI_NOVO": SEMI_NEW,
    "USADO": USED,
    "BATIDO": DAMAGED,
}


def normalize_condition(condition: str | None) -> str:
    """Canonical condition label, case-insensitive. Raises InvalidConditionError."""
    key = (condition or "").strip().upper()
    key = ALIASES.get(key, key)
    if key not in FACTORS:
        raise InvalidConditionError(condition)
    return key


def depreciation_factor(condition: str | None) -> float:
    return FACTORS[normalize_condition(condition)]


def apply_depreciation(condition: str | None, price: float) -> float:
    """
    Price after the condition discount: price - price * factor.

    Pure function; the caller decides where the result goes. An unknown
    condition raises InvalidConditionError and the caller keeps the original
    price.
    """
    factor = depreciation_factor(condition)
    p = float(price)
    return p - p * factor
