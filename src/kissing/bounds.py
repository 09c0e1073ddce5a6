# src/kissing/bounds.py
from __future__ import annotations

from decimal import MAX_EMAX, MIN_EMIN, Context, Decimal

# Kabatiansky–Levenshtein: 2^{0.2075n} ≤ K(n) ≤ 2^{0.401n} for large n
LOWER_EXPONENT = Decimal("0.2075")
UPPER_EXPONENT = Decimal("0.401")

_TWO = Decimal(2)
# 28 significant digits, but with the full exponent range so 2^(0.401 n)
# stays finite for any dimension a user can realistically type.
_CTX = Context(prec=28, Emax=MAX_EMAX, Emin=MIN_EMIN)


def _pow2(exponent: Decimal) -> Decimal:
    return _CTX.power(_TWO, exponent)


def estimate(dimension: int) -> tuple[Decimal, Decimal]:
    """Return (lower, upper) asymptotic kissing-number bounds for `dimension`."""
    n = Decimal(dimension)
    lower = _pow2(_CTX.multiply(LOWER_EXPONENT, n))
    upper = _pow2(_CTX.multiply(UPPER_EXPONENT, n))
    return lower, upper
