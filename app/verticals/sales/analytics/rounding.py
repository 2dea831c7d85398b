from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP, localcontext

D = Decimal
CENT = D("0.01")
# enough digits to quantize the largest finite float at the cent
ROUNDING_PREC = 400


def round2(value: float) -> float:
    """Round half-up at the cent, from the shortest repr of the float."""
    with localcontext() as ctx:
        ctx.prec = ROUNDING_PREC
        q = D(repr(float(value))).quantize(CENT, rounding=ROUND_HALF_UP)
    return float(q) + 0.0  # no -0.0 in output
