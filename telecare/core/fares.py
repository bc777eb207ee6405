"""Transport fare estimation."""

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


def estimate_fare(
    base_fare: Decimal | float | str,
    per_km_rate: Decimal | float | str,
    distance_km: Decimal | float | str,
) -> Decimal:
    """
    Linear fare estimate: ``base_fare + per_km_rate * distance_km``.

    Inputs are converted through ``str`` so float arguments do not leak binary
    rounding into the result, which is rounded half-up to cents.
    """
    if Decimal(str(distance_km)) < 0:
        raise ValueError("distance_km must not be negative")

    fare = Decimal(str(base_fare)) + Decimal(str(per_km_rate)) * Decimal(str(distance_km))
    return fare.quantize(CENTS, rounding=ROUND_HALF_UP)
