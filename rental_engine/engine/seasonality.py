# Calendar-month multipliers (Jan..Dec) for short-term rentals only.
SEASONALITY_ADR = (1.0, 1.05, 1.15, 0.95, 0.9, 1.25, 1.35, 1.3, 1.0, 0.85, 0.9, 1.3)
SEASONALITY_OCC = (0.95, 1.0, 1.1, 0.8, 0.7, 1.2, 1.3, 1.25, 0.9, 0.75, 0.85, 1.2)


def seasonal_factors(month_index: int) -> tuple[float, float]:
    """Return (adr_multiplier, occupancy_multiplier) for a 0-based calendar month."""
    i = month_index % 12
    return SEASONALITY_ADR[i], SEASONALITY_OCC[i]
