from __future__ import annotations

from decimal import Decimal

from salesboard.analytics.aggregation import round_half_up

TREND_CAP_PCT = 999


def calculate_trend(current: Decimal | float | int, previous: Decimal | float | int) -> int:
    """Percent change of ``current`` versus ``previous``.

    A zero baseline reports 100 when anything happened this period and 0
    otherwise. The result is clamped to +/-999 and rounded to a whole percent;
    callers decide whether a rise is good or bad.
    """
    current_value = float(current)
    previous_value = float(previous)
    if previous_value == 0:
        return 100 if current_value > 0 else 0
    percent_change = (current_value - previous_value) / previous_value * 100
    capped = max(-TREND_CAP_PCT, min(TREND_CAP_PCT, percent_change))
    return round_half_up(capped)
