import math

CURRENCY_SCALE = 10_000
MS_PER_DAY = 24 * 60 * 60 * 1000

def currency_from_raw(v: int) -> float:
    """
    Currency is a signed 64-bit integer with four implied decimal digits.
    The division is done in floating point, so values beyond 2**53 / 10000
    lose their low digits.
    """
    return v / CURRENCY_SCALE

def int64_to_number(v: int) -> float:
    """Narrow an exact 64-bit integer to float (lossy above 2**53 in magnitude)."""
    return float(v)

def days_to_ms(days: float) -> int:
    """Day count -> whole milliseconds, truncated toward zero."""
    return math.trunc(MS_PER_DAY * days)
