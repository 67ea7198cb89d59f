from __future__ import annotations
import math
from datetime import datetime, timedelta, timezone

from delphistream.binary.scale import days_to_ms

# TDateTime day zero
DELPHI_EPOCH = datetime(1899, 12, 30, tzinfo=timezone.utc)

def tdatetime_days(val: float) -> float:
    """
    Signed day offset from DELPHI_EPOCH for a stored TDateTime value.

    The integral part counts whole days (signed), the fractional part is the
    time elapsed on that day and always runs forward from midnight:
    -1.25 is 1899-12-29 06:00, not 1899-12-28 18:00.
    """
    if val >= 0:
        return val
    integral = math.trunc(val)           # toward zero, stays <= 0
    fraction = abs(math.fmod(val, 1.0))  # time of day, positive
    return integral + fraction

def decode_tdatetime(val: float) -> datetime:
    """
    TDateTime double -> aware UTC datetime, millisecond resolution.
    Raises OverflowError outside the range datetime can represent.
    """
    return DELPHI_EPOCH + timedelta(milliseconds=days_to_ms(tdatetime_days(val)))
