import struct
from datetime import datetime, timezone

import pytest

from delphistream.binary.codecs.bytecursor import ByteCursorReader
from delphistream.binary.codecs.datetime_codec import (
    DELPHI_EPOCH,
    decode_tdatetime,
    tdatetime_days,
)


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


@pytest.mark.parametrize("val,expected", [
    (0.0, utc(1899, 12, 30)),
    (0.25, utc(1899, 12, 30, 6)),
    (1.0, utc(1899, 12, 31)),
    (2.75, utc(1900, 1, 1, 18)),
    (35065.0, utc(1996, 1, 1)),
    (25569.0, utc(1970, 1, 1)),
])
def test_non_negative_values(val, expected):
    assert decode_tdatetime(val) == expected


@pytest.mark.parametrize("val,expected", [
    # time of day always counts forward from midnight
    (-0.25, utc(1899, 12, 30, 6)),
    (-1.0, utc(1899, 12, 29)),
    (-1.25, utc(1899, 12, 29, 6)),
    (-2.75, utc(1899, 12, 28, 18)),
])
def test_negative_values_keep_forward_time_of_day(val, expected):
    assert decode_tdatetime(val) == expected


def test_negative_is_not_naive_negation():
    # epoch - 0.25 day would land on the previous evening
    assert decode_tdatetime(-0.25) != utc(1899, 12, 29, 18)


def test_day_offsets():
    assert tdatetime_days(1.5) == 1.5
    assert tdatetime_days(-1.25) == -0.75
    assert tdatetime_days(-3.0) == -3.0


def test_millisecond_resolution():
    # 0.1 day * 86_400_000 carries float noise below 1 ms, dropped by truncation
    got = decode_tdatetime(0.1)
    assert got == utc(1899, 12, 30, 2, 24)
    assert got.microsecond % 1000 == 0
    assert decode_tdatetime(0.00001) == utc(1899, 12, 30, 0, 0, 0, 864_000)


def test_result_is_utc_aware():
    assert decode_tdatetime(1.0).tzinfo is timezone.utc
    assert DELPHI_EPOCH.isoformat() == "1899-12-30T00:00:00+00:00"


def test_out_of_range_raises_overflow():
    with pytest.raises(OverflowError):
        decode_tdatetime(1e9)


def test_reader_reads_double_and_advances():
    buf = struct.pack("<dd", 0.25, -1.25)
    r = ByteCursorReader(buf)
    assert r.read_date_time() == utc(1899, 12, 30, 6)
    assert r.read_date_time() == utc(1899, 12, 29, 6)
    assert r.get_offset() == 16
