from __future__ import annotations
import logging
import struct
from datetime import datetime

from delphistream.binary.scale import currency_from_raw, int64_to_number
from delphistream.binary.codecs.text import bytes_to_text, code_to_char
from delphistream.binary.codecs.datetime_codec import decode_tdatetime
from delphistream.models.bounds import BytesLike, ViewBounds

log = logging.getLogger(__name__)


class ReadUnderrunError(ValueError):
    pass


class UnsupportedFormatError(NotImplementedError):
    pass


class ByteCursorReader:
    """
    Sequential reader for values laid out with Delphi's binary type encodings.

    Wraps a caller-owned buffer through a window starting at `init_offset`
    (optionally `max_len` bytes long) and keeps one cursor relative to that
    origin. Every read_* call consumes its type's width and advances the cursor.
    All multi-byte values are little-endian.

    Not thread-safe: give each consumer its own reader over the shared buffer.
    """
    __slots__ = ("buf", "offset")

    def __init__(self, buffer: BytesLike, init_offset: int = 0, max_len: int = 0):
        self.buf = ViewBounds(init_offset=init_offset, max_len=max_len).view(buffer)
        self.offset = 0
        log.debug("reader over %d bytes at origin %d", len(self.buf), init_offset)

    @classmethod
    def from_bounds(cls, buffer: BytesLike, bounds: ViewBounds) -> "ByteCursorReader":
        return cls(buffer, bounds.init_offset, bounds.max_len)

    def __len__(self) -> int: return len(self.buf)
    def remaining(self) -> int: return len(self.buf) - self.offset

    def get_offset(self) -> int: return self.offset

    def inc_offset(self, delta: int) -> None:
        # unchecked: skips padding/unknown fields, may move past either end
        self.offset += delta

    def take(self, n: int) -> bytes:
        end = self.offset + n
        if self.offset < 0 or end > len(self.buf):
            raise ReadUnderrunError(f"underrun: need {n} at {self.offset}")
        out = self.buf[self.offset:end].tobytes()
        self.offset = end
        return out

    def _unpack(self, fmt: str, n: int):
        return struct.unpack(fmt, self.take(n))[0]

    # ----------------
    # Integer types
    # ----------------
    def read_short_int(self) -> int: return self._unpack("<b", 1)
    def read_byte(self) -> int:      return self._unpack("<B", 1)
    def read_small_int(self) -> int: return self._unpack("<h", 2)
    def read_word(self) -> int:      return self._unpack("<H", 2)
    def read_integer(self) -> int:   return self._unpack("<i", 4)
    def read_cardinal(self) -> int:  return self._unpack("<I", 4)
    def read_int64_precise(self) -> int:  return self._unpack("<q", 8)
    def read_uint64_precise(self) -> int: return self._unpack("<Q", 8)

    def read_int64(self) -> float:
        """Signed 64-bit as float. Lossy above 2**53; use read_int64_precise for exact values."""
        return int64_to_number(self.read_int64_precise())

    def read_uint64(self) -> float:
        """Unsigned 64-bit as float. Lossy above 2**53; use read_uint64_precise for exact values."""
        return int64_to_number(self.read_uint64_precise())

    def read_fixed_int(self) -> int: return self.read_integer()

    # Platform-dependent widths. The caller picks the target; nothing is detected here.
    def read_native_int_on32(self) -> int:  return self.read_integer()
    def read_native_int_on64(self) -> int:  return self.read_int64_precise()
    def read_native_uint_on32(self) -> int: return self.read_cardinal()
    def read_native_uint_on64(self) -> int: return self.read_uint64_precise()

    # LongInt/LongWord stay 32-bit on Win64, widen to 64-bit on POSIX 64-bit targets
    def read_long_int_on32(self) -> int:       return self.read_integer()
    def read_long_int_on_win64(self) -> int:   return self.read_integer()
    def read_long_int_on_posix64(self) -> int: return self.read_int64_precise()
    def read_long_word_on32(self) -> int:       return self.read_cardinal()
    def read_long_word_on_win64(self) -> int:   return self.read_cardinal()
    def read_long_word_on_posix64(self) -> int: return self.read_uint64_precise()

    # ----------------
    # Boolean types: any nonzero pattern is True
    # ----------------
    def read_boolean(self) -> bool:   return self.read_byte() != 0
    def read_byte_bool(self) -> bool: return self.read_short_int() != 0
    def read_word_bool(self) -> bool: return self.read_small_int() != 0
    def read_long_bool(self) -> bool: return self.read_integer() != 0

    # ----------------
    # Real types
    # ----------------
    def read_single(self) -> float: return self._unpack("<f", 4)
    def read_double(self) -> float: return self._unpack("<d", 8)
    def read_real(self) -> float:   return self.read_double()

    def read_real48(self) -> float:
        log.debug("Real48 requested at offset %d", self.offset)
        raise UnsupportedFormatError("Real48 is not implemented")

    def read_extended(self) -> float:
        log.debug("Extended requested at offset %d", self.offset)
        raise UnsupportedFormatError("Extended (80-bit) is not implemented")

    def read_comp(self) -> float:
        """Comp is an int64 handled as a real; same precision loss as read_int64."""
        return self.read_int64()

    def read_currency(self) -> float:
        """
        Fixed-point with four implied decimals: raw int64 / 10000, in floating
        point. Values past ~2**53 / 10000 round; read_int64_precise keeps the raw
        integer for callers that need exact decimals.
        """
        return currency_from_raw(self.read_int64_precise())

    # ----------------
    # Character types
    # ----------------
    def read_ansi_char(self) -> str: return code_to_char(self.read_byte())
    def read_wide_char(self) -> str: return code_to_char(self.read_word())
    def read_char(self) -> str:      return self.read_wide_char()
    def read_ucs2_char(self) -> str: return self.read_wide_char()

    # ----------------
    # Strings and character arrays
    # ----------------
    def read_byte_array(self, n: int) -> bytes:
        if n < 0:
            raise ValueError(f"negative block length {n}")
        return self.take(n)

    def read_char_array(self, saved_len: int, actual_len: int = -1) -> str:
        """Consume `saved_len` UTF-16 units; text stops at a null or `actual_len` units."""
        units = struct.unpack(f"<{saved_len}H", self.read_byte_array(2 * saved_len))
        return bytes_to_text(units, actual_len)

    def read_ansi_char_array(self, saved_len: int, actual_len: int = -1) -> str:
        """Consume `saved_len` bytes; text stops at a null or `actual_len` bytes."""
        return bytes_to_text(self.read_byte_array(saved_len), actual_len)

    def read_short_string(self, saved_len: int = 255) -> str:
        """
        ShortString: a length byte, then a fixed `saved_len`-byte buffer of which
        only the first `length` bytes matter. Always consumes 1 + saved_len bytes.
        """
        actual_len = self.read_byte()
        return self.read_ansi_char_array(saved_len, actual_len)

    # ----------------
    # Date and time
    # ----------------
    def read_date_time(self) -> datetime:
        return decode_tdatetime(self.read_double())
