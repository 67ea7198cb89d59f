from __future__ import annotations
from typing import Sequence, Union

Units = Union[bytes, bytearray, memoryview, Sequence[int]]

def code_to_char(code: int) -> str:
    # code point equality: Latin-1 for bytes, a bare UTF-16 code unit for words
    return chr(code)

def bytes_to_text(units: Units, max_len: int = -1) -> str:
    """
    Build text from 8-bit bytes or 16-bit code units.

    Scanning stops at the first zero unit (excluded) or after `max_len` units,
    whichever comes first. A negative `max_len`, or one longer than `units`,
    scans the whole sequence.
    """
    if max_len < 0 or max_len > len(units):
        max_len = len(units)
    out = []
    for i in range(max_len):
        if units[i] == 0:
            break
        out.append(code_to_char(units[i]))
    return "".join(out)
