from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]

class ViewBounds(BaseModel):
    """Window of a caller-owned buffer a reader walks: origin plus optional length."""
    init_offset: int = Field(0, ge=0)
    max_len: int = 0   # <= 0: unbounded, runs to the end of the buffer

    @property
    def is_bounded(self) -> bool:
        return self.max_len > 0

    def view(self, buffer: BytesLike) -> memoryview:
        mv = memoryview(buffer).cast("B")
        size = len(mv)
        if self.init_offset > size:
            raise ValueError(f"origin {self.init_offset} outside buffer of {size} bytes")
        if not self.is_bounded:
            return mv[self.init_offset:]
        end = self.init_offset + self.max_len
        if end > size:
            raise ValueError(f"window end {end} outside buffer of {size} bytes")
        return mv[self.init_offset:end]
