from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field

U32 = dict(ge=0, le=0xFFFFFFFF)


class Segment(BaseModel):
    """One segment directory entry: seven uint32 values after the 0xFB marker.

    reserved0/4/5 carry values whose meaning is not documented by the
    format; they are kept as read.
    """
    model_config = ConfigDict(frozen=True)

    reserved0: int = Field(..., **U32)
    file_offset: int = Field(..., **U32)
    start_frame: int = Field(..., **U32)
    end_frame: int = Field(..., **U32)
    reserved4: int = Field(..., **U32)
    reserved5: int = Field(..., **U32)
    record_count: int = Field(..., **U32)

    @classmethod
    def from_words(cls, words) -> "Segment":
        names = ("reserved0", "file_offset", "start_frame", "end_frame",
                 "reserved4", "reserved5", "record_count")
        return cls(**dict(zip(names, words)))

    @property
    def frame_span(self) -> int:
        return self.end_frame - self.start_frame
