from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from .common import DecodeWarning
from .header import TraceHeader
from .record import DecodedRecord
from .segment import Segment

COLUMN_DTYPES = {
    "status": "uint8",
    "overtime": "uint16",
    "xdat": "uint16",
    "pupil": "uint16",
    "x": "float64",
    "y": "float64",
    "videofield": "uint16",
}


class TraceSummary(BaseModel):
    """Header and segment directory only; no records decoded."""
    model_config = ConfigDict(frozen=True)

    source: Optional[str] = None
    header: TraceHeader
    segments: List[Segment] = Field(default_factory=list)
    warnings: List[DecodeWarning] = Field(default_factory=list)


class DecodedTrace(TraceSummary):
    records: List[DecodedRecord] = Field(default_factory=list)
    decoded_segments: List[int] = Field(default_factory=list)

    @property
    def overtime_total(self) -> int:
        return sum(r.overtime for r in self.records)

    def records_for(self, segment_index: int) -> List[DecodedRecord]:
        """Records belonging to one decoded segment (1-based index)."""
        start = 0
        for idx in self.decoded_segments:
            n = self.segments[idx - 1].record_count
            if idx == segment_index:
                return self.records[start:start + n]
            start += n
        raise KeyError(f"segment {segment_index} was not decoded")

    def to_columns(self) -> Dict[str, "numpy.ndarray"]:
        import numpy as np
        return {
            name: np.array([getattr(r, name) for r in self.records], dtype=dtype)
            for name, dtype in COLUMN_DTYPES.items()
        }

    # Convenience constructors
    @classmethod
    def from_binary(cls, data: bytes | str, options=None) -> "DecodedTrace":
        from ..binary.reader import decode_trace
        return decode_trace(data, options)
