from __future__ import annotations
import math
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from .common import FieldType


class FieldSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    bit_position: int = Field(..., ge=0)
    type: FieldType
    byte_width: int = Field(..., ge=0)
    scale: float = 1.0


class TraceHeader(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate: float = math.nan
    creation_date: str = ""
    segment_count: Optional[int] = Field(None, ge=0)
    segment_directory_address: Optional[int] = Field(None, ge=0)
    bytes_per_record: Optional[int] = Field(None, ge=0)
    field_schema: List[FieldSpec] = Field(..., min_length=1)
    segment_data_start: int = Field(..., ge=0)

    @property
    def rate_is_set(self) -> bool:
        return not math.isnan(self.rate)

    @property
    def has_segment_directory(self) -> bool:
        return self.segment_count is not None and self.segment_directory_address is not None
