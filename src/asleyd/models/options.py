from __future__ import annotations
from pydantic import BaseModel, field_validator
from typing import List, Optional


class DecodeOptions(BaseModel):
    # 1-based segment indices; None decodes every segment in the directory
    segments: Optional[List[int]] = [1]
    legacy_y: bool = False
    check_overtime: bool = True

    @field_validator("segments")
    @classmethod
    def _positive_indices(cls, v):
        if v is None:
            return v
        if any(i < 1 for i in v):
            raise ValueError("segment indices are 1-based")
        # repeated indices decode once, first occurrence keeps its place
        return list(dict.fromkeys(v))
