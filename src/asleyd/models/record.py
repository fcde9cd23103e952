from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field


class DecodedRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: int = Field(..., ge=0, le=0xFF)
    overtime: int = Field(..., ge=0, le=0xFFFF)
    xdat: int = Field(..., ge=0, le=0xFFFF)
    pupil: int = Field(..., ge=0, le=0xFFFF)
    x: float
    y: float
    videofield: int = Field(..., ge=0, le=0xFFFF)
