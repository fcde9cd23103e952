from __future__ import annotations
from enum import Enum
from pydantic import BaseModel


class FieldType(str, Enum):
    BYTE = "Byte"
    UINT16 = "UInt16"
    INT16 = "Int16"


class WarningCode(str, Enum):
    MISSING_SEGMENT_DIRECTORY = "missing_segment_directory"
    TRUNCATED_TRAILER = "truncated_trailer"
    NONZERO_OVERTIME = "nonzero_overtime"
    SEGMENT_UNAVAILABLE = "segment_unavailable"


class DecodeWarning(BaseModel):
    code: WarningCode
    message: str
    segment: int | None = None
