from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from .bytecursor import ByteCursor
from ..errors import (
    MalformedHeaderError,
    MalformedSchemaLineError,
    MissingFieldSchemaError,
    PrematureEndOfFileError,
    UnknownFieldTypeError,
)
from asleyd.models.common import FieldType
from asleyd.models.header import FieldSpec, TraceHeader

logger = logging.getLogger(__name__)

SEGMENT_DATA = "[Segment_Data]"
SYSTEM_ITEMS = "[System_Data_Items]"
USER_ITEMS = "[Data_Items_Selected_by_User]"
ITEM_LABEL = "Data_Item"

# Keys are matched by substring containment, not equality: a line matches if
# it contains the token anywhere. Real files rely on this.
RATE_KEY = "Update_Rate(Hz)"
DATE_KEY = "Creation_Date"
SEGMENTS_KEY = "User_Recorded_Segments"
SEGDIR_KEY = "Segment_Directory_Start_Address"
BPR_KEY = "Total_Bytes_Per_Record"


def _decode_line(raw: bytes) -> str:
    return raw.decode("latin-1").rstrip("\r\n")


def read_number(line: str) -> float:
    """Number following the first whitespace token, e.g. ``Update_Rate(Hz): 120``.

    Returns NaN when there is no numeric second token.
    """
    tokens = line.split()
    if len(tokens) < 2:
        return math.nan
    try:
        return float(tokens[1])
    except ValueError:
        return math.nan


def read_count(line: str) -> Optional[int]:
    """Non-negative integer value, None when the line carries no finite number."""
    v = read_number(line)
    if not math.isfinite(v):
        return None
    if v < 0:
        raise MalformedHeaderError(f"negative count or address in header line {line!r}")
    return int(v)


def read_string(line: str) -> str:
    """Everything after the first ':' trimmed, '' if there is no ':'."""
    _, sep, rest = line.partition(":")
    return rest.strip() if sep else ""


def parse_field_spec(line: str) -> FieldSpec:
    tokens = line.split()
    if len(tokens) < 4:
        raise MalformedSchemaLineError(f"schema line needs at least 4 fields: {line!r}")
    name, pos, type_name, width = tokens[:4]
    try:
        ftype = FieldType(type_name)
    except ValueError:
        raise UnknownFieldTypeError(type_name, line) from None
    try:
        scale = float(tokens[4]) if len(tokens) > 4 else 1.0
        return FieldSpec(name=name, bit_position=int(pos), type=ftype,
                         byte_width=int(width), scale=scale)
    except ValueError as e:
        raise MalformedSchemaLineError(f"bad schema line {line!r}: {e}") from e


@dataclass
class TraceHeaderBuilder:
    """Collects header fields as they turn up; build() freezes them."""
    rate: float = math.nan
    creation_date: str = ""
    segment_count: Optional[int] = None
    segment_directory_address: Optional[int] = None
    bytes_per_record: Optional[int] = None
    field_schema: List[FieldSpec] = field(default_factory=list)

    def build(self, segment_data_start: int) -> TraceHeader:
        if not self.field_schema:
            raise MissingFieldSchemaError(
                f"no data items declared before {SEGMENT_DATA} at {segment_data_start}"
            )
        return TraceHeader(
            rate=self.rate,
            creation_date=self.creation_date,
            segment_count=self.segment_count,
            segment_directory_address=self.segment_directory_address,
            bytes_per_record=self.bytes_per_record,
            field_schema=list(self.field_schema),
            segment_data_start=segment_data_start,
        )


def read_data_items(cur: ByteCursor, out: List[FieldSpec]) -> int:
    """
    Consume a data-items block: one column-description line, then one item
    per line until a blank line. Appends to ``out``; returns the count added.
    """
    cur.readline()  # column headers
    added = 0
    while True:
        raw = cur.readline()
        if not raw:
            break
        line = _decode_line(raw)
        if not line.strip():
            break
        if ITEM_LABEL in line:
            continue
        out.append(parse_field_spec(line))
        added += 1
    return added


def parse_header(cur: ByteCursor) -> TraceHeader:
    """
    Read text lines until ``[Segment_Data]``. The cursor is left on the
    first byte after that line, which is also ``segment_data_start``.
    """
    b = TraceHeaderBuilder()
    while True:
        raw = cur.readline()
        if not raw:
            raise PrematureEndOfFileError(
                f"end of file at {cur.tell()} before {SEGMENT_DATA} was found"
            )
        line = _decode_line(raw)

        if RATE_KEY in line:
            b.rate = read_number(line)
        elif DATE_KEY in line:
            b.creation_date = read_string(line)
        elif SEGMENTS_KEY in line:
            b.segment_count = read_count(line)
        elif SEGDIR_KEY in line:
            b.segment_directory_address = read_count(line)
        elif SYSTEM_ITEMS in line or USER_ITEMS in line:
            n = read_data_items(cur, b.field_schema)
            logger.debug("%s: %d data items", line.strip(), n)
        elif BPR_KEY in line:
            b.bytes_per_record = read_count(line)
        elif SEGMENT_DATA in line:
            header = b.build(cur.tell())
            logger.debug(
                "header done: rate=%s segments=%s segdir=%s items=%d data@%d",
                header.rate, header.segment_count, header.segment_directory_address,
                len(header.field_schema), header.segment_data_start,
            )
            return header
