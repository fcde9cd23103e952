from __future__ import annotations
import logging
import struct
from dataclasses import dataclass, field
from typing import List

from .bytecursor import ByteCursor
from ..errors import BadRecordMarkerError, TruncatedReadError
from ..scale import tenths_to_units
from asleyd.models.common import DecodeWarning, WarningCode
from asleyd.models.record import DecodedRecord
from asleyd.models.segment import Segment

logger = logging.getLogger(__name__)

RECORD_MARKER = 0xFA

# Record body after the marker byte:
#   status u8, overtime u16, (unused marker u8), xdat u16, pupil u16,
#   x s16, y s16, (12 reserved bytes), videofield u16
RECORD_BODY = struct.Struct("<BHxHHhh12xH")
RECORD_SIZE = 1 + RECORD_BODY.size
TRAILER_SIZE = 27


def _hexpeek(cur: ByteCursor, n: int = 30) -> str:
    return cur.peek(n).hex()


@dataclass
class SegmentDecodeResult:
    records: List[DecodedRecord] = field(default_factory=list)
    warnings: List[DecodeWarning] = field(default_factory=list)


def decode_record(cur: ByteCursor, record_index: int, *, segment: int = 1,
                  legacy_y: bool = False) -> DecodedRecord:
    """
    Decode one fixed-layout data record at the cursor.

    With ``legacy_y`` the y coordinate is taken from the raw x value, which
    is what the vendor's exporter produced.
    """
    start = cur.tell()
    marker = cur.u8()
    if marker != RECORD_MARKER:
        raise BadRecordMarkerError(record_index, start, marker,
                                   segment=segment, peek=_hexpeek(cur))
    status, overtime, xdat, pupil, raw_x, raw_y, videofield = cur.unpack(RECORD_BODY)
    return DecodedRecord(
        status=status,
        overtime=overtime,
        xdat=xdat,
        pupil=pupil,
        x=tenths_to_units(raw_x),
        y=tenths_to_units(raw_x if legacy_y else raw_y),
        videofield=videofield,
    )


def decode_segment(cur: ByteCursor, seg: Segment, *, index: int = 1,
                   legacy_y: bool = False) -> SegmentDecodeResult:
    """
    Read ``seg.record_count`` records starting at ``seg.file_offset``, then
    the end-of-segment trailer. A short trailer is reported as a warning.
    """
    logger.debug("segment %d: expecting %d records @%d", index, seg.record_count, seg.file_offset)
    cur.seek(seg.file_offset)

    out = SegmentDecodeResult()
    for i in range(1, seg.record_count + 1):
        out.records.append(decode_record(cur, i, segment=index, legacy_y=legacy_y))

    trailer_at = cur.tell()
    try:
        cur.take(TRAILER_SIZE)
    except TruncatedReadError as e:
        msg = (f"end of segment {index} trailer at {trailer_at} is truncated: "
               f"{e.got} of {TRAILER_SIZE} bytes")
        logger.warning(msg)
        out.warnings.append(DecodeWarning(code=WarningCode.TRUNCATED_TRAILER,
                                          message=msg, segment=index))
    return out
