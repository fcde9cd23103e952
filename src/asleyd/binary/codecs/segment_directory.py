from __future__ import annotations
import logging
import struct
from typing import List

from .bytecursor import ByteCursor
from ..errors import BadSegmentMarkerError
from asleyd.models.header import TraceHeader
from asleyd.models.segment import Segment

logger = logging.getLogger(__name__)

SEGMENT_MARKER = 0xFB
SEGMENT_WORDS = struct.Struct("<7I")
SEGMENT_ENTRY_SIZE = 1 + SEGMENT_WORDS.size


def decode_segment_entry(cur: ByteCursor, entry: int) -> Segment:
    """
    One directory entry: marker byte 0xFB followed by seven u32 (LE).
    ``entry`` is 1-based and only used for error reporting.
    """
    start = cur.tell()
    marker = cur.u8()
    if marker != SEGMENT_MARKER:
        raise BadSegmentMarkerError(entry, start, marker)
    return Segment.from_words(cur.unpack(SEGMENT_WORDS))


def parse_segment_directory(cur: ByteCursor, header: TraceHeader) -> List[Segment]:
    """
    Read the segment directory the header points at. Files without a
    directory yield [] and the cursor is not moved.
    """
    if not header.has_segment_directory:
        logger.debug("no segment directory in header")
        return []

    cur.seek(header.segment_directory_address)
    segments = [decode_segment_entry(cur, i) for i in range(1, header.segment_count + 1)]
    for i, seg in enumerate(segments, 1):
        logger.debug(
            "segment %d: frames %d..%d, %d records @%d",
            i, seg.start_frame, seg.end_frame, seg.record_count, seg.file_offset,
        )
    return segments
