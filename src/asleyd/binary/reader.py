from __future__ import annotations

import io
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Union

from .codecs.bytecursor import ByteCursor
from .codecs.header import parse_header
from .codecs.segment_directory import parse_segment_directory
from .codecs.segment_record import decode_segment
from .errors import SegmentSelectionError

from asleyd.models.common import DecodeWarning, WarningCode
from asleyd.models.options import DecodeOptions
from asleyd.models.segment import Segment
from asleyd.models.trace import DecodedTrace, TraceSummary

logger = logging.getLogger(__name__)

BytesLike = Union[str, Path, bytes, bytearray, memoryview]


# -----------------------------
# Helpers
# -----------------------------

@contextmanager
def _open_cursor(inp: BytesLike) -> Iterator[ByteCursor]:
    """Cursor over a path or in-memory bytes; the handle is always closed."""
    if isinstance(inp, (bytes, bytearray, memoryview)):
        fp = io.BytesIO(bytes(inp))
    else:
        fp = open(Path(str(inp)), "rb")
    with fp:
        yield ByteCursor(fp)


def _source_name(inp: BytesLike) -> Optional[str]:
    if isinstance(inp, (bytes, bytearray, memoryview)):
        return None
    return str(inp)


def _warn(code: WarningCode, message: str, segment: Optional[int] = None) -> DecodeWarning:
    logger.warning(message)
    return DecodeWarning(code=code, message=message, segment=segment)


def _select_segments(segments: List[Segment], options: DecodeOptions) -> List[int]:
    if options.segments is None:
        return list(range(1, len(segments) + 1))
    for idx in options.segments:
        if idx > len(segments):
            raise SegmentSelectionError(
                f"segment {idx} requested but the directory lists {len(segments)}"
            )
    return list(options.segments)


# -----------------------------
# Full decode
# -----------------------------

def decode_trace(data: BytesLike, options: Optional[DecodeOptions] = None) -> DecodedTrace:
    """
    Decode an .eyd file: text header, segment directory, then the data
    records of the selected segments (the first one by default).

    Any ParseError propagates; nothing partial is returned.
    """
    options = options or DecodeOptions()
    warnings: List[DecodeWarning] = []
    records = []

    with _open_cursor(data) as cur:
        header = parse_header(cur)
        segments = parse_segment_directory(cur, header)

        if not header.has_segment_directory:
            warnings.append(_warn(WarningCode.MISSING_SEGMENT_DIRECTORY,
                                  "No segment directory in this file; no records decoded"))
            selected = []
        elif not segments:
            warnings.append(_warn(WarningCode.SEGMENT_UNAVAILABLE,
                                  "Segment directory is empty; no records decoded"))
            selected = []
        else:
            selected = _select_segments(segments, options)

        for idx in selected:
            res = decode_segment(cur, segments[idx - 1], index=idx, legacy_y=options.legacy_y)
            records.extend(res.records)
            warnings.extend(res.warnings)

            if options.check_overtime:
                overtime = sum(r.overtime for r in res.records)
                if overtime:
                    warnings.append(_warn(
                        WarningCode.NONZERO_OVERTIME,
                        f"segment {idx}: overtime sums to {overtime} (s/b 0), frames are missing",
                        idx,
                    ))

    return DecodedTrace(
        source=_source_name(data),
        header=header,
        segments=segments,
        records=records,
        decoded_segments=selected,
        warnings=warnings,
    )


# -----------------------------
# Fast summary
# -----------------------------

def summarize_file(data: BytesLike) -> TraceSummary:
    """Header and segment directory only; data records are not touched."""
    warnings: List[DecodeWarning] = []
    with _open_cursor(data) as cur:
        header = parse_header(cur)
        segments = parse_segment_directory(cur, header)
    if not header.has_segment_directory:
        warnings.append(_warn(WarningCode.MISSING_SEGMENT_DIRECTORY,
                              "No segment directory in this file"))
    return TraceSummary(source=_source_name(data), header=header,
                        segments=segments, warnings=warnings)
