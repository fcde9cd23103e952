from __future__ import annotations
from typing import List
from .models.trace import DecodedTrace, TraceSummary


def format_summary(trace: TraceSummary) -> str:
    """Plain-text summary: header, one block per segment, warnings."""
    h = trace.header
    lines: List[str] = [
        f"Summary for {trace.source or '<bytes>'}",
        f"created : {h.creation_date}",
        f"rate(Hz): {h.rate:g}" if h.rate_is_set else "rate(Hz): unset",
        f"# segments: {h.segment_count if h.segment_count is not None else 'n/a'}",
    ]
    decoded = trace.decoded_segments if isinstance(trace, DecodedTrace) else []
    for i, seg in enumerate(trace.segments, 1):
        lines.append(f"Segment {i}:")
        lines.append(f"Start frame: {seg.start_frame}")
        lines.append(f"End frame  : {seg.end_frame}")
        lines.append(f"num records: {seg.record_count} (expect {seg.frame_span})")
        if i in decoded:
            overtime = sum(r.overtime for r in trace.records_for(i))
            lines.append(f"overtime (s/b=0): {overtime}")
    for w in trace.warnings:
        lines.append(f"warning: {w.message}")
    return "\n".join(lines)
