"""Builders for synthetic .eyd files."""

import struct
from typing import List, Optional, Sequence

import pytest

RECORD_BODY = struct.Struct("<BHxHHhh12xH")

SYSTEM_ITEMS = [
    "start_of_record 0 Byte 1",
    "status 1 Byte 1",
    "overtime_count 2 UInt16 2",
    "mark_value 4 Byte 1",
    "XDAT 5 UInt16 2",
]
USER_ITEMS = [
    "pupil_diam 7 UInt16 2",
    "horz_gaze_coord 9 Int16 2 0.1",
    "vert_gaze_coord 11 Int16 2 0.1",
    "video_field_num 25 UInt16 2",
]


def record_bytes(status=0, overtime=0, xdat=0, pupil=0, raw_x=0, raw_y=0,
                 videofield=0, marker=0xFA) -> bytes:
    return bytes([marker]) + RECORD_BODY.pack(status, overtime, xdat, pupil, raw_x, raw_y, videofield)


def items_block(label: str, items: Sequence[str]) -> List[str]:
    return [label, "Data_Item      Position  Type    Bytes  Scale", *items, ""]


def build_eyd(
    segments: Sequence[Sequence[bytes]] = ((record_bytes(),),),
    *,
    rate: str = "240",
    creation_date: str = "Mon Oct 12 14:03:22 2026",
    with_directory: bool = True,
    frames: Optional[Sequence[tuple]] = None,
    system_items: Optional[Sequence[str]] = SYSTEM_ITEMS,
    user_items: Optional[Sequence[str]] = USER_ITEMS,
    last_trailer_len: int = 27,
    extra_lines: Sequence[str] = (),
) -> bytes:
    """
    Header text, then the segment directory (right after [Segment_Data]),
    then each segment's records followed by a 27-byte trailer.
    """
    nseg = len(segments)

    def header(addr: int) -> bytes:
        lines = [
            "[File_Description]",
            "File_Type: EYD",
            f"Creation_Date&Time: {creation_date}",
            f"Update_Rate(Hz): {rate}",
            f"User_Recorded_Segments: {nseg}",
        ]
        if with_directory:
            lines.append(f"Segment_Directory_Start_Address: {addr:010d}")
        lines.extend(extra_lines)
        lines.append("")
        if system_items is not None:
            lines += items_block("[System_Data_Items]", system_items)
        if user_items is not None:
            lines += items_block("[Data_Items_Selected_by_User]", user_items)
        lines.append("Total_Bytes_Per_Record: 27")
        lines.append("[Segment_Data]")
        return ("\r\n".join(lines) + "\r\n").encode("latin-1")

    dir_addr = len(header(0))
    offset = dir_addr + (29 * nseg if with_directory else 0)
    directory = b""
    body = b""
    for i, recs in enumerate(segments):
        start, end = frames[i] if frames else (1000 * (i + 1), 1000 * (i + 1) + len(recs))
        directory += bytes([0xFB]) + struct.pack("<7I", 0, offset, start, end, 0, 0, len(recs))
        data = b"".join(recs)
        trailer = bytes([0xFD]) + b"\x00" * 26
        if i == nseg - 1:
            trailer = trailer[:last_trailer_len]
        body += data + trailer
        offset += len(data) + len(trailer)

    return header(dir_addr) + (directory if with_directory else b"") + body


@pytest.fixture
def eyd_file(tmp_path):
    def _write(data: bytes, name: str = "trace.eyd"):
        p = tmp_path / name
        p.write_bytes(data)
        return p
    return _write
