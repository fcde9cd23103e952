import io

import pytest

from asleyd.binary.codecs.bytecursor import ByteCursor
from asleyd.binary.codecs.segment_record import RECORD_SIZE, decode_record, decode_segment
from asleyd.binary.errors import BadRecordMarkerError, TruncatedReadError
from asleyd.models.common import WarningCode
from asleyd.models.segment import Segment

from conftest import record_bytes


def _segment(n: int, offset: int = 0) -> Segment:
    return Segment.from_words((0, offset, 100, 100 + n, 0, 0, n))


def test_record_is_27_bytes():
    assert RECORD_SIZE == 27
    assert len(record_bytes()) == 27


def test_decode_record_fields():
    raw = record_bytes(status=0x81, overtime=0, xdat=0x00FF, pupil=512,
                       raw_x=-1234, raw_y=567, videofield=3)
    r = decode_record(ByteCursor(io.BytesIO(raw)), 1)
    assert (r.status, r.overtime, r.xdat, r.pupil, r.videofield) == (0x81, 0, 0x00FF, 512, 3)
    assert r.x == pytest.approx(-123.4)
    assert r.y == pytest.approx(56.7)


def test_legacy_y_uses_raw_x():
    raw = record_bytes(raw_x=100, raw_y=-300)
    r = decode_record(ByteCursor(io.BytesIO(raw)), 1, legacy_y=True)
    assert r.x == pytest.approx(10.0)
    assert r.y == pytest.approx(10.0)


def test_segment_with_trailer():
    recs = [record_bytes(pupil=i, videofield=i % 2) for i in range(4)]
    data = b"\x00" * 5 + b"".join(recs) + b"\xFD" + b"\x00" * 26
    res = decode_segment(ByteCursor(io.BytesIO(data)), _segment(4, offset=5))
    assert [r.pupil for r in res.records] == [0, 1, 2, 3]
    assert res.warnings == []


def test_short_trailer_is_a_warning():
    data = record_bytes() * 2 + b"\xFD" * 10
    res = decode_segment(ByteCursor(io.BytesIO(data)), _segment(2), index=1)
    assert len(res.records) == 2
    assert [w.code for w in res.warnings] == [WarningCode.TRUNCATED_TRAILER]
    assert res.warnings[0].segment == 1


@pytest.mark.parametrize("k", [1, 2, 5])
def test_bad_marker_names_record(k):
    recs = [record_bytes() for _ in range(5)]
    recs[k - 1] = record_bytes(marker=0x00)
    with pytest.raises(BadRecordMarkerError) as exc:
        decode_segment(ByteCursor(io.BytesIO(b"".join(recs))), _segment(5), index=2)
    assert exc.value.record_index == k
    assert exc.value.segment == 2
    assert exc.value.offset == (k - 1) * 27
    assert exc.value.found == 0x00


def test_truncated_record_is_fatal():
    data = record_bytes() + record_bytes()[:10]
    with pytest.raises(TruncatedReadError):
        decode_segment(ByteCursor(io.BytesIO(data)), _segment(2))
