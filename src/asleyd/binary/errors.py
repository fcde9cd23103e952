from __future__ import annotations


class ParseError(ValueError):
    pass


class TruncatedReadError(ParseError):
    def __init__(self, offset: int, wanted: int, got: int):
        super().__init__(f"truncated read: need {wanted} at {offset}, only {got} available")
        self.offset = offset
        self.wanted = wanted
        self.got = got


class PrematureEndOfFileError(ParseError):
    pass


class MissingFieldSchemaError(ParseError):
    pass


class UnknownFieldTypeError(ParseError):
    def __init__(self, type_name: str, line: str):
        super().__init__(f"Unknown data type {type_name!r} in schema line {line!r}")
        self.type_name = type_name
        self.line = line


class MalformedSchemaLineError(ParseError):
    pass


class BadSegmentMarkerError(ParseError):
    def __init__(self, entry: int, offset: int, found: int):
        super().__init__(
            f"start of segment record not found: entry {entry} at {offset} has marker 0x{found:02x}"
        )
        self.entry = entry
        self.offset = offset
        self.found = found


class BadRecordMarkerError(ParseError):
    def __init__(self, record_index: int, offset: int, found: int, *, segment: int = 1, peek: str = ""):
        msg = (
            f"Error at record {record_index} of segment {segment}, start of record not found "
            f"(offset {offset}, marker 0x{found:02x})"
        )
        if peek:
            msg += f"; peek={peek}"
        super().__init__(msg)
        self.record_index = record_index
        self.segment = segment
        self.offset = offset
        self.found = found
        self.peek = peek


class SegmentSelectionError(ParseError):
    pass


class MalformedHeaderError(ParseError):
    pass
