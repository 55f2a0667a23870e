"""CSV row encoding for todo records.

Each record is one headerless row: index, text, done ("true"/"false").
Decoding accepts only what encode_row writes.
"""

from typing import List, Sequence

from .errors import MalformedRecordError
from .models import Record

FIELD_COUNT = 3
FLAGS = {"true": True, "false": False}


def encode_row(record: Record) -> List[str]:
    return [str(record.index), record.text, "true" if record.done else "false"]


def decode_row(row: Sequence[str], line_num: int) -> Record:
    """Decode one CSV row into a Record, or raise MalformedRecordError."""
    if len(row) != FIELD_COUNT:
        raise MalformedRecordError(
            line_num, f"expected {FIELD_COUNT} fields, found {len(row)}"
        )
    raw_index, text, raw_done = row

    if not (raw_index.isascii() and raw_index.isdigit()):
        raise MalformedRecordError(line_num, f"invalid index {raw_index!r}")
    if raw_done not in FLAGS:
        raise MalformedRecordError(line_num, f"invalid done flag {raw_done!r}")

    return Record(index=int(raw_index), text=text, done=FLAGS[raw_done])
