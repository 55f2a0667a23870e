"""File I/O for todo lists."""

import csv
import logging
import os
import shutil
import tempfile
from contextlib import closing
from dataclasses import dataclass
from typing import AbstractSet, BinaryIO, FrozenSet, Iterable, Iterator, List

from .codec import decode_row, encode_row
from .core import RewritePass, RowTransform, check_sequence, drop, set_done
from .errors import MalformedRecordError
from .models import Record

logger = logging.getLogger("todolist.storage")

# Task text has no length limit; the csv module's default would refuse
# to read back anything over 128 KiB.
FIELD_SIZE_LIMIT = 2**31 - 1
csv.field_size_limit(max(csv.field_size_limit(), FIELD_SIZE_LIMIT))


def ensure_file_exists(path: str) -> bool:
    """Ensure the directory and an (empty) list file exist.

    Returns True if the file had to be created.
    """
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    if os.path.exists(path):
        return False
    with open(path, "w", encoding="utf-8", newline=""):
        pass
    logger.info("created empty list %s", path)
    return True


def _decoded_lines(f: BinaryIO) -> Iterator[str]:
    for line_num, raw in enumerate(f, start=1):
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedRecordError(
                line_num, f"invalid UTF-8 at byte {exc.start + 1}"
            ) from None


def iter_records(path: str) -> Iterator[Record]:
    """Lazily decode every record in the file, in file order.

    Blank lines are skipped. Anything that does not decode raises
    MalformedRecordError straight away, naming the line the record starts
    on. Each call reopens the file.
    """
    with open(path, "rb") as f:
        reader = csv.reader(_decoded_lines(f))
        while True:
            start = reader.line_num + 1
            try:
                row = next(reader)
            except StopIteration:
                return
            except csv.Error as exc:
                raise MalformedRecordError(start, str(exc)) from None
            if not row:
                continue
            yield decode_row(row, start)


def check_integrity(path: str) -> int:
    """Validate that indexes run 1..N and return the next free index.

    A missing file is created empty, giving a next index of 1.
    """
    if ensure_file_exists(path):
        return 1
    return check_sequence(iter_records(path))


def append_records(path: str, texts: Iterable[str], start: int) -> List[Record]:
    """Append one not-done record per text, numbered from start.

    Existing content is left alone. Returns the records written.
    """
    added: List[Record] = []
    with open(path, "a", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        for offset, text in enumerate(texts):
            record = Record(index=start + offset, text=text, done=False)
            writer.writerow(encode_row(record))
            added.append(record)
    logger.info("appended %d record(s) to %s", len(added), path)
    return added


class AtomicRewrite:
    """Write a replacement for path into a sibling temp file.

    Nothing at path changes until commit(), which renames the finished temp
    file over it. abort() (or leaving the with-block without committing)
    removes the temp file instead.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        directory = os.path.dirname(os.path.abspath(path))
        self._file = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="",
            delete=False,
            dir=directory,
            prefix=f".{os.path.basename(path)}.",
            suffix=".tmp",
        )
        self.tmp_path = self._file.name
        self._writer = csv.writer(self._file)
        self._finished = False
        logger.debug("rewriting %s via %s", path, self.tmp_path)

    def write(self, record: Record) -> None:
        if self._finished:
            raise RuntimeError("rewrite already finished")
        self._writer.writerow(encode_row(record))

    def commit(self) -> None:
        if self._finished:
            raise RuntimeError("rewrite already finished")
        self._file.flush()
        os.fsync(self._file.fileno())
        self._file.close()
        try:
            if os.path.exists(self.path):
                shutil.copymode(self.path, self.tmp_path)
            os.replace(self.tmp_path, self.path)
        except OSError:
            self.abort()
            raise
        self._finished = True

    def abort(self) -> None:
        self._finished = True
        try:
            self._file.close()
        except OSError as exc:
            logger.debug("closing %s failed: %s", self.tmp_path, exc)
        try:
            os.unlink(self.tmp_path)
        except FileNotFoundError:
            pass
        else:
            logger.debug("discarded %s", self.tmp_path)

    def __enter__(self) -> "AtomicRewrite":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self._finished:
            self.abort()


def begin_rewrite(path: str) -> AtomicRewrite:
    return AtomicRewrite(path)


@dataclass(frozen=True)
class RewriteSummary:
    written: int
    dropped: int
    unmatched: FrozenSet[int]


def rewrite_file(
    path: str,
    targets: AbstractSet[int],
    select_all: bool,
    transform: RowTransform,
) -> RewriteSummary:
    """Rewrite the whole list through a RewritePass and swap it in atomically.

    Any read, decode or write error aborts before the rename, so the
    original file is left exactly as it was.
    """
    ensure_file_exists(path)
    rewrite_pass = RewritePass(targets, select_all, transform)
    with closing(iter_records(path)) as records, begin_rewrite(path) as rewrite:
        for record in rewrite_pass.run(records):
            rewrite.write(record)
        rewrite.commit()

    summary = RewriteSummary(
        written=rewrite_pass.written,
        dropped=rewrite_pass.dropped,
        unmatched=rewrite_pass.unmatched,
    )
    if summary.unmatched:
        logger.debug("ignored unknown index(es): %s", sorted(summary.unmatched))
    logger.info(
        "rewrote %s: %d kept, %d dropped", path, summary.written, summary.dropped
    )
    return summary


def remove_records(path: str, indexes: AbstractSet[int]) -> RewriteSummary:
    return rewrite_file(path, indexes, False, drop)


def mark_records(
    path: str, indexes: AbstractSet[int], select_all: bool = False
) -> RewriteSummary:
    return rewrite_file(path, indexes, select_all, set_done(True))


def unmark_records(
    path: str, indexes: AbstractSet[int], select_all: bool = False
) -> RewriteSummary:
    return rewrite_file(path, indexes, select_all, set_done(False))


def reset_records(path: str) -> RewriteSummary:
    return rewrite_file(path, frozenset(), True, drop)
