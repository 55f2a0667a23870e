"""Todo list algorithm helpers (pure functions, no I/O)."""

from dataclasses import dataclass, replace
from typing import AbstractSet, Callable, FrozenSet, Iterable, Iterator, Optional, Union

from .errors import IndexIntegrityError
from .models import Record


@dataclass(frozen=True)
class Drop:
    """Row action: remove the record from the list."""


@dataclass(frozen=True)
class Replace:
    """Row action: keep the record, overriding any field given here."""

    text: Optional[str] = None
    done: Optional[bool] = None


RowAction = Union[Drop, Replace]
RowTransform = Callable[[int, Record], RowAction]

DROP = Drop()


def drop(new_index: int, record: Record) -> RowAction:
    return DROP


def set_done(flag: bool) -> RowTransform:
    """Return a transform that keeps the record with done forced to flag."""

    def transform(new_index: int, record: Record) -> RowAction:
        return Replace(done=flag)

    return transform


def check_sequence(records: Iterable[Record]) -> int:
    """Walk records in order, requiring indexes 1, 2, 3, ...

    Returns the next free index (count + 1). Raises IndexIntegrityError on the
    first record whose index differs from its position.
    """
    expected = 1
    for record in records:
        if record.index != expected:
            raise IndexIntegrityError(expected, record.index)
        expected += 1
    return expected


class RewritePass:
    """One selective rewrite over a record sequence.

    A record is selected if select_all is set, or if its original index is
    still among the remaining targets (each target matches at most once).
    Selected records go through the transform; everything that survives is
    renumbered from 1 so no gaps are left behind.
    """

    def __init__(
        self,
        targets: AbstractSet[int],
        select_all: bool,
        transform: RowTransform,
    ) -> None:
        self.remaining = set(targets)
        self.select_all = select_all
        self.transform = transform
        self.written = 0
        self.dropped = 0

    @property
    def unmatched(self) -> FrozenSet[int]:
        """Targets that never matched a record (meaningless with select_all)."""
        if self.select_all:
            return frozenset()
        return frozenset(self.remaining)

    def _selected(self, record: Record) -> bool:
        if self.select_all:
            return True
        if record.index in self.remaining:
            self.remaining.discard(record.index)
            return True
        return False

    def run(self, records: Iterable[Record]) -> Iterator[Record]:
        counter = 1
        for record in records:
            if self._selected(record):
                action = self.transform(counter, record)
                if isinstance(action, Drop):
                    self.dropped += 1
                    continue
                record = replace(
                    record,
                    text=record.text if action.text is None else action.text,
                    done=record.done if action.done is None else action.done,
                )
            yield replace(record, index=counter)
            self.written += 1
            counter += 1
