"""todolist - a CSV-backed todo list with a gap-free index."""

__version__ = "0.1.0"

from .errors import TodoError, ConfigError, IndexIntegrityError, MalformedRecordError
from .models import Record, DEFAULT_FILENAME, default_path
from .storage import (
    check_integrity,
    iter_records,
    append_records,
    begin_rewrite,
    rewrite_file,
    remove_records,
    mark_records,
    unmark_records,
    reset_records,
)

__all__ = [
    "TodoError",
    "ConfigError",
    "IndexIntegrityError",
    "MalformedRecordError",
    "Record",
    "DEFAULT_FILENAME",
    "default_path",
    "check_integrity",
    "iter_records",
    "append_records",
    "begin_rewrite",
    "rewrite_file",
    "remove_records",
    "mark_records",
    "unmark_records",
    "reset_records",
]
