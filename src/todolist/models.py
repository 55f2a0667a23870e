"""Data models and constants for the todo list."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigError

DEFAULT_FILENAME = "todo_list.csv"


def default_path(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the default list path: $HOME/todo_list.csv"""
    env = os.environ if environ is None else environ
    home = env.get("HOME")
    if not home:
        raise ConfigError("HOME is not set; pass the list file with --file")
    return os.path.join(home, DEFAULT_FILENAME)


@dataclass(frozen=True)
class Record:
    """A single todo entry.

    Fields:
        index: 1-based position in the list (dense, renumbered on rewrite).
        text: Task description.
        done: Completion flag.
    """

    index: int
    text: str
    done: bool = False
