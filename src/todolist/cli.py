"""Todo list command-line interface."""

import argparse
import logging
import os
import sys
from typing import Iterable, List, Optional

from .errors import TodoError
from .models import DEFAULT_FILENAME, Record, default_path
from .storage import (
    append_records,
    check_integrity,
    iter_records,
    mark_records,
    remove_records,
    reset_records,
    unmark_records,
)

logger = logging.getLogger("todolist.cli")


def format_record(record: Record) -> str:
    return f"{record.index} {record.text} {'Y' if record.done else 'X'}"


def print_list(records: Iterable[Record]) -> None:
    """Print records one per line; Y marks done, X marks open."""
    empty = True
    for record in records:
        empty = False
        print(format_record(record))
    if empty:
        print("(no tasks yet)")


def index_arg(value: str) -> int:
    try:
        index = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid index: {value!r}") from None
    if index < 0:
        raise argparse.ArgumentTypeError(f"invalid index: {value!r}")
    return index


def text_arg(value: str) -> str:
    if not value.strip():
        raise argparse.ArgumentTypeError("task text must not be empty")
    return value


def cmd_list(args: argparse.Namespace) -> None:
    print_list(iter_records(args.file))


def cmd_add(args: argparse.Namespace) -> None:
    append_records(args.file, args.texts, args.next_index)


def cmd_rm(args: argparse.Namespace) -> None:
    remove_records(args.file, set(args.indexes))


def cmd_done(args: argparse.Namespace) -> None:
    mark_records(args.file, set(args.indexes), args.all)


def cmd_undo(args: argparse.Namespace) -> None:
    unmark_records(args.file, set(args.indexes), args.all)


def cmd_reset(args: argparse.Namespace) -> None:
    reset_records(args.file)


def cmd_path(args: argparse.Namespace) -> None:
    print(os.path.abspath(args.file))


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    p = argparse.ArgumentParser(prog="todo", description="Simple CSV-backed todo list.")
    p.add_argument(
        "-f",
        "--file",
        default=None,
        help=f"Path to the list file (default: $HOME/{DEFAULT_FILENAME})",
    )
    p.add_argument(
        "-d",
        "--debug",
        action="count",
        default=0,
        help="Turn debugging information on (repeat for more)",
    )
    p.set_defaults(func=cmd_list)
    sub = p.add_subparsers(dest="cmd")

    s_add = sub.add_parser("add", help="Add tasks to the list")
    s_add.add_argument("texts", nargs="+", type=text_arg, metavar="TEXT")
    s_add.set_defaults(func=cmd_add)

    s_rm = sub.add_parser("rm", help="Remove tasks by index")
    s_rm.add_argument("indexes", nargs="+", type=index_arg, metavar="INDEX")
    s_rm.set_defaults(func=cmd_rm)

    s_done = sub.add_parser("done", help="Mark tasks as done")
    s_done.add_argument("indexes", nargs="*", type=index_arg, metavar="INDEX")
    s_done.add_argument("-a", "--all", action="store_true", help="Mark every task done")
    s_done.set_defaults(func=cmd_done)

    s_undo = sub.add_parser("undo", help="Mark tasks as not done")
    s_undo.add_argument("indexes", nargs="*", type=index_arg, metavar="INDEX")
    s_undo.add_argument("-a", "--all", action="store_true", help="Mark every task not done")
    s_undo.set_defaults(func=cmd_undo)

    s_reset = sub.add_parser("reset", help="Remove every task")
    s_reset.set_defaults(func=cmd_reset)

    s_path = sub.add_parser("path", help="Show the absolute path to the list file")
    s_path.set_defaults(func=cmd_path)

    return p


def log_level(debug: int) -> int:
    if debug >= 2:
        return logging.DEBUG
    if debug == 1:
        return logging.INFO
    return logging.WARNING


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point. Lists the tasks if no subcommand is given."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=log_level(args.debug), format="%(name)s %(message)s")

    try:
        if args.file is None:
            args.file = default_path()
        args.next_index = check_integrity(args.file)
        logger.debug("%s: next index %d", args.file, args.next_index)
        args.func(args)
    except (TodoError, OSError) as exc:
        sys.exit(f"{parser.prog}: error: {exc}")


if __name__ == "__main__":
    main()
