# todo_recommender/cli.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger
from pydantic import ValidationError

from . import config
from .config import LIST_KINDS, NO_OPEN_TODOS_MESSAGE, TodoOut
from .sampling import SAMPLER_STRATEGIES
from .todos import TodoNotFoundError, TodoStore


def _fmt(todo: TodoOut) -> str:
    mark = "x" if todo.done else " "
    return f"[{mark}] #{todo.id:<4} p{todo.priority:<3} {todo.title}"


def _cmd_list(store: TodoStore, args) -> int:
    todos = store.list_todos(args.type)
    if not todos:
        print("No todos.")
    for t in todos:
        print(_fmt(t))
    return 0


def _cmd_add(store: TodoStore, args) -> int:
    todo = store.create_todo({"title": args.title, "priority": args.priority})
    print(f"Added {_fmt(todo)}")
    return 0


def _cmd_check(store: TodoStore, args) -> int:
    store.check(args.id)
    return 0


def _cmd_uncheck(store: TodoStore, args) -> int:
    store.uncheck(args.id)
    return 0


def _cmd_delete(store: TodoStore, args) -> int:
    todo = store.delete_todo(args.id)
    print(f"Deleted {_fmt(todo)}")
    return 0


def _cmd_recommend(store: TodoStore, args) -> int:
    todo = store.recommended(draw=args.draw, strategy=args.strategy)
    if todo is None:
        print(NO_OPEN_TODOS_MESSAGE)
        return 0
    print(_fmt(todo))
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="todo-recommender")
    ap.add_argument("--store", type=Path, default=config.TODOS_PATH,
                    help="Path to the todo CSV file")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="List todos in priority order")
    p.add_argument("--type", choices=LIST_KINDS, default=None)
    p.set_defaults(func=_cmd_list)

    p = sub.add_parser("add", help="Create a todo")
    p.add_argument("title")
    p.add_argument("--priority", type=int, required=True)
    p.set_defaults(func=_cmd_add)

    for name, func, help_ in [
        ("check", _cmd_check, "Mark a todo as done"),
        ("uncheck", _cmd_uncheck, "Mark a todo as not done"),
        ("delete", _cmd_delete, "Delete a todo"),
    ]:
        p = sub.add_parser(name, help=help_)
        p.add_argument("id", type=int)
        p.set_defaults(func=func)

    p = sub.add_parser("recommend", help="Suggest one open todo")
    p.add_argument("--draw", type=float, default=None,
                   help="Fixed draw in [0, 1) instead of a random one")
    p.add_argument("--strategy", choices=sorted(SAMPLER_STRATEGIES), default=None)
    p.set_defaults(func=_cmd_recommend)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config.configure_file_logging()
    try:
        store = TodoStore(args.store)
        return args.func(store, args)
    except TodoNotFoundError as e:
        print(str(e), file=sys.stderr)
        return 1
    except ValidationError as e:
        logger.debug("Rejected input: {}", e)
        for err in e.errors():
            field = ".".join(str(x) for x in err["loc"])
            print(f"Invalid {field}: {err['msg']}", file=sys.stderr)
        return 1
    except ValueError as e:
        # bad TODO_SAMPLER setting or unreadable todo file
        print(str(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
