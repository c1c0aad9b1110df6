"""
File-backed todo store.

Todos live in a small pandas DataFrame that is written back to CSV after
every mutation. The store is the only place that knows which todos are open;
it hands that list to :func:`recommend.recommend` and short-circuits when the
list is empty.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import numpy as np
import pandas as pd
from loguru import logger

from .config import (
    LIST_KIND_DONE,
    LIST_KIND_OPEN,
    LIST_KINDS,
    TODO_COLUMNS,
    TODOS_PATH,
    TodoIn,
    TodoOut,
    TodoUpdate,
)
from .recommend import recommend

_DTYPES: Dict[str, str] = {
    "id": "int64",
    "title": "object",
    "priority": "int64",
    "done": "bool",
}


class TodoNotFoundError(KeyError):
    """Raised when a todo id is not in the store."""

    def __init__(self, todo_id: int):
        super().__init__(todo_id)
        self.todo_id = todo_id

    def __str__(self) -> str:
        return f"Todo {self.todo_id} not found"


def _empty_frame() -> pd.DataFrame:
    return pd.DataFrame({c: pd.Series(dtype=_DTYPES[c]) for c in TODO_COLUMNS})


def _row_to_todo(row: Mapping[str, Any]) -> TodoOut:
    return TodoOut(
        id=int(row["id"]),
        title=str(row["title"]),
        priority=int(row["priority"]),
        done=bool(row["done"]),
    )


class TodoStore:
    def __init__(self, path: Path = TODOS_PATH):
        self.path = Path(path)
        self._lock = threading.RLock()
        self.seq_path = self.path.with_name(self.path.name + ".seq.json")
        self._df = self._load()
        self._last_id = self._load_last_id()

    # ---------------------------
    # IO helpers
    # ---------------------------

    def _load(self) -> pd.DataFrame:
        if not self.path.exists():
            logger.info("No todo file at {}; starting empty", self.path)
            return _empty_frame()

        df = pd.read_csv(self.path, keep_default_na=False, dtype={"title": str})
        missing = [c for c in TODO_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"Todo file {self.path} is missing columns: {missing}")

        df = df[TODO_COLUMNS].copy()
        # CSV round-trips booleans as text when the frame was empty on write
        df["done"] = df["done"].map(lambda v: str(v).strip().lower() in {"true", "1"})
        df = df.astype(_DTYPES)
        logger.info("Loaded {} todos from {}", len(df), self.path)
        return df

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._df.to_csv(self.path, index=False)
        logger.debug("Wrote {} todos to {}", len(self._df), self.path)

    def _mask(self, todo_id: int) -> pd.Series:
        return self._df["id"] == int(todo_id)

    def _load_last_id(self) -> int:
        """Highest id ever handed out; ids of deleted todos are never reused."""
        last = 0 if self._df.empty else int(self._df["id"].max())
        if self.seq_path.exists():
            with self.seq_path.open("r", encoding="utf-8") as f:
                last = max(last, int(json.load(f)["last_id"]))
        return last

    def _save_last_id(self) -> None:
        self.seq_path.parent.mkdir(parents=True, exist_ok=True)
        with self.seq_path.open("w", encoding="utf-8") as f:
            json.dump({"last_id": self._last_id}, f)

    def _next_id(self) -> int:
        self._last_id += 1
        self._save_last_id()
        return self._last_id

    # ---------------------------
    # Queries
    # ---------------------------

    def list_todos(self, kind: Optional[str] = None) -> List[TodoOut]:
        """
        All todos ordered by priority (ties by id); ``kind`` is
        ``"open"``, ``"done"`` or None for everything.
        """
        if kind is not None and kind not in LIST_KINDS:
            raise ValueError(f"Unknown todo list kind {kind!r}. Expected one of {LIST_KINDS}")

        with self._lock:
            df = self._df
            if kind == LIST_KIND_OPEN:
                df = df[~df["done"]]
            elif kind == LIST_KIND_DONE:
                df = df[df["done"]]
            df = df.sort_values(["priority", "id"], kind="mergesort")
            return [_row_to_todo(r) for r in df.to_dict("records")]

    def get_todo(self, todo_id: int) -> TodoOut:
        with self._lock:
            rows = self._df[self._mask(todo_id)]
            if rows.empty:
                raise TodoNotFoundError(todo_id)
            return _row_to_todo(rows.iloc[0])

    # ---------------------------
    # Mutations
    # ---------------------------

    def create_todo(self, attrs: Union[TodoIn, Mapping[str, Any]]) -> TodoOut:
        payload = attrs if isinstance(attrs, TodoIn) else TodoIn.model_validate(attrs)
        with self._lock:
            todo = TodoOut(id=self._next_id(), **payload.model_dump())
            row = pd.DataFrame([todo.model_dump()], columns=TODO_COLUMNS).astype(_DTYPES)
            if self._df.empty:
                self._df = row
            else:
                self._df = pd.concat([self._df, row], ignore_index=True)
            self._save()
        logger.info("Created todo {} (priority {})", todo.id, todo.priority)
        return todo

    def update_todo(self, todo_id: int, attrs: Union[TodoUpdate, Mapping[str, Any]]) -> TodoOut:
        payload = attrs if isinstance(attrs, TodoUpdate) else TodoUpdate.model_validate(attrs)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            mask = self._mask(todo_id)
            if not mask.any():
                raise TodoNotFoundError(todo_id)
            for field, value in changes.items():
                self._df.loc[mask, field] = value
            self._df = self._df.astype(_DTYPES)
            self._save()
            return self.get_todo(todo_id)

    def delete_todo(self, todo_id: int) -> TodoOut:
        with self._lock:
            todo = self.get_todo(todo_id)
            self._df = self._df[~self._mask(todo_id)].reset_index(drop=True)
            self._save()
        logger.info("Deleted todo {}", todo_id)
        return todo

    def _set_done(self, todo_id: int, done: bool) -> None:
        with self._lock:
            mask = self._mask(todo_id)
            if not mask.any():
                # bulk-update semantics: nothing matched, nothing changed
                logger.warning("Todo {} not found; {} is a no-op", todo_id, "check" if done else "uncheck")
                return
            self._df.loc[mask, "done"] = np.bool_(done)
            self._save()

    def check(self, todo_id: int) -> None:
        """Mark a todo as done."""
        self._set_done(todo_id, True)

    def uncheck(self, todo_id: int) -> None:
        """Mark a todo as not done."""
        self._set_done(todo_id, False)

    # ---------------------------
    # Recommendation
    # ---------------------------

    def recommended(
        self,
        draw: Optional[float] = None,
        rng: Optional[np.random.Generator] = None,
        strategy: Optional[str] = None,
    ) -> Optional[TodoOut]:
        """
        Pick one open todo, or None when nothing is open.
        """
        open_todos = self.list_todos(LIST_KIND_OPEN)
        if not open_todos:
            return None
        return recommend(open_todos, draw=draw, rng=rng, strategy=strategy)
