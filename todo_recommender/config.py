from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, Field, field_validator


# ---------------------------
# Paths
# ---------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[1]

DATA_DIR = Path(os.getenv("TODO_DATA_DIR", str(PROJECT_ROOT / "data")))
TODOS_PATH = Path(os.getenv("TODOS_PATH", str(DATA_DIR / "todos.csv")))


# ---------------------------
# Todo fields
# ---------------------------

TITLE_MAX_CHARS = 500
PRIORITY_MIN = 0

TODO_COLUMNS: List[str] = ["id", "title", "priority", "done"]

# list_todos(kind) filters
LIST_KIND_OPEN = "open"
LIST_KIND_DONE = "done"
LIST_KINDS: List[str] = [LIST_KIND_OPEN, LIST_KIND_DONE]


# ---------------------------
# Recommendation settings
# ---------------------------

SAMPLER_MARGINAL = "marginal"      # compare each item's own probability to the draw
SAMPLER_CUMULATIVE = "cumulative"  # classic running-sum weighted draw

SAMPLER_STRATEGY = os.getenv("TODO_SAMPLER", SAMPLER_MARGINAL)

NO_OPEN_TODOS_MESSAGE = "No open todos to recommend"


# ---------------------------
# Logging / observability
# ---------------------------

LOG_DIR = PROJECT_ROOT / "logs"
LOG_FILE_ENABLED = os.getenv("TODO_LOG_FILE", "0") == "1"
LOG_FILE_PATH = LOG_DIR / "todo_recommender.log"


def configure_file_logging() -> Optional[int]:
    """
    Add a rotating loguru file sink under LOG_DIR when TODO_LOG_FILE=1.

    Returns the sink id, or None when file logging is off.
    """
    if not LOG_FILE_ENABLED:
        return None
    LOG_DIR.mkdir(exist_ok=True)
    return logger.add(str(LOG_FILE_PATH), rotation="1 MB", retention=5, level="INFO")


# ---------------------------
# Pydantic models shared around the app
# ---------------------------

class TodoIn(BaseModel):
    """
    Payload for creating a todo.
    """

    title: str = Field(min_length=1, max_length=TITLE_MAX_CHARS)
    priority: int = Field(ge=PRIORITY_MIN)
    done: bool = False

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v


class TodoUpdate(BaseModel):
    """
    Partial update; only the fields that are set get written.
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=TITLE_MAX_CHARS)
    priority: Optional[int] = Field(default=None, ge=PRIORITY_MIN)
    done: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v


class TodoOut(BaseModel):
    """
    Canonical schema for a stored todo, as returned by the store and the API.
    """

    id: int
    title: str
    priority: int = Field(ge=PRIORITY_MIN)
    done: bool = False


class RecommendResponse(BaseModel):
    """
    Response body for GET /recommend.

    ``todo`` is None when nothing is open; ``probabilities`` is only filled
    when the caller asks for an explanation (todo id -> probability).
    """

    todo: Optional[TodoOut] = None
    message: Optional[str] = None
    probabilities: Optional[Dict[int, float]] = None


class HealthResponse(BaseModel):
    """
    Response body for GET /health.
    """

    status: str
