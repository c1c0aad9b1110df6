"""
FastAPI application for the todo list.

- CRUD plus check/uncheck over the file-backed store
- GET /recommend picks one open todo, weighted towards urgent ones
- An empty open list is answered with a message, never an error
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import ValidationError

from . import config
from .config import (
    NO_OPEN_TODOS_MESSAGE,
    HealthResponse,
    RecommendResponse,
    TodoIn,
    TodoOut,
    TodoUpdate,
)
from .recommend import recommend, recommend_distribution
from .sampling import get_sampler
from .todos import TodoNotFoundError, TodoStore


# -----------------------
# Store dependency
# -----------------------

_store: Optional[TodoStore] = None


def get_store() -> TodoStore:
    global _store
    if _store is None:
        _store = TodoStore(config.TODOS_PATH)
    return _store


# -----------------------
# FastAPI app + startup
# -----------------------

app = FastAPI(title="Todo Recommender")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup_event() -> None:
    config.configure_file_logging()
    try:
        get_sampler(config.SAMPLER_STRATEGY)
    except ValueError as e:
        logger.error("Invalid TODO_SAMPLER setting: {}", e)
        raise
    store = get_store()
    logger.info("Todo store ready at {} ({} todos)", store.path, len(store.list_todos()))
    logger.info("Sampler strategy: {}", config.SAMPLER_STRATEGY)


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


# -----------------------
# Todos
# -----------------------

@app.get("/todos", response_model=List[TodoOut])
def list_todos(
    type: Optional[str] = Query(default=None, description="open|done"),
    store: TodoStore = Depends(get_store),
):
    try:
        return store.list_todos(type)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/todos", response_model=TodoOut, status_code=201)
def create_todo(payload: TodoIn, store: TodoStore = Depends(get_store)):
    return store.create_todo(payload)


@app.get("/todos/{todo_id}", response_model=TodoOut)
def get_todo(todo_id: int, store: TodoStore = Depends(get_store)):
    try:
        return store.get_todo(todo_id)
    except TodoNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.put("/todos/{todo_id}", response_model=TodoOut)
def update_todo(todo_id: int, payload: TodoUpdate, store: TodoStore = Depends(get_store)):
    try:
        return store.update_todo(todo_id, payload)
    except TodoNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors())


@app.delete("/todos/{todo_id}", response_model=TodoOut)
def delete_todo(todo_id: int, store: TodoStore = Depends(get_store)):
    try:
        return store.delete_todo(todo_id)
    except TodoNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post("/todos/{todo_id}/check")
def check_todo(todo_id: int, store: TodoStore = Depends(get_store)):
    store.check(todo_id)
    return {"ok": True}


@app.post("/todos/{todo_id}/uncheck")
def uncheck_todo(todo_id: int, store: TodoStore = Depends(get_store)):
    store.uncheck(todo_id)
    return {"ok": True}


# -----------------------
# Recommendation
# -----------------------

@app.get("/recommend", response_model=RecommendResponse)
def recommend_todo(
    explain: bool = False,
    strategy: Optional[str] = Query(default=None, description="marginal|cumulative"),
    store: TodoStore = Depends(get_store),
) -> RecommendResponse:
    name = strategy or config.SAMPLER_STRATEGY
    try:
        get_sampler(name)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    # one read: the draw and the explanation describe the same list
    open_todos = store.list_todos(config.LIST_KIND_OPEN)
    if not open_todos:
        return RecommendResponse(todo=None, message=NO_OPEN_TODOS_MESSAGE)

    todo = recommend(open_todos, strategy=name)

    probabilities = None
    if explain:
        probabilities = {
            t.id: p for t, p in zip(open_todos, recommend_distribution(open_todos))
        }
    return RecommendResponse(todo=todo, probabilities=probabilities)
