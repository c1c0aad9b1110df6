"""
Single-draw selection over a scored candidate list.

Two rules are available:

* ``marginal`` (default) walks the candidates by descending probability and
  returns the first one whose *own* probability is at least the draw. If none
  qualifies it falls back to the first entry of the unsorted list. This is
  not an exact weighted draw: it favours high-probability candidates more
  strongly than their weights alone would. It is the historical behaviour of
  the recommender and stays the default.
* ``cumulative`` is the textbook inverse-CDF draw over a running sum, in
  input order. Opt in explicitly via ``strategy="cumulative"`` or
  ``TODO_SAMPLER=cumulative``.

Both take the draw as a parameter so tests can pin it.
"""

from __future__ import annotations

from typing import Callable, Dict, Sequence

from loguru import logger

from .config import SAMPLER_CUMULATIVE, SAMPLER_MARGINAL
from .pipeline_types import ScoredCandidate


def sort_by_probability(scored: Sequence[ScoredCandidate]) -> list[ScoredCandidate]:
    """Descending probability; ties keep their input order (stable sort)."""
    return sorted(scored, key=lambda s: -s.probability)


def sample_index(scored: Sequence[ScoredCandidate], draw: float) -> int:
    """
    Marginal rule. Returns the candidate index chosen for ``draw`` in [0, 1).
    """
    for entry in sort_by_probability(scored):
        if draw <= entry.probability:
            return entry.index

    fallback = scored[0].index
    logger.debug("No candidate matched draw={:.6f}; falling back to index {}", draw, fallback)
    return fallback


def sample_index_cumulative(scored: Sequence[ScoredCandidate], draw: float) -> int:
    """
    Cumulative rule: first candidate whose running probability total exceeds
    ``draw``. Rounding can leave the total just under 1, in which case the
    last candidate is returned.
    """
    running = 0.0
    for entry in scored:
        running += entry.probability
        if draw < running:
            return entry.index
    return scored[-1].index


SAMPLER_STRATEGIES: Dict[str, Callable[[Sequence[ScoredCandidate], float], int]] = {
    SAMPLER_MARGINAL: sample_index,
    SAMPLER_CUMULATIVE: sample_index_cumulative,
}


def get_sampler(name: str) -> Callable[[Sequence[ScoredCandidate], float], int]:
    try:
        return SAMPLER_STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown sampler strategy {name!r}. Expected one of {sorted(SAMPLER_STRATEGIES)}"
        ) from None
