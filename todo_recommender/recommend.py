"""
Weighted todo recommendation.

Given the open todos (pre-filtered by the caller), pick one at random while
favouring urgent items:

    candidates -> score_urgency -> normalize_urgency -> sampler -> candidate

Nothing is cached between calls and nothing is mutated; the returned object is
the very candidate that was passed in. The list must be non-empty; callers
check that first and show their own "nothing to recommend" message.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
from loguru import logger

from . import config
from .normalize import normalize_urgency
from .pipeline_types import CandidateLike
from .sampling import get_sampler
from .scoring import score_urgency

# ---- process-wide entropy source (created once, never reseeded) ----
_RNG: Optional[np.random.Generator] = None


def _default_rng() -> np.random.Generator:
    global _RNG
    if _RNG is None:
        _RNG = np.random.default_rng()
    return _RNG


def draw_uniform(rng: Optional[np.random.Generator] = None) -> float:
    """One uniform value in [0, 1)."""
    gen = rng if rng is not None else _default_rng()
    return float(gen.random())


def recommend_distribution(candidates: Sequence[CandidateLike]) -> List[float]:
    """Selection probability of every candidate, in input order."""
    return [s.probability for s in normalize_urgency(score_urgency(candidates))]


def recommend(
    candidates: Sequence[CandidateLike],
    draw: Optional[float] = None,
    rng: Optional[np.random.Generator] = None,
    strategy: Optional[str] = None,
) -> CandidateLike:
    """
    Return one of ``candidates``, biased towards lower ``priority`` values.

    Parameters
    ----------
    candidates :
        Non-empty sequence of objects (or mappings) exposing ``priority``.
    draw :
        Fixed value in [0, 1) to use instead of a random one.
    rng :
        Generator to read the draw from; defaults to a shared process-wide one.
    strategy :
        Sampler name (``"marginal"`` or ``"cumulative"``); defaults to
        ``config.SAMPLER_STRATEGY``.
    """
    sampler = get_sampler(strategy or config.SAMPLER_STRATEGY)

    scored = normalize_urgency(score_urgency(candidates))
    r = draw if draw is not None else draw_uniform(rng)
    index = sampler(scored, r)

    logger.debug(
        "Recommended candidate {} of {} (draw={:.4f}, p={:.4f})",
        index, len(scored), r, scored[index].probability,
    )
    return candidates[index]
