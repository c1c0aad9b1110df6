"""
Urgency scoring for recommendation candidates.

Each candidate's integer priority is mapped onto a linear urgency scale
relative to the other candidates in the same call:

    urgency = (max_p - p + 1) / (max_p - min_p + 1)

The most urgent item (smallest priority) gets exactly ``1.0`` and the least
urgent one gets ``1 / (max_p - min_p + 1)``, so nothing ever drops to zero.
When every priority is the same all urgencies are ``1.0``.

The caller guarantees a non-empty list of non-negative integer priorities;
neither is checked here.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import List, Sequence

import numpy as np

from .pipeline_types import CandidateLike, WeightedCandidate


def _priority(candidate: CandidateLike) -> int:
    if isinstance(candidate, Mapping):
        return candidate["priority"]
    return candidate.priority


def priorities_of(candidates: Sequence[CandidateLike]) -> np.ndarray:
    """Read the ``priority`` of every candidate, in input order."""
    return np.array([_priority(c) for c in candidates], dtype=np.int64)


def urgency_weights(priorities: np.ndarray) -> np.ndarray:
    """Vectorised urgency for an array of priorities."""
    max_p = int(priorities.max())
    min_p = int(priorities.min())
    return (max_p - priorities + 1) / float(max_p - min_p + 1)


def score_urgency(candidates: Sequence[CandidateLike]) -> List[WeightedCandidate]:
    """
    Return one :class:`WeightedCandidate` per input candidate, same order.
    """
    weights = urgency_weights(priorities_of(candidates))
    return [WeightedCandidate(index=i, urgency=float(w)) for i, w in enumerate(weights)]
