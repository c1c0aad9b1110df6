"""Typed containers shared across the recommendation stages.

Candidates themselves are never copied: both containers point back into the
caller's sequence by position.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Union


class Candidate(Protocol):
    """Anything with a readable non-negative integer ``priority``."""

    priority: int


# Store rows may also arrive as plain dicts carrying a "priority" key.
CandidateLike = Union[Candidate, Mapping[str, Any]]


@dataclass(frozen=True)
class WeightedCandidate:
    """Scorer output: position in the candidate list plus its urgency."""

    index: int
    urgency: float


@dataclass(frozen=True)
class ScoredCandidate:
    """Normalizer output: position in the candidate list plus its probability."""

    index: int
    probability: float
