from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .pipeline_types import ScoredCandidate, WeightedCandidate


def normalize_urgency(weighted: Sequence[WeightedCandidate]) -> List[ScoredCandidate]:
    """
    Turn urgencies into probabilities: ``urgency / sum(urgencies)``.

    The sum runs over exactly the list given (no filtering) and there is no
    second renormalisation pass, so the result sums to 1 only within float
    tolerance. Order and indices are preserved.
    """
    urgencies = np.array([w.urgency for w in weighted], dtype=np.float64)
    total = float(urgencies.sum())
    probs = urgencies / total
    return [
        ScoredCandidate(index=w.index, probability=float(p))
        for w, p in zip(weighted, probs)
    ]
