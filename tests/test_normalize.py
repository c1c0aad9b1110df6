import math
from dataclasses import dataclass

from todo_recommender.normalize import normalize_urgency
from todo_recommender.pipeline_types import WeightedCandidate
from todo_recommender.scoring import score_urgency


@dataclass(frozen=True)
class Item:
    name: str
    priority: int


def test_normalize_two_items_example():
    scored = normalize_urgency(score_urgency([Item("A", 2), Item("B", 5)]))

    assert scored[0].probability == 0.8
    assert scored[1].probability == 0.2


def test_probabilities_sum_to_one():
    items = [Item(str(i), p) for i, p in enumerate([0, 3, 3, 7, 12, 1])]
    scored = normalize_urgency(score_urgency(items))

    assert math.isclose(sum(s.probability for s in scored), 1.0, abs_tol=1e-12)
    assert all(0.0 < s.probability <= 1.0 for s in scored)


def test_equal_priorities_are_uniform():
    n = 7
    scored = normalize_urgency(score_urgency([Item(str(i), 2) for i in range(n)]))
    for s in scored:
        assert math.isclose(s.probability, 1.0 / n)


def test_no_filtering_and_indices_preserved():
    weighted = [WeightedCandidate(index=3, urgency=0.5), WeightedCandidate(index=1, urgency=1.5)]
    scored = normalize_urgency(weighted)

    assert [s.index for s in scored] == [3, 1]
    assert scored[0].probability == 0.25
    assert scored[1].probability == 0.75


def test_scoring_and_normalising_twice_is_bit_identical():
    items = (Item("a", 1), Item("b", 4), Item("c", 9), Item("d", 4))
    first = [s.probability for s in normalize_urgency(score_urgency(items))]
    second = [s.probability for s in normalize_urgency(score_urgency(items))]
    assert first == second
