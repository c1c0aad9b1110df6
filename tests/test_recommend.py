from collections import Counter
from dataclasses import dataclass

import numpy as np
import pytest

from todo_recommender import config
from todo_recommender.recommend import recommend, recommend_distribution


@dataclass
class Item:
    name: str
    priority: int


def test_returns_one_of_the_inputs_by_identity():
    items = [Item("a", 3), Item("b", 1), Item("c", 8)]
    rng = np.random.default_rng(7)
    for _ in range(200):
        chosen = recommend(items, rng=rng)
        assert any(chosen is it for it in items)


def test_single_candidate_always_wins():
    only = Item("only", 5)
    for r in np.linspace(0.0, 0.999999, 50):
        assert recommend([only], draw=float(r)) is only


def test_two_item_example_with_fixed_draws():
    a, b = Item("A", 2), Item("B", 5)
    assert recommend_distribution([a, b]) == [0.8, 0.2]
    assert recommend([a, b], draw=0.1) is a
    # falls through the sorted walk -> first of the original list
    assert recommend([a, b], draw=0.95) is a
    assert recommend([b, a], draw=0.95) is b


def test_zero_beats_ten():
    urgent, relaxed = Item("urgent", 0), Item("relaxed", 10)
    p_urgent, p_relaxed = recommend_distribution([urgent, relaxed])
    assert p_urgent > p_relaxed > 0


def test_equal_priorities_uniform_under_cumulative_sampler():
    items = [Item(str(i), 4) for i in range(4)]
    assert recommend_distribution(items) == [0.25] * 4

    rng = np.random.default_rng(1234)
    counts = Counter(recommend(items, rng=rng, strategy="cumulative").name for _ in range(4000))
    assert set(counts) == {"0", "1", "2", "3"}
    for n in counts.values():
        assert abs(n - 1000) < 150


def test_urgent_items_win_more_often():
    # least urgent first so the fallback path can still pick it
    items = [Item("later", 3), Item("urgent", 0)]
    rng = np.random.default_rng(99)
    counts = Counter(recommend(items, rng=rng).name for _ in range(2000))
    assert counts["urgent"] > counts["later"] > 0


def test_strategy_defaults_to_config(monkeypatch):
    items = [Item("A", 2), Item("B", 5)]
    monkeypatch.setattr(config, "SAMPLER_STRATEGY", "cumulative")
    # cumulative: 0.85 lands in B's slice
    assert recommend(items, draw=0.85).name == "B"
    monkeypatch.setattr(config, "SAMPLER_STRATEGY", "marginal")
    assert recommend(items, draw=0.85).name == "A"


def test_unknown_strategy_raises():
    with pytest.raises(ValueError):
        recommend([Item("x", 1)], draw=0.5, strategy="nope")


def test_input_is_not_mutated():
    items = [Item("a", 3), Item("b", 1)]
    recommend(items, draw=0.3)
    assert [(i.name, i.priority) for i in items] == [("a", 3), ("b", 1)]
