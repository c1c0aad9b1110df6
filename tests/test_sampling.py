import pytest

from todo_recommender.pipeline_types import ScoredCandidate
from todo_recommender.sampling import (
    get_sampler,
    sample_index,
    sample_index_cumulative,
    sort_by_probability,
)


def _scored(*probs):
    return [ScoredCandidate(index=i, probability=p) for i, p in enumerate(probs)]


def test_sort_is_descending_and_stable():
    scored = _scored(0.2, 0.4, 0.2, 0.2)
    order = [s.index for s in sort_by_probability(scored)]
    assert order == [1, 0, 2, 3]


def test_marginal_picks_first_sorted_entry_covering_the_draw():
    # A=0.8, B=0.2
    scored = _scored(0.8, 0.2)
    assert sample_index(scored, 0.1) == 0
    assert sample_index(scored, 0.8) == 0  # inclusive


def test_marginal_tests_own_probability_not_running_total():
    # sorted: idx1 (0.5), idx2 (0.3), idx0 (0.2)
    scored = _scored(0.2, 0.5, 0.3)
    # a running total would reach idx2 for 0.7; the marginal rule falls through
    assert sample_index(scored, 0.7) == 0
    assert sample_index(scored, 0.4) == 1


def test_marginal_fallback_is_first_of_unsorted_list():
    # least likely item is first in the input
    scored = _scored(0.2, 0.8)
    assert sample_index(scored, 0.95) == 0
    assert sample_index(scored, 0.5) == 1


def test_cumulative_walks_running_total_in_input_order():
    scored = _scored(0.8, 0.2)
    assert sample_index_cumulative(scored, 0.1) == 0
    assert sample_index_cumulative(scored, 0.85) == 1


def test_cumulative_rounding_tail_returns_last():
    scored = _scored(0.5, 0.4999999)
    assert sample_index_cumulative(scored, 0.99999999) == 1


def test_get_sampler_rejects_unknown_names():
    assert get_sampler("marginal") is sample_index
    assert get_sampler("cumulative") is sample_index_cumulative
    with pytest.raises(ValueError):
        get_sampler("roulette")
