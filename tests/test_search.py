import threading

import pytest

from syracuse.exceptions import (
    SearchCancelledError,
    StepLimitExceededError,
    UninitializedTermsError,
)
from syracuse.models import SearchResult
from syracuse.relations import get_relation
from syracuse.sequence import Sequence


def test_syracuse_from_six() -> None:
    seq = Sequence(get_relation("syracuse"))
    result = seq.search_until(1, [6])
    assert result == SearchResult(cycle_length=8, max_term=16)


def test_search_from_stored_terms() -> None:
    seq = Sequence(get_relation("syracuse"), [27])
    result = seq.search_until(1)
    assert result.cycle_length == 111
    assert result.max_term == 9232


def test_initial_term_equal_to_target() -> None:
    seq = Sequence(get_relation("syracuse"))
    assert seq.search_until(5, [5]) == SearchResult(cycle_length=0, max_term=5)


def test_search_counts_initial_terms_as_steps() -> None:
    seq = Sequence(get_relation("fibonacci"), [0, 1])
    # 0, 1, 1, 2, 3, 5, 8
    assert seq.search_until(8) == SearchResult(cycle_length=6, max_term=8)


def test_search_matches_term_at() -> None:
    seq = Sequence(get_relation("tribonacci"), [0, 0, 1])
    result = seq.search_until(81)
    assert seq.term_at(result.cycle_length) == 81
    assert result.max_term == max(seq.term_at(rank) for rank in range(result.cycle_length + 1))


def test_max_term_includes_target_when_largest() -> None:
    seq = Sequence(get_relation("fibonacci"), [1, 2])
    assert seq.search_until(13).max_term == 13


def test_search_without_terms_raises() -> None:
    seq = Sequence(get_relation("syracuse"))
    with pytest.raises(UninitializedTermsError):
        seq.search_until(1)


def test_step_limit() -> None:
    seq = Sequence(get_relation("fibonacci"), [1, 1])
    with pytest.raises(StepLimitExceededError):
        seq.search_until(4, max_steps=50)


def test_cancel_event_stops_search() -> None:
    seq = Sequence(get_relation("fibonacci"), [1, 1])
    event = threading.Event()
    event.set()
    with pytest.raises(SearchCancelledError):
        seq.search_until(4, cancel_event=event)
