"""Domain models used throughout the search pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Optional, Tuple

TermVector = Tuple[int, ...]
RelationFunction = Callable[[TermVector], int]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def wrap_int64(value: int) -> int:
    """Reduce an integer into the signed 64-bit range (two's complement)."""
    return ((value - INT64_MIN) % 2**64) + INT64_MIN


def check_term(value) -> int:
    """Reject anything that is not a plain integer (bools and floats included)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Terms must be integers, got {type(value).__name__} {value!r}")
    return value


def as_term_vector(terms) -> TermVector:
    """Normalize any iterable of integers into a TermVector, checking the 64-bit range."""
    vector = tuple(check_term(term) for term in terms)
    for term in vector:
        if term < INT64_MIN or term > INT64_MAX:
            raise ValueError(f"Term {term} does not fit in a signed 64-bit integer")
    return vector


@dataclass(frozen=True)
class Relation:
    """A named recurrence relation consuming ``arity`` preceding terms.

    ``arity`` may be None for relations that accept whatever window length
    the initial terms imply; no length check is made for those.
    """

    name: str
    func: RelationFunction
    arity: Optional[int] = None
    description: str = ""

    def __call__(self, window: TermVector) -> int:
        return self.func(window)


@dataclass(frozen=True)
class SearchResult:
    """Statistics of a single run until the target value is observed."""

    cycle_length: int
    max_term: int

    def to_dict(self) -> Dict[str, int]:
        return {"cycle_length": self.cycle_length, "max_term": self.max_term}


class ResultTable(Mapping):
    """Read-only mapping from initial terms to their SearchResult.

    Iteration follows the lexicographic order of the keys.
    """

    def __init__(self, results: Optional[Mapping] = None):
        items = dict(results or {})
        self._results: Dict[TermVector, SearchResult] = {
            key: items[key] for key in sorted(items)
        }

    def __getitem__(self, key) -> SearchResult:
        if isinstance(key, list):
            key = tuple(key)
        return self._results[key]

    def __iter__(self) -> Iterator[TermVector]:
        return iter(self._results)

    def __len__(self) -> int:
        return len(self._results)

    def __repr__(self) -> str:
        return f"ResultTable({self._results!r})"

    def longest_cycle(self) -> Optional[Tuple[TermVector, SearchResult]]:
        if not self._results:
            return None
        return max(self._results.items(), key=lambda item: item[1].cycle_length)

    def highest_peak(self) -> Optional[Tuple[TermVector, SearchResult]]:
        if not self._results:
            return None
        return max(self._results.items(), key=lambda item: item[1].max_term)
