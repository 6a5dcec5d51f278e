"""Recurrence sequence evaluation and until-value statistics."""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from typing import Callable, Dict, Iterable, Optional, Union

from .exceptions import (
    ArityMismatchError,
    SearchCancelledError,
    SearchTimeoutError,
    StepLimitExceededError,
    UninitializedTermsError,
)
from .models import (
    Relation,
    RelationFunction,
    ResultTable,
    SearchResult,
    TermVector,
    as_term_vector,
    check_term,
    wrap_int64,
)

logger = logging.getLogger(__name__)

ResultCallback = Callable[[TermVector, SearchResult], None]


class Sequence:
    """A sequence defined by recursion from initial terms and a relation.

    The relation receives the ``k`` preceding terms, oldest first, where
    ``k`` is the number of initial terms. For the Fibonacci sequence::

        seq = Sequence(lambda u: u[0] + u[1], [0, 1])
        seq.term_at(6)  # 8

    The relation is shared by every concurrent run of
    :meth:`search_many_until` and must therefore be a pure function.
    """

    def __init__(
        self,
        relation: Union[Relation, RelationFunction],
        initial_terms: Optional[Iterable[int]] = None,
    ):
        if not isinstance(relation, Relation):
            relation = Relation(name=getattr(relation, "__name__", "anonymous"), func=relation)
        self.relation = relation
        self._initial_terms: TermVector = as_term_vector(initial_terms or ())

    def __repr__(self) -> str:
        return f"Sequence(relation={self.relation.name!r}, initial_terms={self._initial_terms!r})"

    @property
    def initial_terms(self) -> TermVector:
        return self._initial_terms

    def with_initial_terms(self, initial_terms: Iterable[int]) -> "Sequence":
        """Replace the stored initial terms and return this same instance."""
        self._initial_terms = as_term_vector(initial_terms)
        return self

    # Evaluation ------------------------------------------------------------
    def _effective_terms(self, terms: Optional[Iterable[int]]) -> TermVector:
        vector = as_term_vector(terms) if terms is not None else ()
        if not vector:
            vector = self._initial_terms
        if not vector:
            raise UninitializedTermsError(
                "No initial terms: set them on the sequence or pass them explicitly"
            )
        arity = self.relation.arity
        if arity is not None and len(vector) != arity:
            raise ArityMismatchError(
                f"Relation '{self.relation.name}' expects {arity} initial terms, got {len(vector)}"
            )
        return vector

    def _apply(self, window: TermVector) -> int:
        return wrap_int64(check_term(self.relation(window)))

    def term_at(self, rank: int, terms: Optional[Iterable[int]] = None) -> int:
        """Return the term of the given rank.

        Terms past the initial ones are computed by plain recursion, without
        memoization, so the cost grows like ``k ** rank``. Use
        :meth:`search_until` to walk long prefixes of a sequence.

        The recursion runs on an explicit stack rather than the interpreter's,
        so deep ranks of low-arity relations are not bounded by the
        recursion limit.
        """
        if rank < 0:
            raise ValueError(f"Rank must be non-negative, got {rank}")
        return self._term_at(rank, self._effective_terms(terms))

    def _term_at(self, rank: int, terms: TermVector) -> int:
        k = len(terms)
        if rank < k:
            return terms[rank]

        # each frame holds a rank and the values of its preceding ranks computed so far
        stack = [(rank, [])]
        while True:
            current, window = stack[-1]
            if len(window) < k:
                preceding = current - k + len(window)
                if preceding < k:
                    window.append(terms[preceding])
                else:
                    stack.append((preceding, []))
                continue

            stack.pop()
            value = self._apply(tuple(window))
            if not stack:
                return value
            stack[-1][1].append(value)

    # Searches --------------------------------------------------------------
    def search_until(
        self,
        target: int,
        terms: Optional[Iterable[int]] = None,
        *,
        max_steps: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> SearchResult:
        """Step through the sequence from rank 0 until ``target`` appears.

        Returns the number of steps taken and the largest term visited,
        the terminating one included. The search does not terminate if the
        target is never reached, unless ``max_steps`` or ``cancel_event``
        bounds it.
        """
        vector = self._effective_terms(terms)
        k = len(vector)
        window = deque(vector, maxlen=k)

        cycle = 0
        term = vector[0]
        max_term = term
        while term != target:
            if max_steps is not None and cycle >= max_steps:
                raise StepLimitExceededError(
                    f"Target {target} not reached from {vector} within {max_steps} steps"
                )
            if cancel_event is not None and cancel_event.is_set():
                raise SearchCancelledError(f"Search from {vector} cancelled after {cycle} steps")

            cycle += 1
            if cycle < k:
                term = vector[cycle]
            else:
                term = self._apply(tuple(window))
                window.append(term)
            if term > max_term:
                max_term = term

        logger.debug("Search from %s reached %d after %d steps (max %d)", vector, target, cycle, max_term)
        return SearchResult(cycle_length=cycle, max_term=max_term)

    def search_many_until(
        self,
        n: int,
        target: int,
        step: int = 1,
        *,
        max_workers: Optional[int] = None,
        timeout: Optional[float] = None,
        max_steps: Optional[int] = None,
        on_result: Optional[ResultCallback] = None,
    ) -> ResultTable:
        """Run ``n`` concurrent searches over shifted copies of the initial terms.

        Run ``i`` starts from the stored initial terms with ``i * step``
        added to every element. All runs are joined before returning and
        the results are keyed by the exact terms each run started from.

        Runs share a thread pool because relations are usually lambdas or
        closures, which a process pool cannot pickle. The GIL still
        serialises pure-Python relations, so the runs are concurrent but not
        parallel: the speedup comes only from relations that release the GIL.
        """
        if n < 0:
            raise ValueError(f"Run count must be non-negative, got {n}")
        if n > 1 and step == 0:
            raise ValueError("A zero step would run the same initial terms more than once")
        if n == 0:
            return ResultTable()

        working = list(self._effective_terms(None))
        snapshots = []
        for _ in range(n):
            snapshots.append(tuple(working))
            working = [wrap_int64(term + step) for term in working]

        logger.info("Starting %d searches for %d from %s (step %d)", n, target, snapshots[0], step)
        cancel_event = threading.Event()
        results: Dict[TermVector, SearchResult] = {}

        executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="syracuse-search")
        try:
            futures = {
                executor.submit(
                    self.search_until,
                    target,
                    snapshot,
                    max_steps=max_steps,
                    cancel_event=cancel_event,
                ): snapshot
                for snapshot in snapshots
            }
            deadline = time.monotonic() + timeout if timeout is not None else None
            pending = set(futures)
            while pending:
                remaining = None
                if deadline is not None:
                    remaining = max(deadline - time.monotonic(), 0.0)
                done, pending = wait(pending, timeout=remaining, return_when=FIRST_COMPLETED)
                if not done:
                    raise SearchTimeoutError(
                        f"{len(pending)} of {n} searches still running after {timeout}s"
                    )
                for future in done:
                    snapshot = futures[future]
                    result = future.result()
                    results[snapshot] = result
                    if on_result is not None:
                        on_result(snapshot, result)
        except BaseException:
            cancel_event.set()
            raise
        finally:
            executor.shutdown(wait=True, cancel_futures=cancel_event.is_set())

        logger.info("Completed %d searches for %d", len(results), target)
        return ResultTable(results)
