"""Registry of named recurrence relations."""

from __future__ import annotations

from typing import Dict, List, Optional

from .exceptions import RelationNotFoundError
from .models import Relation, RelationFunction, TermVector


def syracuse(window: TermVector) -> int:
    """Classic 3n+1 map: halve even terms, triple-plus-one odd terms."""
    (term,) = window
    if term % 2 == 0:
        return term // 2
    return 3 * term + 1


def syracuse_compressed(window: TermVector) -> int:
    """3n+1 map with the odd step folded into a halving: (3n+1)/2."""
    (term,) = window
    if term % 2 == 0:
        return term // 2
    return (3 * term + 1) // 2


def fibonacci(window: TermVector) -> int:
    return window[0] + window[1]


def tribonacci(window: TermVector) -> int:
    return window[0] + window[1] + window[2]


_REGISTRY: Dict[str, Relation] = {}


def register_relation(
    name: str,
    func: RelationFunction,
    arity: Optional[int] = None,
    description: str = "",
    *,
    replace: bool = False,
) -> Relation:
    """Register ``func`` under ``name`` and return the wrapping Relation."""
    if arity is not None and arity < 1:
        raise ValueError(f"Relation arity must be positive, got {arity}")
    if name in _REGISTRY and not replace:
        raise ValueError(f"Relation '{name}' is already registered")
    relation = Relation(name=name, func=func, arity=arity, description=description)
    _REGISTRY[name] = relation
    return relation


def get_relation(name: str) -> Relation:
    try:
        return _REGISTRY[name]
    except KeyError:
        known = ", ".join(sorted(_REGISTRY)) or "none"
        raise RelationNotFoundError(f"Unknown relation '{name}' (known: {known})") from None


def list_relations() -> List[Relation]:
    return [_REGISTRY[name] for name in sorted(_REGISTRY)]


register_relation("syracuse", syracuse, arity=1, description="u(n+1) = u(n)/2 if even else 3u(n)+1")
register_relation(
    "syracuse-compressed",
    syracuse_compressed,
    arity=1,
    description="u(n+1) = u(n)/2 if even else (3u(n)+1)/2",
)
register_relation("fibonacci", fibonacci, arity=2, description="u(n+2) = u(n) + u(n+1)")
register_relation("tribonacci", tribonacci, arity=3, description="u(n+3) = u(n) + u(n+1) + u(n+2)")
