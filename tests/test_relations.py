import pytest

from syracuse.exceptions import RelationNotFoundError
from syracuse.relations import get_relation, list_relations, register_relation


def test_builtin_relations_are_registered() -> None:
    names = [relation.name for relation in list_relations()]
    assert names == sorted(names)
    assert {"syracuse", "syracuse-compressed", "fibonacci", "tribonacci"} <= set(names)


def test_syracuse_relation() -> None:
    relation = get_relation("syracuse")
    assert relation.arity == 1
    assert relation((6,)) == 3
    assert relation((3,)) == 10


def test_compressed_relation_halves_odd_step() -> None:
    relation = get_relation("syracuse-compressed")
    assert relation((3,)) == 5
    assert relation((8,)) == 4


def test_unknown_relation() -> None:
    with pytest.raises(RelationNotFoundError):
        get_relation("does-not-exist")


def test_register_custom_relation() -> None:
    relation = register_relation("pell-test", lambda u: u[0] + 2 * u[1], arity=2, replace=True)
    assert get_relation("pell-test") is relation
    assert relation((0, 1)) == 2
    with pytest.raises(ValueError):
        register_relation("pell-test", lambda u: u[0], arity=2)


def test_register_rejects_non_positive_arity() -> None:
    with pytest.raises(ValueError):
        register_relation("bad-arity", lambda u: 0, arity=0)
