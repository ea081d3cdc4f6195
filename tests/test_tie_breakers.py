import networkx as nx
import pytest

from tie_breakers import (
    FINAL_TIE_BREAKERS,
    REDUCING_TIE_BREAKERS,
    break_tie,
    choose_first,
    choose_max_neighbours_degree,
    choose_min_degree,
    get_tie_breakers,
    keep_all,
    reduce_to_max_degree,
    reduce_to_min_degree,
)


@pytest.fixture
def lollipop():
    """Triangle a-b-c with the tail c-d-e."""
    return nx.Graph([("a", "b"), ("b", "c"), ("c", "a"), ("c", "d"), ("d", "e")])


def test_reduce_to_max_degree(lollipop):
    assert reduce_to_max_degree(lollipop, ["a", "b", "c", "d", "e"]) == ["c"]
    assert reduce_to_max_degree(lollipop, ["a", "b", "d"]) == ["a", "b", "d"]


def test_reduce_to_min_degree(lollipop):
    assert reduce_to_min_degree(lollipop, ["a", "b", "c", "d", "e"]) == ["e"]
    assert reduce_to_min_degree(lollipop, []) == []


def test_keep_all(lollipop):
    assert keep_all(lollipop, ("e", "a")) == ["e", "a"]


def test_choose_max_neighbours_degree(lollipop):
    # d and a both have the degree-3 vertex c as a neighbour; d comes first.
    assert choose_max_neighbours_degree(lollipop, ["e", "d", "a"]) == "d"
    assert choose_max_neighbours_degree(lollipop, ["e", "b"]) == "b"


def test_choose_max_neighbours_degree_with_isolated_vertices():
    graph = nx.Graph()
    graph.add_nodes_from(["u", "v"])
    assert choose_max_neighbours_degree(graph, ["v", "u"]) == "v"


def test_choose_min_degree_and_first(lollipop):
    assert choose_min_degree(lollipop, ["c", "d", "e"]) == "e"
    assert choose_first(lollipop, ["d", "a"]) == "d"


def test_break_tie_single_candidate_skips_policies(lollipop):
    def fail(graph, vertices):
        raise AssertionError("policy must not run")

    assert break_tie(lollipop, ["b"], fail, fail) == "b"


def test_break_tie_final_policy_only_on_remaining_tie(lollipop):
    def fail(graph, vertices):
        raise AssertionError("policy must not run")

    assert break_tie(lollipop, ["a", "c", "e"], reduce_to_max_degree, fail) == "c"
    assert break_tie(lollipop, ["a", "b", "d"], reduce_to_max_degree, choose_max_neighbours_degree) == "a"


def test_get_tie_breakers():
    assert get_tie_breakers("max-degree", "max-neighbours-degree") == (
        reduce_to_max_degree,
        choose_max_neighbours_degree,
    )
    with pytest.raises(ValueError, match="reducing"):
        get_tie_breakers("random", "first")
    with pytest.raises(ValueError, match="final"):
        get_tie_breakers("none", "random")


def test_registries_hold_callables():
    for policy in [*REDUCING_TIE_BREAKERS.values(), *FINAL_TIE_BREAKERS.values()]:
        assert callable(policy)
