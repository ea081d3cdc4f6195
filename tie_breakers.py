"""
Tie-breaking policies for the vertex selection of the tree decompositor.

A reducing tie-breaker maps ``(graph, vertices)`` to a subset of ``vertices`` and may
leave several candidates. A final tie-breaker maps ``(graph, vertices)`` to exactly one
vertex. ``graph`` is the subgraph induced by the current candidate pool, so degrees are
local to the part of the graph that is still being decomposed.

All policies are deterministic: among equal candidates the one that comes first in
``vertices`` wins.
"""

from __future__ import annotations

from typing import Callable, Collection, Hashable, Iterable

import networkx as nx

ReducingTieBreaker = Callable[[nx.Graph, Collection[Hashable]], Iterable[Hashable]]
FinalTieBreaker = Callable[[nx.Graph, Collection[Hashable]], Hashable]


def _max_neighbour_degree(graph: nx.Graph, vertex) -> int:
    return max((graph.degree(neighbour) for neighbour in graph.adj[vertex]), default=0)


# ---------------------------------------------------------------- reducing


def reduce_to_max_degree(graph: nx.Graph, vertices: Collection[Hashable]) -> list:
    """Keep the vertices of maximum degree."""
    if not vertices:
        return []
    max_degree = max(graph.degree(v) for v in vertices)
    return [v for v in vertices if graph.degree(v) == max_degree]


def reduce_to_min_degree(graph: nx.Graph, vertices: Collection[Hashable]) -> list:
    """Keep the vertices of minimum degree."""
    if not vertices:
        return []
    min_degree = min(graph.degree(v) for v in vertices)
    return [v for v in vertices if graph.degree(v) == min_degree]


def keep_all(graph: nx.Graph, vertices: Collection[Hashable]) -> list:
    return list(vertices)


# ---------------------------------------------------------------- final


def choose_max_neighbours_degree(graph: nx.Graph, vertices: Collection[Hashable]):
    """
    Pick the vertex whose highest-degree neighbour has the largest degree.

    Isolated vertices count as 0.
    """
    return max(vertices, key=lambda v: _max_neighbour_degree(graph, v))


def choose_min_degree(graph: nx.Graph, vertices: Collection[Hashable]):
    return min(vertices, key=graph.degree)


def choose_first(graph: nx.Graph, vertices: Collection[Hashable]):
    return next(iter(vertices))


def break_tie(
    graph: nx.Graph,
    vertices: Collection[Hashable],
    reducing_tie_breaker: ReducingTieBreaker = reduce_to_max_degree,
    final_tie_breaker: FinalTieBreaker = choose_max_neighbours_degree,
):
    """
    Resolve a tie between candidate vertices in two stages.

    The reducing policy runs first; the final policy only runs when more than one
    candidate survives it.
    """
    if len(vertices) == 1:
        return next(iter(vertices))
    remaining = list(dict.fromkeys(reducing_tie_breaker(graph, vertices)))
    if len(remaining) == 1:
        return remaining[0]
    return final_tie_breaker(graph, remaining)


REDUCING_TIE_BREAKERS: dict[str, ReducingTieBreaker] = {
    "max-degree": reduce_to_max_degree,
    "min-degree": reduce_to_min_degree,
    "none": keep_all,
}

FINAL_TIE_BREAKERS: dict[str, FinalTieBreaker] = {
    "max-neighbours-degree": choose_max_neighbours_degree,
    "min-degree": choose_min_degree,
    "first": choose_first,
}


def get_tie_breakers(reducing: str, final: str) -> tuple[ReducingTieBreaker, FinalTieBreaker]:
    """Look up a pair of policies by their command-line names."""
    if reducing not in REDUCING_TIE_BREAKERS:
        raise ValueError(f"Unknown reducing tie-breaker: {reducing}")
    if final not in FINAL_TIE_BREAKERS:
        raise ValueError(f"Unknown final tie-breaker: {final}")
    return REDUCING_TIE_BREAKERS[reducing], FINAL_TIE_BREAKERS[final]
