from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Hashable, List, Optional, Set, Tuple

import networkx as nx

import config
from tie_breakers import (
    FinalTieBreaker,
    ReducingTieBreaker,
    break_tie,
    choose_max_neighbours_degree,
    reduce_to_max_degree,
)
from utils.utils import create_cut, induced_subgraph, setup_logger

logger = setup_logger(__name__)

Bag = FrozenSet[Hashable]
Edge = Tuple[Hashable, Hashable]


@dataclass
class TreeDecomposition:
    """
    A caterpillar-shaped decomposition tree with heuristic cut widths.

    Attributes
    ----------
    tree : nx.Graph
        Undirected tree whose nodes are bags (frozensets of vertices). Every internal
        bag has two children: a singleton and the bag of the vertices left over.
    cut_mim_values : dict
        Maps each non-root bag to the (estimated) size of a maximum induced matching
        of the cut between that bag and the rest of the graph. Singleton bags hold the
        exact value: 0 for isolated vertices, 1 otherwise.
    root : frozenset | None
        The bag of all vertices, ``None`` for the empty graph.
    elimination_order : list
        Vertices in the order they were split off, the last remaining vertex at the end.
    """

    tree: nx.Graph = field(default_factory=nx.Graph)
    cut_mim_values: Dict[Bag, int] = field(default_factory=dict)
    root: Optional[Bag] = None
    elimination_order: List[Hashable] = field(default_factory=list)

    @property
    def num_bags(self) -> int:
        return self.tree.number_of_nodes()

    @property
    def mim_width(self) -> int:
        """Largest cut value over all bags, 0 when nothing was split."""
        return max(self.cut_mim_values.values(), default=0)


class TreeDecompositor:
    """
    Greedy heuristic for tree decompositions of small mim-width.

    Starting from the full vertex set, the vertex whose removal yields the cheapest cut
    is split off, one vertex at a time, until a single vertex is left. The cost of a cut
    is estimated with a randomized greedy maximum induced matching, so neither the
    decomposition nor its widths are optimal.

    Parameters
    ----------
    graph : nx.Graph
        Undirected simple graph. It is never modified.
    reducing_tie_breaker : callable
        ``(graph, vertices) -> iterable`` applied first to vertices of equal score.
    final_tie_breaker : callable
        ``(graph, vertices) -> vertex`` applied when the reducing step leaves a tie.
    random_repetitions : int
        Independent greedy trials per matching estimate, the largest result is kept.
    rng : random.Random, optional
        Source of randomness for ties between edges. One stream is consumed sequentially
        across all calls, so a seeded source makes every result reproducible.
    """

    def __init__(
        self,
        graph: nx.Graph,
        reducing_tie_breaker: ReducingTieBreaker = reduce_to_max_degree,
        final_tie_breaker: FinalTieBreaker = choose_max_neighbours_degree,
        random_repetitions: int = config.RANDOM_REPETITIONS,
        rng: Optional[random.Random] = None,
    ):
        if random_repetitions < 1:
            raise ValueError("random_repetitions must be positive.")
        self.graph = graph
        self.reducing_tie_breaker = reducing_tie_breaker
        self.final_tie_breaker = final_tie_breaker
        self.random_repetitions = random_repetitions
        self.rng = rng if rng is not None else random.Random(config.RANDOM_SEED)

    def _single_vertex_mim(self, vertex) -> int:
        # mim({v}) is exact: a single vertex matches at most one edge.
        return 0 if self.graph.degree(vertex) == 0 else 1

    def compute(self) -> TreeDecomposition:
        """
        Build the decomposition by peeling off one vertex per step.

        Returns
        -------
        TreeDecomposition
            Empty for the empty graph, the root bag alone for a single vertex.
        """

        tree = nx.Graph()
        cut_mim_values: Dict[Bag, int] = {}
        remaining: Set[Hashable] = set(self.graph.nodes)

        if not remaining:
            return TreeDecomposition(tree, cut_mim_values, None, [])

        root = frozenset(remaining)
        tree.add_node(root)
        tree_parent = root
        order: List[Hashable] = []

        while len(remaining) > 1:
            vertex, mim = self.choose_vertex(remaining)
            remaining.remove(vertex)
            order.append(vertex)
            rest = frozenset(remaining)

            singleton = frozenset([vertex])
            tree.add_edge(tree_parent, singleton)
            cut_mim_values[singleton] = self._single_vertex_mim(vertex)
            tree.add_edge(tree_parent, rest)
            if len(rest) == 1:
                cut_mim_values[rest] = self._single_vertex_mim(next(iter(rest)))
            else:
                cut_mim_values[rest] = mim

            logger.debug(f"Split off {vertex!r}: |rest|={len(rest)}, mim={mim}")
            tree_parent = rest

        order.extend(remaining)
        td = TreeDecomposition(tree, cut_mim_values, root, order)
        logger.info(f"Decomposed {len(root)} vertices, mim-width estimate: {td.mim_width}")
        return td

    def choose_vertex(self, vertices) -> Tuple[Hashable, int]:
        """
        Choose a vertex ``v`` such that ``max(mim({v}), mim(vertices - {v}))`` is small.

        Parameters
        ----------
        vertices : set
            Non-empty candidate pool, a subset of the graph's vertices.

        Returns
        -------
        tuple
            The chosen vertex and its score.
        """

        if not vertices:
            raise ValueError("Graph must have at least one vertex")

        # Input node order keeps the scan reproducible for any vertex type.
        candidates = [v for v in self.graph.nodes if v in vertices]
        if not candidates:
            raise ValueError("Candidate vertices are not part of the graph")
        smallest_mim = None
        smallest_mim_vertices: List[Hashable] = []
        for vertex in candidates:
            mim_single = self._single_vertex_mim(vertex)
            cut = create_cut(self.graph, [v for v in candidates if v != vertex])
            mim_rest = len(self.estimate_mim(cut))
            max_mim = max(mim_single, mim_rest)
            if smallest_mim is None or max_mim < smallest_mim:
                smallest_mim = max_mim
                smallest_mim_vertices = [vertex]
            elif max_mim == smallest_mim:
                smallest_mim_vertices.append(vertex)

        if len(smallest_mim_vertices) > 1:
            logger.debug(f"{len(smallest_mim_vertices)} vertices tie at mim={smallest_mim}")
        subgraph = induced_subgraph(self.graph, candidates)
        chosen = break_tie(subgraph, smallest_mim_vertices, self.reducing_tie_breaker, self.final_tie_breaker)
        return chosen, smallest_mim

    def estimate_mim(self, graph: nx.Graph) -> Set[Edge]:
        """
        Heuristic for a maximum induced matching (MIM) of ``graph``.

        Greedily adds the edge whose endpoints have the smallest degree sum, then deletes
        every edge within two hops of it, until no edge is left. Ties between edges are
        broken at random and the whole procedure is repeated ``random_repetitions``
        times, keeping the largest matching. Only a local optimum is found; there is no
        guarantee about the quality of the result.

        Parameters
        ----------
        graph : nx.Graph
            Typically a bipartite cut graph. It is copied, never modified.

        Returns
        -------
        set
            The matching as a set of ``(u, v)`` edges.
        """

        maximum_induced_matching: Set[Edge] = set()
        for _ in range(self.random_repetitions):
            remaining_graph = graph.copy()
            matching: Set[Edge] = set()
            while remaining_graph.number_of_edges() > 0:
                lowest_degree = None
                edges_with_lowest_degree: List[Edge] = []
                for u, v in remaining_graph.edges:
                    degree = remaining_graph.degree(u) + remaining_graph.degree(v)
                    if lowest_degree is None or degree < lowest_degree:
                        lowest_degree = degree
                        edges_with_lowest_degree = [(u, v)]
                    elif degree == lowest_degree:
                        edges_with_lowest_degree.append((u, v))

                if len(edges_with_lowest_degree) == 1:
                    selected_edge = edges_with_lowest_degree[0]
                else:
                    selected_edge = self._break_tie_randomly(edges_with_lowest_degree)

                remaining_graph.remove_edge(*selected_edge)
                for node in selected_edge:
                    for adjacent_node in list(remaining_graph.adj[node]):
                        remaining_graph.remove_edge(node, adjacent_node)
                        for adjacent_adjacent_node in list(remaining_graph.adj[adjacent_node]):
                            remaining_graph.remove_edge(adjacent_node, adjacent_adjacent_node)

                matching.add(selected_edge)

            if len(matching) > len(maximum_induced_matching):
                maximum_induced_matching = matching
        return maximum_induced_matching

    def _break_tie_randomly(self, edges: List[Edge]) -> Edge:
        return edges[self.rng.randrange(len(edges))]


def compute_tree_decomposition(graph: nx.Graph, **kwargs) -> TreeDecomposition:
    """Shortcut for ``TreeDecompositor(graph, **kwargs).compute()``."""
    return TreeDecompositor(graph, **kwargs).compute()


def is_induced_matching(graph: nx.Graph, matching) -> bool:
    """
    Check that ``matching`` is an induced matching of ``graph``.

    Every pair must be an edge of ``graph``, no two pairs may share a vertex and no edge
    of ``graph`` may join the endpoints of two different pairs.
    """

    owner = {}
    for index, (u, v) in enumerate(matching):
        if not graph.has_edge(u, v):
            return False
        for node in (u, v):
            if node in owner:
                return False
            owner[node] = index
    for u, v in graph.edges:
        if u in owner and v in owner and owner[u] != owner[v]:
            return False
    return True


def verify_tree_decomposition(td: TreeDecomposition, graph: nx.Graph) -> Tuple[bool, List[str]]:
    """
    Verify the structural invariants of a decomposition computed for ``graph``.

    Properties checked:
    1. The root is the full vertex set and the tree has ``2n - 1`` bags (0 for n = 0).
    2. The bags form a tree in which every internal bag splits into a singleton and the rest.
    3. Every non-root bag has exactly one width, singleton widths match vertex isolation.

    Returns
    -------
    tuple
        ``(is_valid, list of error messages)``
    """

    errors = []
    n = graph.number_of_nodes()

    if n == 0:
        if td.num_bags != 0 or td.cut_mim_values:
            errors.append("Empty graph must give an empty decomposition")
        return len(errors) == 0, errors

    if td.root != frozenset(graph.nodes):
        errors.append(f"Root {td.root} is not the full vertex set")
        return False, errors
    if td.num_bags != 2 * n - 1:
        errors.append(f"Expected {2 * n - 1} bags, found {td.num_bags}")
    if not nx.is_tree(td.tree):
        errors.append("Decomposition is not a tree")
        return False, errors

    non_root = set(td.tree.nodes) - {td.root}
    if set(td.cut_mim_values) != non_root:
        errors.append("Width map keys differ from the non-root bags")

    for parent, children in nx.bfs_successors(td.tree, td.root):
        if not children:
            continue
        if len(children) != 2:
            errors.append(f"Bag {set(parent)} has {len(children)} children")
            continue
        first, second = children
        if first | second != parent or first & second:
            errors.append(f"Children of bag {set(parent)} do not partition it")
        if min(len(first), len(second)) != 1:
            errors.append(f"Bag {set(parent)} does not split off a single vertex")

    for bag, width in td.cut_mim_values.items():
        if width < 0:
            errors.append(f"Negative width {width} for bag {set(bag)}")
        if len(bag) == 1:
            (vertex,) = bag
            expected = 0 if graph.degree(vertex) == 0 else 1
            if width != expected:
                errors.append(f"Singleton bag {{{vertex!r}}} has width {width}, expected {expected}")

    return len(errors) == 0, errors
