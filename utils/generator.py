import networkx as nx
import random
import numpy as np
from typing import List, Optional


class Generator:
    """
    Abstract base class for undirected network generators.

    Nodes are labelled 1..num_nodes. A fixed `seed` makes every generated
    network reproducible.
    """
    def __init__(self, num_nodes: int, average_degree: float, seed: Optional[int] = None):
        if num_nodes <= 0:
            raise ValueError("Number of nodes must be positive.")
        if average_degree <= 0:
            raise ValueError("Average degree must be positive.")
        self.num_nodes = num_nodes
        self.average_degree = average_degree
        self.rng = random.Random(seed)
        self.np_rng = np.random.default_rng(seed)

    def generate_network(self) -> nx.Graph:
        """Generates a single network. Must be implemented by subclasses."""
        raise NotImplementedError("Subclasses should implement this method!")

    def generate_networks(self, n: int) -> List[nx.Graph]:
        """
        Generates a list of n independent networks.
        """
        if n <= 0:
            return []
        return [self.generate_network() for _ in range(n)]


class ERGenerator(Generator):
    """
    Generates Erdős-Rényi (ER) networks: every pair of nodes is joined
    independently with probability average_degree / (num_nodes - 1).
    """
    def generate_network(self) -> nx.Graph:
        graph = nx.Graph()
        graph.add_nodes_from(range(1, self.num_nodes + 1))
        if self.num_nodes <= 1: return graph
        p = min(1.0, self.average_degree / (self.num_nodes - 1))
        for i in range(1, self.num_nodes + 1):
            for j in range(i + 1, self.num_nodes + 1):
                if self.rng.random() < p:
                    graph.add_edge(i, j)
        return graph


class SFGenerator(Generator):
    """
    Generates scale-free (SF) networks with the static model: node i gets the
    weight i^(-1 / (gamma - 1)) and endpoints of each edge are drawn
    proportionally to the weights until num_nodes * average_degree / 2
    distinct edges exist.

    Self loops and duplicate edges are rejected, so very dense settings
    stop early once the draw budget is exhausted.
    """

    def __init__(self, num_nodes: int, average_degree: float, gamma: float = 3.0, seed: Optional[int] = None):
        super().__init__(num_nodes, average_degree, seed)
        if gamma <= 2:
            raise ValueError("Gamma must be greater than 2.")
        self.gamma = gamma

    def generate_network(self) -> nx.Graph:
        graph = nx.Graph()
        graph.add_nodes_from(range(1, self.num_nodes + 1))
        if self.num_nodes <= 1: return graph

        alpha = 1.0 / (self.gamma - 1.0)
        weights = np.arange(1, self.num_nodes + 1, dtype=float) ** -alpha
        weights /= weights.sum()
        node_indices = np.arange(1, self.num_nodes + 1)

        max_edges = self.num_nodes * (self.num_nodes - 1) // 2
        num_edges = min(max_edges, int(round(self.num_nodes * self.average_degree / 2)))
        attempts = 0
        max_attempts = 100 * max(num_edges, 1)
        while graph.number_of_edges() < num_edges and attempts < max_attempts:
            attempts += 1
            source, target = self.np_rng.choice(node_indices, size=2, p=weights)
            if source != target:
                graph.add_edge(int(source), int(target))
        return graph


GENERATORS = {
    "ER": ERGenerator,
    "SF": SFGenerator,
}


def get_generator(net_type: str, num_nodes: int, average_degree: float, seed: Optional[int] = None) -> Generator:
    """Instantiate a generator by its short name (ER or SF)."""
    key = net_type.upper()
    if key not in GENERATORS:
        raise ValueError(f"Unknown network type: {net_type}")
    return GENERATORS[key](num_nodes, average_degree, seed=seed)
