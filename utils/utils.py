import networkx as nx
import pandas as pd
import time
import logging
import config
import os
import datetime

from config import LOG_PATH

# Graphs are undirected and simple. Generated and PACE-read networks index nodes from 1.


def timer(func):
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        end_time = time.time()
        elapsed_time = end_time - start_time
        return result, elapsed_time
    return wrapper


def setup_logger(name, save_file=False):
    """Create a logger with the specified name."""
    # Create a logger
    logger = logging.getLogger(name)
    logger.setLevel(config.LOGGING_LEVEL)  # Set the minimum logging level

    if logger.handlers:
        return logger

    # Create console handler and set level to debug
    ch = logging.StreamHandler()
    ch.setLevel(config.LOGGING_LEVEL)

    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Add formatter to ch
    ch.setFormatter(formatter)

    # Add ch to logger
    logger.addHandler(ch)

    if save_file:
        os.makedirs(LOG_PATH, exist_ok=True)
        log_file_path = os.path.join(LOG_PATH, f"{datetime.datetime.now().strftime('%Y-%m-%d')}.log")
        fh = logging.FileHandler(log_file_path)
        fh.setLevel(config.LOGGING_LEVEL)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger


def create_cut(graph: nx.Graph, vertices) -> nx.Graph:
    """
    Build the bipartite cut graph between a vertex subset and its complement.

    Parameters:
    - graph (nx.Graph): The original graph.
    - vertices (iterable): One side of the cut. The other side is every remaining vertex of `graph`.

    Returns:
    - nx.Graph: A graph on all vertices of `graph` holding only the edges with exactly
      one endpoint in `vertices`.
    """
    side = set(vertices)
    cut = nx.Graph()
    cut.add_nodes_from(graph.nodes)
    cut.add_edges_from((u, v) for u, v in graph.edges if (u in side) != (v in side))
    return cut


def induced_subgraph(graph: nx.Graph, vertices) -> nx.Graph:
    """Read-only view of `graph` restricted to `vertices`."""
    return graph.subgraph(vertices)


def read_network(file_path: str, n=None) -> nx.Graph:
    """
    Read an undirected network from an edge list file.

    Each non-empty line holds two whitespace separated node ids. Lines starting with
    ``c`` are comments. A PACE header ``p tw <n> <m>`` declares nodes 1..n, so isolated
    vertices survive the round trip.

    Parameters:
    - file_path (str): Path to the file containing the network data.
    - n (int, optional): Add nodes 1..n before reading the edges.

    Returns:
    - nx.Graph: Generated NetworkX Graph.
    """

    graph = nx.Graph()
    if n is not None:
        graph.add_nodes_from(range(1, n + 1))

    with open(file_path, 'r', encoding='utf-8') as file:
        for line_number, line in enumerate(file, start=1):
            parts = line.split()
            if not parts or parts[0] == 'c':
                continue
            if parts[0] == 'p':
                if len(parts) < 3:
                    raise ValueError(f"Malformed header on line {line_number} of {file_path}: {line.strip()!r}")
                graph.add_nodes_from(range(1, int(parts[2]) + 1))
                continue
            if len(parts) < 2:
                raise ValueError(f"Malformed edge on line {line_number} of {file_path}: {line.strip()!r}")
            source, target = int(parts[0]), int(parts[1])
            if source != target:
                graph.add_edge(source, target)

    return graph


def save_network(graph: nx.Graph, file_path: str) -> None:
    """
    Save a NetworkX Graph to a file.

    Parameters:
    - graph (nx.Graph): The network graph to be saved.
    - file_path (str): Path to the file where the network data will be saved.
    """

    edge_list = list(graph.edges)
    with open(file_path, 'w', encoding='utf-8') as file_object:
        for edge in edge_list:
            file_object.write(str(edge[0]) + "\t" + str(edge[1]) + "\n")


def decomposition_to_frame(td) -> pd.DataFrame:
    """
    Tabulate the splits of a tree decomposition, one row per peeled vertex.

    :param td: A TreeDecomposition.
    :return: DataFrame with the columns Step, Vertex, Vertex MIM, Rest Size and Rest MIM.
    """
    rows = []
    order = td.elimination_order
    for step, vertex in enumerate(order[:-1], start=1):
        rest = frozenset(order[step:])
        rows.append(
            {
                "Step": step,
                "Vertex": vertex,
                "Vertex MIM": td.cut_mim_values[frozenset([vertex])],
                "Rest Size": len(rest),
                "Rest MIM": td.cut_mim_values[rest],
            }
        )
    return pd.DataFrame(rows, columns=["Step", "Vertex", "Vertex MIM", "Rest Size", "Rest MIM"])


def create_output_file(result_columns, output_file_name=None):
    os.makedirs(config.RESULT_PATH, exist_ok=True)
    if output_file_name is None:
        output_file_name = f"{datetime.datetime.now().strftime('%Y-%m-%d_%H-%M-%S')}.csv"
    else:
        output_file_name = f"{output_file_name}.csv"
    with open(os.path.join(config.RESULT_PATH, output_file_name), "w", encoding="utf-8") as output_file:
        output_file.write(",".join(result_columns) + "\n")
    return os.path.join(config.RESULT_PATH, output_file_name)
