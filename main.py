import config
from utils.generator import get_generator
from utils.utils import read_network, setup_logger, decomposition_to_frame, create_output_file, timer
from utils.plot import visualize_decomposition
from decomposition import TreeDecompositor, verify_tree_decomposition
from tie_breakers import get_tie_breakers, REDUCING_TIE_BREAKERS, FINAL_TIE_BREAKERS
import argparse
import sys
import random
import pandas as pd

logger = setup_logger(__name__)


def get_graph(args):
    """
    Generates or reads the network based on the provided arguments.

    :param args: The object containing arguments parsed from the command line.
    :return: A networkx.Graph object.
    """
    if args.file:
        logger.info(f"Reading network from file: {args.file}")
        return read_network(args.file)

    logger.info(f"Generating {args.net_type.upper()} network (n={args.n}, k={args.k})")
    return get_generator(args.net_type, args.n, args.k, seed=args.seed).generate_network()


def run_decomposition(graph, args):
    """
    Runs the tree decompositor on a graph with the configured heuristics.

    :param graph: A networkx.Graph object.
    :param args: Parsed command-line arguments.
    :return: A tuple of the TreeDecomposition and the execution time in seconds.
    """
    reducing, final = get_tie_breakers(args.reducing, args.final)
    decompositor = TreeDecompositor(
        graph,
        reducing_tie_breaker=reducing,
        final_tie_breaker=final,
        random_repetitions=args.repetitions,
        rng=random.Random(args.seed),
    )
    td, execution_time = timer(decompositor.compute)()

    is_valid, errors = verify_tree_decomposition(td, graph)
    if not is_valid:
        for error in errors:
            logger.warning(f"Invalid decomposition: {error}")

    logger.info(f"mim-width estimate: {td.mim_width}")
    logger.info(f"Execution time: {execution_time:.3f} seconds")
    return td, execution_time


def run_sweep(args):
    """
    Decomposes one generated network per (nodes, average degree) setting in config.

    :param args: Parsed command-line arguments.
    :return: A DataFrame with one row per setting.
    """
    results = []
    for n in config.NETWORK_NODES_LIST:
        for k in config.NETWORK_AVERAGE_DEGREES:
            graph = get_generator(args.net_type, n, k, seed=args.seed).generate_network()
            logger.info(f"================ {args.net_type.upper()} n={n} k={k} ================")
            td, execution_time = run_decomposition(graph, args)
            results.append(
                {
                    "Nodes": n,
                    "Average Degree": k,
                    "Edges": graph.number_of_edges(),
                    "MIM Width": td.mim_width,
                    "Time (s)": round(execution_time, 3),
                }
            )
    return pd.DataFrame(results)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Compute a heuristic tree decomposition of small mim-width.",
        formatter_class=argparse.RawTextHelpFormatter,
    )

    # Network parameters
    parser.add_argument(
        "-n", type=int, default=20, help="Number of nodes in the network."
    )
    parser.add_argument(
        "-k", type=float, default=3.0, help="Average degree for network generation."
    )
    parser.add_argument(
        "--net_type",
        type=str,
        default="ER",
        choices=["ER", "SF"],
        help="Type of network to generate (Erdos-Renyi or Scale-Free).",
    )
    parser.add_argument(
        "--file",
        help="Edge list or PACE .gr file to read (overrides network generation).\nExample: --file assets/net/grid.gr",
    )
    parser.add_argument(
        "--sweep",
        action="store_true",
        help="Decompose generated networks for every size and degree listed in config.",
    )

    # Heuristic parameters
    parser.add_argument(
        "--reducing",
        default="max-degree",
        choices=sorted(REDUCING_TIE_BREAKERS),
        help="Reducing tie-breaker applied first to vertices of equal score.",
    )
    parser.add_argument(
        "--final",
        default="max-neighbours-degree",
        choices=sorted(FINAL_TIE_BREAKERS),
        help="Final tie-breaker applied when the reducing step leaves a tie.",
    )
    parser.add_argument(
        "--repetitions",
        type=int,
        default=config.RANDOM_REPETITIONS,
        help="Randomized greedy trials per induced matching estimate.",
    )
    parser.add_argument(
        "--seed", type=int, default=config.RANDOM_SEED, help="Seed for generation and tie-breaking."
    )

    # Output
    parser.add_argument("--output", help="Name of the CSV file written to the result directory.")
    parser.add_argument("--plot", help="Save a drawing of the decomposition tree to this path.")
    return parser


def main(argv=None):
    """
    Main function: parses command-line arguments, runs the decomposition, and prints results.
    """
    args = build_parser().parse_args(argv)

    try:
        if args.sweep:
            results_df = run_sweep(args)
        else:
            # 1. Get network
            graph = get_graph(args)

            # 2. Decompose
            td, _ = run_decomposition(graph, args)
            results_df = decomposition_to_frame(td)

            if args.plot:
                logger.info(f"Decomposition drawn to {visualize_decomposition(td, args.plot)}")

        # 3. Display results
        print("\n================ Decomposition Results ================")
        if not args.sweep:
            print(f"MIM Width: {td.mim_width}")
        print(results_df.to_string(index=False))
        print("=" * 40)

        if args.output:
            output_path = create_output_file(list(results_df.columns), args.output)
            results_df.to_csv(output_path, mode="a", header=False, index=False)
            logger.info(f"Results written to {output_path}")

    except (ValueError, FileNotFoundError) as e:
        logger.error(f"An error occurred: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
