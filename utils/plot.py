import networkx as nx
import matplotlib.pyplot as plt
import datetime
import config
import os


def bag_label(bag) -> str:
    """Short label for a bag: the vertex itself for singletons, else its size."""
    if len(bag) == 1:
        return str(next(iter(bag)))
    return f"|{len(bag)}|"


def get_tree_positions(td) -> dict:
    """
    Compute node positions for a caterpillar decomposition tree.

    The spine of remaining-vertex bags runs down the left column; every
    singleton leaf sits one column to the right of its parent's level.

    Parameters:
    - td (TreeDecomposition): The decomposition to lay out.

    Returns:
    - pos (dict): A dictionary of bag positions.
    """
    pos = {}
    if td.root is None:
        return pos

    depth = 0
    for parent, children in nx.bfs_successors(td.tree, td.root):
        # Leaves may be reported with no successors.
        if not children:
            continue
        pos.setdefault(parent, (0, -depth))
        # The larger child continues the spine; on the final split both are leaves.
        spine, leaf = sorted(children, key=len, reverse=True)
        pos[leaf] = (1, -(depth + 1))
        pos.setdefault(spine, (0, -(depth + 1)))
        depth += 1
    pos.setdefault(td.root, (0, 0))
    return pos


def save_figure(file_path: str = None) -> str:
    if file_path is None:
        os.makedirs(os.path.join(config.TEMP_PATH, "fig"), exist_ok=True)
        current_time = datetime.datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        file_path = os.path.join(config.TEMP_PATH, "fig", f"{current_time}.png")
    plt.savefig(file_path)
    return file_path


def visualize_decomposition(td, file_path: str = None, show: bool = False) -> str:
    """
    Visualize a tree decomposition using matplotlib.

    Bags are labelled by their vertex (singletons) or size, edges into a bag
    carry the bag's cut width. The bags of the widest cut are highlighted in red.

    Parameters:
    - td (TreeDecomposition): Decomposition to draw.
    - file_path (str): Where to save the figure. Defaults to a dated file under TEMP_PATH.
    - show (bool): Also open an interactive window.

    Returns:
    - str: Path of the saved figure.
    """
    pos = get_tree_positions(td)
    labels = {bag: bag_label(bag) for bag in td.tree.nodes}

    fig, ax = plt.subplots()
    nx.draw(td.tree, pos, ax=ax, labels=labels, with_labels=True, node_color="skyblue", width=2)

    widest = [bag for bag, width in td.cut_mim_values.items() if width == td.mim_width and width > 0]
    if widest:
        nx.draw_networkx_nodes(td.tree, pos, ax=ax, nodelist=widest, node_color="red")

    edge_labels = {}
    for u, v in td.tree.edges:
        child = v if len(v) < len(u) else u
        edge_labels[(u, v)] = td.cut_mim_values[child]
    nx.draw_networkx_edge_labels(td.tree, pos, ax=ax, edge_labels=edge_labels)
    ax.set_title(f"mim-width estimate: {td.mim_width}")

    saved = save_figure(file_path)
    if show:
        plt.show()
    plt.close(fig)
    return saved
