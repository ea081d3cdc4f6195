import random

from decomposition import TreeDecompositor
from utils.plot import bag_label, get_tree_positions, visualize_decomposition


def test_tree_positions_cover_every_bag(path_graph):
    td = TreeDecompositor(path_graph, rng=random.Random(0)).compute()
    pos = get_tree_positions(td)
    assert set(pos) == set(td.tree.nodes)
    assert pos[td.root] == (0, 0)
    assert len(set(pos.values())) == len(pos)


def test_tree_positions_single_vertex(single_vertex):
    td = TreeDecompositor(single_vertex).compute()
    assert get_tree_positions(td) == {td.root: (0, 0)}


def test_bag_label():
    assert bag_label(frozenset(["a"])) == "a"
    assert bag_label(frozenset("abc")) == "|3|"


def test_visualize_decomposition_saves_figure(tmp_path, four_cycle):
    td = TreeDecompositor(four_cycle, rng=random.Random(0)).compute()
    target = tmp_path / "td.png"
    assert visualize_decomposition(td, str(target)) == str(target)
    assert target.stat().st_size > 0


def test_visualize_single_vertex_decomposition(tmp_path, single_vertex):
    td = TreeDecompositor(single_vertex).compute()
    target = tmp_path / "single.png"
    assert visualize_decomposition(td, str(target)) == str(target)
    assert target.exists()
