from collections import Counter

import networkx as nx
import pytest

from nx_colorref import (
    Coloring,
    GraphUnion,
    TaggedVertex,
    canonical_classes,
    color_refinement,
    convert_from_nx,
    match_color_classes,
    split_coloring,
)


def refined_union(G1, G2):
    union = GraphUnion(convert_from_nx(G1), convert_from_nx(G2))
    return union, color_refinement(union)


# PARTITION SPLITTER

@pytest.mark.unit
def test_split_keeps_shared_color_ids():
    union, coloring = refined_union(nx.path_graph(3), nx.path_graph(3))
    coloring1, coloring2 = split_coloring(union, coloring)

    assert dict(coloring1.colors) == dict(coloring2.colors)
    for v in range(3):
        assert coloring1[v] == coloring[TaggedVertex(v, 1)]
        assert coloring2[v] == coloring[TaggedVertex(v, 2)]


@pytest.mark.unit
def test_split_counts_only_colors_present_on_each_side():
    # star vs path on 4 vertices: same vertex and edge counts, different colors
    union, coloring = refined_union(nx.star_graph(3), nx.path_graph(4))
    coloring1, coloring2 = split_coloring(union, coloring)

    assert coloring1.number_colors == 2
    assert coloring2.number_colors == 2
    assert set(coloring1.colors.values()).isdisjoint(coloring2.colors.values())
    assert coloring.number_colors == 4


@pytest.mark.unit
def test_split_can_leave_sides_with_different_color_counts():
    # triangle plus isolated vertex vs star: degrees 2,2,2,0 vs 3,1,1,1
    G1 = nx.Graph([(0, 1), (1, 2), (2, 0)])
    G1.add_node(3)
    union, coloring = refined_union(G1, nx.star_graph(3))
    coloring1, coloring2 = split_coloring(union, coloring)

    assert coloring1.number_colors == 2
    assert coloring2.number_colors == 2
    assert match_color_classes(coloring1, coloring2) is None

    union, coloring = refined_union(nx.cycle_graph(4), nx.star_graph(3))
    coloring1, coloring2 = split_coloring(union, coloring)
    assert coloring1.number_colors == 1
    assert coloring2.number_colors == 2


# COLORING COMPARATOR

@pytest.mark.unit
def test_canonical_order_is_size_then_color():
    coloring = Coloring({"a": 5, "b": 5, "c": 2, "d": 9, "e": 2, "f": 2})
    order = [(size, color) for size, color, _members in canonical_classes(coloring)]
    assert order == [(1, 9), (2, 5), (3, 2)]


@pytest.mark.unit
def test_match_returns_pairs_in_rank_order():
    coloring1 = Coloring({"a": 0, "b": 0, "c": 1})
    coloring2 = Coloring({"x": 1, "y": 0, "z": 0})
    pairs = match_color_classes(coloring1, coloring2)
    assert pairs == [(("c",), ("x",)), (("a", "b"), ("y", "z"))]


@pytest.mark.unit
@pytest.mark.parametrize(
    "colors1, colors2",
    [
        ({"a": 0, "b": 1}, {"x": 0, "y": 0}),
        ({"a": 0, "b": 1, "c": 1}, {"x": 0, "y": 0, "z": 1}),
        ({"a": 0, "b": 1}, {"x": 0, "y": 2}),
    ],
)
def test_match_rejects_differences(colors1, colors2):
    assert match_color_classes(Coloring(colors1), Coloring(colors2)) is None


@pytest.mark.unit
def test_match_checks_declared_color_count():
    coloring1 = Coloring({"a": 0, "b": 1}, number_colors=2)
    coloring2 = Coloring({"x": 0, "y": 1}, number_colors=3)
    assert match_color_classes(coloring1, coloring2) is None


# PROPERTY TESTS

@pytest.mark.property
def test_comparator_key_never_merges_distinct_classes(rng_seed):
    """
    Matched ranks compare only (size, representative color). Look for two
    different classes colliding under that key: every matched pair must carry
    one color on all members of both sides, and the members must share their
    neighbor color profile across the two graphs.
    """
    for offset in range(30):
        n = 8 + offset % 10
        G1 = nx.gnp_random_graph(n, 0.3, seed=rng_seed + offset)
        G2 = nx.gnm_random_graph(n, G1.number_of_edges(), seed=rng_seed + 1000 + offset)
        union, coloring = refined_union(G1, G2)
        coloring1, coloring2 = split_coloring(union, coloring)
        pairs = match_color_classes(coloring1, coloring2)
        if pairs is None:
            continue

        for members1, members2 in pairs:
            colors = {coloring1[v] for v in members1} | {coloring2[v] for v in members2}
            assert len(colors) == 1
            profiles = set()
            for v in members1:
                profiles.add(tuple(sorted(coloring1[w] for w in G1[v])))
            for v in members2:
                profiles.add(tuple(sorted(coloring2[w] for w in G2[v])))
            assert len(profiles) == 1


@pytest.mark.property
def test_matched_colorings_have_equal_class_multisets(rng_seed):
    for offset in range(20):
        G1 = nx.gnp_random_graph(12, 0.25, seed=rng_seed + offset)
        G2 = nx.gnp_random_graph(12, 0.25, seed=rng_seed + 500 + offset)
        union, coloring = refined_union(G1, G2)
        coloring1, coloring2 = split_coloring(union, coloring)
        histogram1 = Counter(coloring1.colors.values())
        histogram2 = Counter(coloring2.colors.values())
        assert (match_color_classes(coloring1, coloring2) is not None) == (histogram1 == histogram2)
