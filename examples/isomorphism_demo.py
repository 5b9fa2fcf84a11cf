import networkx as nx

from nx_colorref import ColorRefinementIsomorphismInspector, Undecidable


def describe(inspector):
    try:
        result = inspector.isomorphism_exists()
    except Undecidable:
        return "undecidable (needs an exact search)"
    if not result:
        return "non-isomorphic"
    if inspector.is_coloring_discrete():
        return "isomorphic (discrete coloring)"
    return "isomorphic (forest)"


def main():
    print("=== Color Refinement Isomorphism Demo ===")

    path = nx.path_graph(6)
    relabeled = nx.relabel_nodes(path, {i: chr(ord("a") + (i * 5) % 6) for i in path})

    print("P6 vs relabeled P6")
    inspector = ColorRefinementIsomorphismInspector(path, relabeled)
    print("colorref:", describe(inspector))
    for mapping in inspector.get_mappings():
        print("mapping :", mapping.as_dict())

    print("\nC6 vs two triangles (should be undecidable)")
    triangles = nx.disjoint_union(nx.cycle_graph(3), nx.cycle_graph(3))
    print("colorref:", describe(ColorRefinementIsomorphismInspector(nx.cycle_graph(6), triangles)))
    print("NetworkX:", nx.is_isomorphic(nx.cycle_graph(6), triangles))

    print("\nRandom relabel sanity check")
    rnd = nx.gnp_random_graph(200, 0.02, seed=3)
    shuffled = nx.relabel_nodes(rnd, {u: u * 3 % 200 for u in rnd})
    print("colorref:", describe(ColorRefinementIsomorphismInspector(rnd, shuffled)))


if __name__ == "__main__":
    main()
