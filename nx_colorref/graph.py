from typing import Hashable, NamedTuple

import networkx as nx


class Edge(NamedTuple):
    source: Hashable
    target: Hashable
    key: Hashable = 0
    directed: bool = False


class ColorRefGraph:
    """
    Read-only backend graph understood by NetworkX dispatch
    Keeps the original node labels and a stable label<->index ordering
    `edges` are undirected links, `arcs` are directed; a graph holding both is mixed
    """

    __networkx_backend__ = "colorref"

    def __init__(self, nodes, edges=(), arcs=(), directed=None, orig_graph=None):
        self._nodes = list(nodes)
        self._index = {n: i for i, n in enumerate(self._nodes)}
        if len(self._index) != len(self._nodes):
            raise ValueError("Duplicate node labels")
        self._orig_graph = orig_graph

        self._edges = []
        self._succ = {n: [] for n in self._nodes}
        self._pred = {n: [] for n in self._nodes}
        self._links = {n: [] for n in self._nodes}
        self._lookup = {}
        self._parallel = False
        self._self_loops = False

        for e in edges:
            self._add(e, directed=False)
        for e in arcs:
            self._add(e, directed=True)

        has_links = any(not e.directed for e in self._edges)
        has_arcs = any(e.directed for e in self._edges)
        self._mixed = has_links and has_arcs
        if has_links or has_arcs:
            self._directed = has_arcs and not has_links
        else:
            self._directed = bool(directed)

    def _add(self, e, directed):
        u, v = e[0], e[1]
        key = e[2] if len(e) > 2 else 0
        if u not in self._index or v not in self._index:
            raise ValueError(f"Edge ({u!r}, {v!r}) has an endpoint outside the node set")
        edge = Edge(u, v, key, directed)
        ends = (u, v) if directed else frozenset((u, v))
        if ends in self._lookup:
            self._parallel = True
        else:
            self._lookup[ends] = edge
        if u == v:
            self._self_loops = True

        self._edges.append(edge)
        if directed:
            self._succ[u].append(edge)
            self._pred[v].append(edge)
        else:
            self._links[u].append(edge)
            if u != v:
                self._links[v].append(edge)

    def __len__(self):
        return len(self._nodes)

    def __contains__(self, n):
        return n in self._index

    def vertices(self):
        return tuple(self._nodes)

    def edges(self):
        return tuple(self._edges)

    def number_of_nodes(self) -> int:
        return len(self._nodes)

    def number_of_edges(self) -> int:
        return len(self._edges)

    def edge_source(self, e):
        return e.source

    def edge_target(self, e):
        return e.target

    def opposite(self, e, v):
        if v == e.source:
            return e.target
        if v == e.target:
            return e.source
        raise ValueError(f"{v!r} is not an endpoint of {e!r}")

    def out_edges(self, v):
        return tuple(self._succ[v]) + tuple(self._links[v])

    def in_edges(self, v):
        return tuple(self._pred[v]) + tuple(self._links[v])

    def get_edge(self, u, v):
        """Edge joining u and v (u -> v for arcs), or None"""
        edge = self._lookup.get((u, v))
        if edge is None:
            edge = self._lookup.get(frozenset((u, v)))
        return edge

    def index_of(self, v) -> int:
        return self._index[v]

    def node_at(self, i):
        return self._nodes[i]

    def is_directed(self) -> bool:
        return self._directed

    def is_mixed(self) -> bool:
        return self._mixed

    def is_multigraph(self) -> bool:
        return self._parallel

    def has_self_loops(self) -> bool:
        return self._self_loops

    def is_simple(self) -> bool:
        return not self._parallel and not self._self_loops

    def is_forest(self) -> bool:
        """
        True when the underlying undirected multigraph has no cycles
        The empty graph counts as a forest
        """
        if not self._nodes:
            return True
        H = nx.MultiGraph()
        H.add_nodes_from(self._nodes)
        H.add_edges_from((e.source, e.target) for e in self._edges)
        return nx.is_forest(H)


def convert_from_nx(G, **kwargs):
    """
    Convert a NetworkX graph -> ColorRefGraph
    - Node order of G becomes the vertex ordering
    - Parallel edges of multigraphs are kept so validation can reject them
    - Attributes are dropped
    """
    nodes = list(G.nodes())
    if G.is_multigraph():
        edges = list(G.edges(keys=True))
    else:
        edges = list(G.edges())

    if G.is_directed():
        return ColorRefGraph(nodes, arcs=edges, directed=True, orig_graph=G)
    return ColorRefGraph(nodes, edges=edges, directed=False, orig_graph=G)


def convert_to_nx(obj, **kwargs):
    """ColorRefGraph -> NetworkX Graph/DiGraph (no attributes)"""
    if isinstance(obj, ColorRefGraph):
        if getattr(obj, "_orig_graph", None) is not None:
            return obj._orig_graph
        if obj.is_mixed():
            raise nx.NetworkXError("NetworkX has no mixed graph type")
        if obj.is_directed():
            H = nx.MultiDiGraph() if obj.is_multigraph() else nx.DiGraph()
        else:
            H = nx.MultiGraph() if obj.is_multigraph() else nx.Graph()
        H.add_nodes_from(obj.vertices())
        H.add_edges_from((e.source, e.target) for e in obj.edges())
        return H
    return obj
