from functools import cached_property
from typing import Hashable, NamedTuple

from .exceptions import InvalidGraph


class TaggedVertex(NamedTuple):
    vertex: Hashable
    origin: int


class TaggedEdge(NamedTuple):
    edge: Hashable
    origin: int


class GraphUnion:
    """
    Disjoint union of two graphs over tagged vertices (v, 1) and (v, 2)
    Lets refinement color both graphs in one pass so colors are directly comparable
    """

    def __init__(self, graph1, graph2):
        self.validate(graph1, graph2)
        self._graphs = {1: graph1, 2: graph2}
        self._directed = graph1.is_directed()

    @staticmethod
    def validate(graph1, graph2):
        for name, graph in (("graph1", graph1), ("graph2", graph2)):
            if graph.is_multigraph():
                raise InvalidGraph(f"{name} has parallel edges")
            if graph.has_self_loops():
                raise InvalidGraph(f"{name} has self-loops")
            if graph.is_mixed():
                raise InvalidGraph(f"{name} mixes directed and undirected edges")
        if graph1.is_directed() != graph2.is_directed():
            raise InvalidGraph("Graphs must both be directed or undirected")

    @cached_property
    def _vertices(self):
        return tuple(
            TaggedVertex(v, origin)
            for origin in (1, 2)
            for v in self._graphs[origin].vertices()
        )

    def graph(self, origin):
        return self._graphs[origin]

    def vertices(self):
        return self._vertices

    def number_of_nodes(self) -> int:
        return len(self._vertices)

    def edges(self):
        return tuple(
            TaggedEdge(e, origin)
            for origin in (1, 2)
            for e in self._graphs[origin].edges()
        )

    def is_directed(self) -> bool:
        return self._directed

    def edge_source(self, te):
        return TaggedVertex(self._graphs[te.origin].edge_source(te.edge), te.origin)

    def edge_target(self, te):
        return TaggedVertex(self._graphs[te.origin].edge_target(te.edge), te.origin)

    def opposite(self, te, tv):
        return TaggedVertex(self._graphs[te.origin].opposite(te.edge, tv.vertex), te.origin)

    def out_edges(self, tv):
        return tuple(TaggedEdge(e, tv.origin) for e in self._graphs[tv.origin].out_edges(tv.vertex))

    def in_edges(self, tv):
        return tuple(TaggedEdge(e, tv.origin) for e in self._graphs[tv.origin].in_edges(tv.vertex))
