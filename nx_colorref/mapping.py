import numpy as np


class GraphMapping:
    """
    Immutable vertex bijection between graph1 and graph2
    Stored as read-only index arrays over each graph's vertex ordering:
    forward[i] is the graph2 index of graph1 vertex i, inverse is its exact inverse
    """

    def __init__(self, graph1, graph2, forward, inverse):
        self._graph1 = graph1
        self._graph2 = graph2
        self._forward = np.array(forward, dtype=np.intp)
        self._inverse = np.array(inverse, dtype=np.intp)
        self._forward.flags.writeable = False
        self._inverse.flags.writeable = False

    @classmethod
    def from_class_pairs(cls, graph1, graph2, pairs):
        """
        Pair the k-th member of each matched (members1, members2) class pair
        Every vertex of both graphs must appear in exactly one pair
        """
        n = graph1.number_of_nodes()
        if graph2.number_of_nodes() != n:
            raise ValueError("Graphs differ in vertex count")
        forward = np.full(n, -1, dtype=np.intp)
        for members1, members2 in pairs:
            if len(members1) != len(members2):
                raise ValueError("Matched classes differ in size")
            for u, v in zip(members1, members2):
                forward[graph1.index_of(u)] = graph2.index_of(v)
        if (forward < 0).any():
            raise ValueError("Class pairs do not cover graph1")

        inverse = np.full(n, -1, dtype=np.intp)
        inverse[forward] = np.arange(n, dtype=np.intp)
        if (inverse < 0).any():
            raise ValueError("Class pairs do not define a bijection")
        return cls(graph1, graph2, forward, inverse)

    @property
    def graph1(self):
        return self._graph1

    @property
    def graph2(self):
        return self._graph2

    @property
    def forward_indices(self):
        return self._forward

    @property
    def inverse_indices(self):
        return self._inverse

    def vertex_correspondence(self, vertex, forward=True):
        if forward:
            return self._graph2.node_at(int(self._forward[self._graph1.index_of(vertex)]))
        return self._graph1.node_at(int(self._inverse[self._graph2.index_of(vertex)]))

    def edge_correspondence(self, edge, forward=True):
        """Counterpart of `edge` in the other graph, or None when it has none"""
        other = self._graph2 if forward else self._graph1
        u = self.vertex_correspondence(edge.source, forward)
        v = self.vertex_correspondence(edge.target, forward)
        return other.get_edge(u, v)

    def inverse(self):
        return GraphMapping(self._graph2, self._graph1, self._inverse, self._forward)

    def as_dict(self, forward=True):
        source = self._graph1 if forward else self._graph2
        return {v: self.vertex_correspondence(v, forward) for v in source.vertices()}

    def __iter__(self):
        for i, j in enumerate(self._forward):
            yield self._graph1.node_at(i), self._graph2.node_at(int(j))

    def __len__(self):
        return len(self._forward)

    def __eq__(self, other):
        if not isinstance(other, GraphMapping):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __hash__(self):
        return hash(frozenset(self.as_dict().items()))

    def __repr__(self):
        return f"GraphMapping({self.as_dict()!r})"
