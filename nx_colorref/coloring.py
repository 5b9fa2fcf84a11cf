"""
Color refinement (1-WL) and the helpers that compare two colorings

Color ids are ranks of sorted signatures, never positions in an enumeration,
so isomorphic inputs refined from corresponding colorings get identical ids
"""
import logging
from collections import defaultdict
from functools import cached_property
from types import MappingProxyType

logger = logging.getLogger(__name__)


class Coloring:
    """
    Read-only vertex -> color id, the number of colors in use and the derived color classes
    Classes list their members in the order the vertices were given
    """

    def __init__(self, colors, number_colors=None):
        self._colors = MappingProxyType(dict(colors))
        if number_colors is None:
            number_colors = len(set(self._colors.values()))
        self._number_colors = number_colors

    @property
    def colors(self):
        return self._colors

    @property
    def number_colors(self) -> int:
        return self._number_colors

    @cached_property
    def color_classes(self):
        classes = defaultdict(list)
        for v, c in self._colors.items():
            classes[c].append(v)
        return MappingProxyType({c: tuple(members) for c, members in classes.items()})

    def is_discrete(self) -> bool:
        return len(self.color_classes) == len(self.colors)

    def __getitem__(self, v):
        return self.colors[v]

    def __len__(self):
        return len(self.colors)

    def __repr__(self):
        return f"Coloring(number_colors={self.number_colors}, vertices={len(self.colors)})"


def _signature(graph, v, colors, directed):
    if directed:
        return (
            colors[v],
            tuple(sorted(colors[graph.edge_source(e)] for e in graph.in_edges(v))),
            tuple(sorted(colors[graph.edge_target(e)] for e in graph.out_edges(v))),
        )
    return (
        colors[v],
        tuple(sorted(colors[graph.opposite(e, v)] for e in graph.out_edges(v))),
    )


def color_refinement(graph, initial=None) -> Coloring:
    """
    Coarsest stable coloring reachable from `initial` (uniform when None)

    `graph` is anything exposing vertices(), is_directed(), in_edges(), out_edges(),
    edge_source(), edge_target() and opposite(): a ColorRefGraph or a GraphUnion
    `initial` maps every vertex to a sortable color; only the order of its values matters

    Each round colors a vertex by (its color, sorted neighbor colors), in- and
    out-neighbors kept apart for directed graphs, and stops once a round splits
    no class or every class is a singleton
    """
    vertices = graph.vertices()
    directed = graph.is_directed()

    if initial is None:
        colors = {v: 0 for v in vertices}
    else:
        seed = {v: initial[v] for v in vertices}
        ranks = {c: i for i, c in enumerate(sorted(set(seed.values())))}
        colors = {v: ranks[seed[v]] for v in vertices}

    n = len(vertices)
    num_colors = len(set(colors.values()))
    rounds = 0
    while num_colors < n:
        signatures = {v: _signature(graph, v, colors, directed) for v in vertices}
        ranks = {sig: i for i, sig in enumerate(sorted(set(signatures.values())))}
        rounds += 1
        if len(ranks) == num_colors:
            break
        colors = {v: ranks[signatures[v]] for v in vertices}
        num_colors = len(ranks)

    logger.debug("color refinement: %d vertices, %d classes after %d rounds", n, num_colors, rounds)
    return Coloring(colors, num_colors)


def split_coloring(union, coloring):
    """
    Project a coloring of a GraphUnion onto its two graphs
    Both sides keep the union's color id, which is what pairs vertices across graphs later
    """
    sides = {1: {}, 2: {}}
    classes = coloring.color_classes
    for color in sorted(classes):
        for tv in classes[color]:
            sides[tv.origin][tv.vertex] = color
    return Coloring(sides[1]), Coloring(sides[2])


def canonical_classes(coloring):
    """Color classes ordered by (size, color id of a representative)"""
    classes = coloring.color_classes
    ordered = []
    for members in classes.values():
        representative = members[0]
        ordered.append((len(members), coloring.colors[representative], members))
    ordered.sort(key=lambda item: (item[0], item[1]))
    return ordered


def match_color_classes(coloring1, coloring2):
    """
    Rank-by-rank match of two colorings, or None on the first difference
    Returns the list of (members1, members2) pairs in rank order
    """
    if coloring1.number_colors != coloring2.number_colors:
        return None
    if len(coloring1.color_classes) != len(coloring2.color_classes):
        return None

    pairs = []
    for (size1, color1, members1), (size2, color2, members2) in zip(
        canonical_classes(coloring1), canonical_classes(coloring2)
    ):
        if size1 != size2 or color1 != color2:
            return None
        pairs.append((members1, members2))
    return pairs
