"""
Isomorphism decision on top of color refinement

The two graphs are refined together as one GraphUnion, the union coloring is
split back per graph and compared class by class. A match only certifies
isomorphism when the coloring is discrete or both graphs are forests; any
other match is reported as Undecidable so the caller can escalate to an exact
search.
"""
import enum
import logging
from collections import defaultdict, deque
from functools import cached_property
from typing import NamedTuple, Optional

from .coloring import color_refinement, match_color_classes, split_coloring
from .exceptions import Undecidable
from .graph import ColorRefGraph, convert_from_nx
from .mapping import GraphMapping
from .union import GraphUnion

logger = logging.getLogger(__name__)


class Verdict(enum.Enum):
    NOT_ISOMORPHIC = "not-isomorphic"
    DISCRETE = "discrete"
    FOREST = "forest"
    UNDECIDABLE = "undecidable"


class Decision(NamedTuple):
    verdict: Verdict
    mapping: Optional[GraphMapping] = None


def _as_colorref_graph(G):
    if isinstance(G, ColorRefGraph):
        return G
    return convert_from_nx(G)


class ColorRefinementIsomorphismInspector:
    """
    Decides isomorphism of two simple graphs by color refinement

    Accepts NetworkX graphs or ColorRefGraph objects and raises InvalidGraph right
    away for parallel edges, self-loops, mixed graphs or a directedness mismatch.
    The decision runs once, on first use, and is replayed afterwards; an
    instance is not safe to share between threads.
    """

    def __init__(self, graph1, graph2):
        self._graph1 = _as_colorref_graph(graph1)
        self._graph2 = _as_colorref_graph(graph2)
        GraphUnion.validate(self._graph1, self._graph2)

    @property
    def graph1(self):
        return self._graph1

    @property
    def graph2(self):
        return self._graph2

    @cached_property
    def decision(self) -> Decision:
        decision = self._decide()
        logger.debug(
            "isomorphism decision for %d/%d vertices: %s",
            self._graph1.number_of_nodes(),
            self._graph2.number_of_nodes(),
            decision.verdict.value,
        )
        return decision

    def isomorphism_exists(self) -> bool:
        verdict = self.decision.verdict
        if verdict is Verdict.UNDECIDABLE:
            raise Undecidable(
                "Color refinement cannot decide isomorphism: the stable coloring is "
                "neither discrete nor are both graphs forests"
            )
        return verdict is not Verdict.NOT_ISOMORPHIC

    def get_mappings(self):
        """Iterator over zero or one GraphMapping; raises Undecidable when inconclusive"""
        if not self.isomorphism_exists():
            return iter(())
        return iter((self.decision.mapping,))

    def is_coloring_discrete(self) -> bool:
        return self.decision.verdict is Verdict.DISCRETE

    def is_forest(self) -> bool:
        return self.decision.verdict is Verdict.FOREST

    def _decide(self) -> Decision:
        g1, g2 = self._graph1, self._graph2
        if g1.number_of_nodes() != g2.number_of_nodes():
            return Decision(Verdict.NOT_ISOMORPHIC)
        if g1.number_of_edges() != g2.number_of_edges():
            return Decision(Verdict.NOT_ISOMORPHIC)

        union = GraphUnion(g1, g2)
        coloring = color_refinement(union)
        coloring1, coloring2 = split_coloring(union, coloring)

        if coloring1.number_colors != coloring2.number_colors:
            return Decision(Verdict.NOT_ISOMORPHIC)
        if len(coloring1.color_classes) != len(coloring2.color_classes):
            return Decision(Verdict.NOT_ISOMORPHIC)

        pairs = match_color_classes(coloring1, coloring2)
        if pairs is None:
            return Decision(Verdict.NOT_ISOMORPHIC)

        if coloring1.is_discrete() and coloring2.is_discrete():
            return Decision(Verdict.DISCRETE, GraphMapping.from_class_pairs(g1, g2, pairs))

        if g1.is_forest() and g2.is_forest():
            mapping = self._forest_mapping(coloring1, coloring2)
            if mapping is not None:
                return Decision(Verdict.FOREST, mapping)
            logger.warning("forest colorings matched but rooted components did not")

        return Decision(Verdict.UNDECIDABLE)

    def _forest_mapping(self, coloring1, coloring2):
        """
        Pair the components of two matched forests and walk them top-down

        Each component is rooted at its first vertex of smallest color; roots are
        paired by color, k-th with k-th in each graph's vertex order. From a matched
        pair (u, v) the children of u and v are paired by their rooted subtree code,
        again k-th with k-th, so the result maps edges onto edges. Returns None
        when the rooted components do not line up.
        """
        table = {}
        groups1 = _rooted_components(self._graph1, coloring1, table)
        groups2 = _rooted_components(self._graph2, coloring2, table)
        if set(groups1) != set(groups2):
            return None

        pairs = []
        for color, trees1 in groups1.items():
            trees2 = groups2[color]
            if len(trees1) != len(trees2):
                return None
            for (r1, codes1, kids1), (r2, codes2, kids2) in zip(trees1, trees2):
                if codes1[r1] != codes2[r2]:
                    return None
                stack = [(r1, r2)]
                while stack:
                    u, v = stack.pop()
                    pairs.append(((u,), (v,)))
                    pending = defaultdict(deque)
                    for d, w in kids2[v]:
                        pending[d, codes2[w]].append(w)
                    for d, w in kids1[u]:
                        stack.append((w, pending[d, codes1[w]].popleft()))
        return GraphMapping.from_class_pairs(self._graph1, self._graph2, pairs)


def _neighbors(graph, v):
    """(direction, neighbor) pairs; 1 for out-, 2 for in-neighbors, 0 when undirected"""
    if graph.is_directed():
        for e in graph.out_edges(v):
            yield 1, graph.edge_target(e)
        for e in graph.in_edges(v):
            yield 2, graph.edge_source(e)
    else:
        for e in graph.out_edges(v):
            yield 0, graph.opposite(e, v)


def _rooted_tree(graph, root, table):
    """
    Codes of every subtree of the tree hanging from root
    Equal codes (drawn from the shared `table`) mean isomorphic rooted subtrees,
    edge directions included; children[v] lists (direction, child) in neighbor order
    """
    parent = {root: None}
    order = [root]
    children = {}
    for v in order:
        kids = []
        for d, w in _neighbors(graph, v):
            if w in parent:
                continue
            parent[w] = v
            kids.append((d, w))
            order.append(w)
        children[v] = kids

    codes = {}
    for v in reversed(order):
        key = tuple(sorted((d, codes[w]) for d, w in children[v]))
        codes[v] = table.setdefault(key, len(table))
    return codes, children


def _rooted_components(graph, coloring, table):
    """Components rooted at their first smallest-colored vertex, grouped by root color"""
    groups = defaultdict(list)
    seen = set()
    for start in graph.vertices():
        if start in seen:
            continue
        component = [start]
        seen.add(start)
        for v in component:
            for _d, w in _neighbors(graph, v):
                if w not in seen:
                    seen.add(w)
                    component.append(w)
        root = min(component, key=lambda x: (coloring[x], graph.index_of(x)))
        codes, children = _rooted_tree(graph, root, table)
        groups[coloring[root]].append((root, codes, children))
    return groups
