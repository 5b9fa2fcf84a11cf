import logging
import sys

import networkx as nx

from .exceptions import InvalidGraph, Undecidable
from .graph import ColorRefGraph, convert_from_nx, convert_to_nx
from .isomorphism import ColorRefinementIsomorphismInspector

logger = logging.getLogger(__name__)

BACKEND_NAME = "colorref"

DEFAULT_CONFIG = {
    "fallback_to_exact": True,
}


def _config_value(name):
    """
    Read an option from nx.config.backends.colorref
    The backend is only registered there once installed; defaults apply otherwise
    """
    backends = getattr(nx.config, "backends", None)
    config = getattr(backends, BACKEND_NAME, None)
    return getattr(config, name, DEFAULT_CONFIG[name])


def can_run(name, args, kwargs):
    return name in ("is_isomorphic",)


def should_run(name, args, kwargs):
    return True


def is_isomorphic(G1, G2, node_match=None, edge_match=None, **kwargs):
    """
    Backend implementation for nx.is_isomorphic
    Decides by color refinement; when refinement is inconclusive or the graphs are
    not simple, escalates to the exact NetworkX search (config option fallback_to_exact)
    If any match functions are used, falls back to Python NetworkX
    """
    if node_match is not None or edge_match is not None:
        G1 = convert_to_nx(G1)
        G2 = convert_to_nx(G2)
        return nx.is_isomorphic(G1, G2, node_match=node_match, edge_match=edge_match)
    try:
        inspector = ColorRefinementIsomorphismInspector(G1, G2)
        return inspector.isomorphism_exists()
    except (Undecidable, InvalidGraph) as exc:
        if not _config_value("fallback_to_exact"):
            raise
        logger.info("color refinement gave no answer (%s); using exact search", exc)
        G1 = convert_to_nx(G1)
        G2 = convert_to_nx(G2)
        return nx.is_isomorphic(G1, G2)


backend = sys.modules[__name__]


def get_info():
    return {
        "backend_name": BACKEND_NAME,
        "project": "nx-colorref",
        "package": "nx_colorref",
        "short_summary": "Color refinement isomorphism test for NetworkX.",
        "default_config": dict(DEFAULT_CONFIG),
        "functions": {
            "is_isomorphic": {
                "additional_docs": (
                    "Color refinement (1-WL) decision; certifies isomorphism when the "
                    "stable coloring is discrete or both graphs are forests, otherwise "
                    "escalates to the exact NetworkX search."
                ),
                "additional_parameters": {},
            },
        },
    }


__all__ = [
    "ColorRefGraph",
    "backend",
    "can_run",
    "convert_from_nx",
    "convert_to_nx",
    "get_info",
    "is_isomorphic",
    "should_run",
]
