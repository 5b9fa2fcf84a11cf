from importlib import import_module

_exports = {
    "ColorRefGraph": "nx_colorref.graph",
    "Edge": "nx_colorref.graph",
    "convert_from_nx": "nx_colorref.graph",
    "convert_to_nx": "nx_colorref.graph",
    "GraphUnion": "nx_colorref.union",
    "TaggedVertex": "nx_colorref.union",
    "TaggedEdge": "nx_colorref.union",
    "Coloring": "nx_colorref.coloring",
    "color_refinement": "nx_colorref.coloring",
    "split_coloring": "nx_colorref.coloring",
    "canonical_classes": "nx_colorref.coloring",
    "match_color_classes": "nx_colorref.coloring",
    "ColorRefinementIsomorphismInspector": "nx_colorref.isomorphism",
    "Decision": "nx_colorref.isomorphism",
    "Verdict": "nx_colorref.isomorphism",
    "GraphMapping": "nx_colorref.mapping",
    "InvalidGraph": "nx_colorref.exceptions",
    "Undecidable": "nx_colorref.exceptions",
    "backend": "nx_colorref.backend",
    "get_info": "nx_colorref.backend",
    "is_isomorphic": "nx_colorref.backend",
}

__all__ = list(_exports)


def __getattr__(name):
    """
    lazily expose the public API so that networkx can load nx_colorref.backend
    through its entry point without importing the whole package first
    """
    if name in _exports:
        module = import_module(_exports[name])
        return getattr(module, name)
    raise AttributeError(f"module 'nx_colorref' has no attribute {name!r}")
