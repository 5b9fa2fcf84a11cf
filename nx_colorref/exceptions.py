import networkx as nx


class InvalidGraph(nx.NetworkXError):
    """
    Raised when the input graphs cannot be compared by color refinement
    (parallel edges, self-loops, mixed directedness or a directedness mismatch)
    """


class Undecidable(nx.NetworkXException):
    """
    Colorings matched but neither a discrete coloring nor forest structure
    certifies the answer; an exact method has to decide
    """
