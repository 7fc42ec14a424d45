"""
Per-unit graph data.

Data Structures:
    - Graph: Defs, refs and docs of one source unit, in artifact order

Loading:
    - load_graph(): Read and decode a unit's graph artifact from the store
    - decode_graph(): Build a Graph from already-decoded JSON
"""

from srcnav.core.graph.base import Graph
from srcnav.core.graph.loader import decode_graph, graph_path, load_graph

__all__ = [
    "Graph",
    "decode_graph",
    "graph_path",
    "load_graph",
]
