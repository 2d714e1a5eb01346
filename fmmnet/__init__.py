"""Road network model, candidate search and shortest-path routing for map matching."""

__version__ = "0.1.0"

__all__ = [
    "util",
    "types",
    "heap",
    "network",
    "network_graph",
    "bidirectional_network_graph",
]