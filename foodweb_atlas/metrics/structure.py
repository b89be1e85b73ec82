"""
foodweb_atlas/metrics/structure.py — Size, degree and connectance.

Connectance is the classic food-web density measure: the fraction of all
possible directed feeding links that are realised,

    C = L / (S × (S − 1))

where L is the number of interactions and S the number of species. Self-loops
are excluded from the denominator. Parallel interactions each count toward L,
so C is a density rather than a probability and is never clamped.
"""

import logging

import networkx as nx

logger = logging.getLogger(__name__)

DEGREE_MODES = ("in", "out", "all")


def node_count(G: nx.MultiDiGraph) -> int:
    """Number of species."""
    return G.number_of_nodes()


def edge_count(G: nx.MultiDiGraph) -> int:
    """Number of interactions, parallel edges counted separately."""
    return G.number_of_edges()


def degree(G: nx.MultiDiGraph, mode: str = "all") -> dict[str, int]:
    """
    Count incident interactions for every species.

    Args:
        G:    Food web (edges predator → prey).
        mode: "in"  — number of consumers (edges arriving at the species),
              "out" — number of resources (edges leaving the species),
              "all" — in + out. Parallel edges are not deduplicated; a
                      self-loop contributes one to "in" and one to "out".

    Returns:
        Dict mapping species → degree. Empty dict for an empty graph.

    Raises:
        ValueError: mode is not one of "in", "out", "all".
    """
    if mode == "in":
        return dict(G.in_degree())
    if mode == "out":
        return dict(G.out_degree())
    if mode == "all":
        return {n: G.in_degree(n) + G.out_degree(n) for n in G.nodes}
    raise ValueError(f"Unknown degree mode {mode!r}; expected one of {DEGREE_MODES}.")


def connectance(G: nx.MultiDiGraph) -> float:
    """
    Directed connectance L / (S(S − 1)); 0.0 when the web has fewer than two species.
    """
    n = G.number_of_nodes()
    if n <= 1:
        return 0.0
    value = G.number_of_edges() / (n * (n - 1))
    logger.debug("Connectance: %d links / %d possible = %.4f.", G.number_of_edges(), n * (n - 1), value)
    return value
