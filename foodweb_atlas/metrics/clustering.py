"""
foodweb_atlas/metrics/clustering.py — Clustering coefficient and transitivity.

Local transitivity of a species is the fraction of pairs of its neighbours
that are themselves linked. Both measures are computed on the undirected
projection (see foodweb_atlas.graph.projection): a feeding link counts as a
connection regardless of who eats whom, and reciprocal or repeated links count
once.

Average clustering follows the "skip undefined" convention: species with fewer
than two distinct neighbours have no neighbour pairs, so their local value is
undefined and they are left out of the mean rather than counted as zero.
"""

import logging

import networkx as nx

from foodweb_atlas.graph.projection import undirected_projection

logger = logging.getLogger(__name__)


def _neighbourhood_size(G_u: nx.Graph, node: str) -> int:
    return sum(1 for nbr in G_u[node] if nbr != node)


def local_clustering(G: nx.MultiDiGraph) -> dict[str, float]:
    """Local transitivity for every species on the undirected projection."""
    G_u = undirected_projection(G)
    return {n: float(c) for n, c in nx.clustering(G_u).items()}


def average_clustering(G: nx.MultiDiGraph) -> float:
    """
    Mean local transitivity over species with at least two distinct neighbours.

    Returns:
        Float in [0, 1]. 0.0 when no species qualifies (empty web, single
        species, or a web without any species of undirected degree >= 2).
    """
    G_u = undirected_projection(G)
    eligible = [n for n in G_u.nodes if _neighbourhood_size(G_u, n) >= 2]
    if not eligible:
        return 0.0

    coefficients = nx.clustering(G_u, nodes=eligible)
    value = sum(coefficients.values()) / len(eligible)

    logger.debug(
        "Average clustering over %d/%d eligible species: %.4f.",
        len(eligible),
        G_u.number_of_nodes(),
        value,
    )
    return float(value)


def global_transitivity(G: nx.MultiDiGraph) -> float:
    """Fraction of connected triplets that are closed (3 × triangles / triads)."""
    G_u = undirected_projection(G)
    if G_u.number_of_edges() == 0:
        return 0.0
    return float(nx.transitivity(G_u))
