"""
foodweb_atlas/graph/projection.py — Undirected projection of the food web.

Clustering and community detection are defined on undirected graphs. Rather
than handing the directed multigraph to those algorithms and relying on their
implicit conversion, the projection is built explicitly here.

Collapse rule:
    - Edge direction is dropped.
    - Parallel edges (same predator, same prey) collapse to one edge.
    - Reciprocal edges (A eats B and B eats A) collapse to one edge.
    - Self-loops are kept; neighbourhood-based metrics exclude them.

Node attributes are copied so downstream consumers (renderers) keep metadata.
"""

import logging

import networkx as nx

logger = logging.getLogger(__name__)


def undirected_projection(G: nx.MultiDiGraph) -> nx.Graph:
    """
    Project the food web onto a simple undirected graph.

    Args:
        G: Food web from build_food_web() (any NetworkX graph is accepted).

    Returns:
        G_u: nx.Graph on the same node set, one edge per unordered species
             pair that interacts in either direction.
    """
    G_u = nx.Graph()
    G_u.add_nodes_from(G.nodes(data=True))
    G_u.add_edges_from((u, v) for u, v in G.edges())
    G_u.graph.update(G.graph)

    logger.debug(
        "Undirected projection: %d directed edges collapsed to %d undirected edges.",
        G.number_of_edges(),
        G_u.number_of_edges(),
    )
    return G_u


def collapsed_digraph(G: nx.MultiDiGraph) -> nx.DiGraph:
    """Return a simple DiGraph with parallel edges merged; direction kept."""
    D = nx.DiGraph()
    D.add_nodes_from(G.nodes(data=True))
    D.add_edges_from((u, v) for u, v in G.edges())
    return D
