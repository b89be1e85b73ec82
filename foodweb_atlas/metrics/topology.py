"""
foodweb_atlas/metrics/topology.py — Topological ordering of the food web.

With edges pointing predator → prey, a plain topological sort lists predators
before their prey. Ecologists usually read a web bottom-up, so the default
``prey_first=True`` sorts the reversed graph: every species appears after all
of the species it eats, and basal species (producers) come first.

Ties are broken by declaration order, so the result is deterministic for a
given input.

A food web with a directed feeding cycle (A eats B eats ... eats A) has no
topological order. That case raises CycleDetected carrying the cycle found by
nx.find_cycle(); no partial order is returned.
"""

import logging

import networkx as nx

from foodweb_atlas.graph.builder import species_order

logger = logging.getLogger(__name__)


class CycleDetected(ValueError):
    """Raised when a topological order is requested on a cyclic food web."""

    def __init__(self, cycle: list[tuple[str, str]]):
        path = " -> ".join([cycle[0][0]] + [v for _, v in cycle]) if cycle else "?"
        super().__init__(f"Food web contains a feeding cycle: {path}")
        self.cycle = cycle


def topological_order(G: nx.MultiDiGraph, prey_first: bool = True) -> list[str]:
    """
    Total order of species consistent with every feeding link.

    Args:
        G:          Food web (edges predator → prey).
        prey_first: True  — each prey precedes all of its predators.
                    False — each predator precedes all of its prey
                            (edge source before edge target).

    Returns:
        List of every species exactly once. Empty list for an empty web.

    Raises:
        CycleDetected: the web contains a directed cycle (self-loops included).
    """
    D = G.reverse(copy=False) if prey_first else G
    order = species_order(G)

    try:
        ordering = list(nx.lexicographical_topological_sort(D, key=order.__getitem__))
    except nx.NetworkXUnfeasible:
        cycle = [(u, v) for u, v, *_ in nx.find_cycle(G)]
        logger.debug("Topological order unavailable; cycle of length %d.", len(cycle))
        raise CycleDetected(cycle) from None

    return ordering


def is_acyclic(G: nx.MultiDiGraph) -> bool:
    """True when the food web has no directed feeding cycle."""
    return nx.is_directed_acyclic_graph(G)
