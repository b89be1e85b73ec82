"""
foodweb_atlas/metrics/centrality.py — Betweenness centrality and keystone species.

Betweenness counts, for every species v, the shortest feeding chains between
other ordered pairs (s, t) that pass through v. Paths follow edge direction:
a chain predator → prey cannot be walked backwards, so a basal species
(eats nothing) never lies on a path and scores 0.

Species that sit on many chains are the structural "keystones" of the web:
removing them breaks the most predator-to-resource routes. This is a
topological proxy, not an ecological keystone assessment.

Parallel interactions do not create additional shortest paths; betweenness is
computed on the collapsed directed graph.
"""

import logging

import networkx as nx
import numpy as np

from foodweb_atlas.config import DEFAULT_CONFIG, FoodWebConfig
from foodweb_atlas.graph.builder import species_order
from foodweb_atlas.graph.projection import collapsed_digraph

logger = logging.getLogger(__name__)


def betweenness_centrality(
    G: nx.MultiDiGraph,
    normalized: bool | None = None,
    config: FoodWebConfig = DEFAULT_CONFIG,
) -> dict[str, float]:
    """
    Directed betweenness centrality of every species.

    Args:
        G:          Food web (edges predator → prey).
        normalized: If False, raw path counts (ties split fractionally between
                    equally short paths). If True, divided by (N − 1)(N − 2).
                    None defers to config.betweenness_normalized.
        config:     FoodWebConfig.

    Returns:
        Dict mapping species → betweenness (float). Empty for an empty web;
        all zeros for webs of one or two species.
    """
    if normalized is None:
        normalized = config.betweenness_normalized

    D = collapsed_digraph(G)
    scores = nx.betweenness_centrality(D, normalized=normalized)

    logger.debug(
        "Betweenness computed for %d species (normalized=%s). Max: %.3f.",
        len(scores),
        normalized,
        max(scores.values(), default=0.0),
    )
    return {n: float(s) for n, s in scores.items()}


def rank_by_centrality(
    G: nx.MultiDiGraph,
    scores: dict[str, float],
    top_n: int | None = None,
) -> list[tuple[str, float]]:
    """
    Sort species by descending score; ties keep declaration order.

    Returns:
        List of (species, score) tuples, truncated to top_n when given.
    """
    order = species_order(G)
    ranked = sorted(scores.items(), key=lambda item: (-item[1], order.get(item[0], len(order))))
    return ranked[:top_n] if top_n is not None else ranked


def keystone_species(
    G: nx.MultiDiGraph,
    scores: dict[str, float],
    config: FoodWebConfig = DEFAULT_CONFIG,
) -> list[str]:
    """
    Species whose betweenness is positive and >= the configured percentile.

    The cut-off is numpy's linear-interpolated percentile of all scores at
    config.keystone_percentile. Returned in descending score order.
    """
    if not scores:
        return []

    values = np.array(list(scores.values()), dtype=float)
    cutoff = float(np.percentile(values, config.keystone_percentile))

    keystones = [
        sp for sp, score in rank_by_centrality(G, scores)
        if score > 0 and score >= cutoff
    ]
    logger.debug(
        "Keystone cut-off at p%.0f = %.3f: %d species.",
        config.keystone_percentile,
        cutoff,
        len(keystones),
    )
    return keystones
