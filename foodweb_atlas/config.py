"""
foodweb_atlas/config.py — All tunable parameters for Food Web Atlas.

Every random seed, normalisation switch and rendering constant lives here so
that a run is fully described by one FoodWebConfig value. The config object is
passed explicitly into the builder, the community detector and the renderer;
nothing reads process-wide random state.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FoodWebConfig:
    """
    Immutable configuration for the Food Web Atlas analysis pipeline.

    Override by constructing a new FoodWebConfig with the desired values, or
    with dataclasses.replace(DEFAULT_CONFIG, seed=7).
    """

    # ── Reproducibility ───────────────────────────────────────────────────────
    seed: int = 42
    # Seed for the spring layout and for stochastic community detection
    # (Louvain, label propagation). Same seed + same input → same output.

    # ── Graph construction ────────────────────────────────────────────────────
    allow_implicit_species: bool = False
    # When False, an interaction naming an undeclared species is rejected with
    # SpeciesValidationError. When True, the species is inserted and a warning
    # is logged.

    # ── Centrality ────────────────────────────────────────────────────────────
    betweenness_normalized: bool = False
    # False: raw count of ordered (source, target) shortest paths through a node.
    # True: divide by (N - 1)(N - 2), the number of ordered pairs excluding the node.

    keystone_percentile: float = 75.0
    # Species with betweenness >= this percentile of all scores (and > 0)
    # are reported as keystone candidates.

    top_n_central: int = 5
    # Length of the ranked centrality list in summaries.

    # ── Community detection ───────────────────────────────────────────────────
    community_method: str = "louvain"
    # One of: "louvain", "greedy_modularity", "label_propagation".

    louvain_resolution: float = 1.0
    # Resolution > 1 favours smaller communities, < 1 favours larger ones.

    # ── Rendering ─────────────────────────────────────────────────────────────
    layout_iterations: int = 50
    # Fruchterman-Reingold iterations for nx.spring_layout.

    figure_dpi: int = 150
    figure_size: tuple[float, float] = (9.0, 7.0)

    # ── Output ────────────────────────────────────────────────────────────────
    output_dir: str = "output"
    # Relative to the working directory. Figures, reports and tables land here.


# Singleton default; import this everywhere instead of constructing anew.
DEFAULT_CONFIG = FoodWebConfig()
