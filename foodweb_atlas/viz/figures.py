"""
foodweb_atlas/viz/figures.py — Static food-web figures (matplotlib).

Two figures, both on the same Fruchterman-Reingold layout so they can be read
side by side:

    foodweb_network.png      — species and predator → prey arrows
    foodweb_communities.png  — same layout, species coloured by community

Usage:
    from foodweb_atlas.viz.figures import generate_all_figures
    paths = generate_all_figures(result, output_dir="output/figures")
    # paths = {"foodweb_network.png": "/abs/path/...", ...}
"""

from __future__ import annotations

import logging
import os
from math import sqrt
from typing import TYPE_CHECKING

import matplotlib

matplotlib.use("Agg")

import matplotlib.patches as mpatches
import matplotlib.pyplot as plt
import networkx as nx

from foodweb_atlas.config import DEFAULT_CONFIG, FoodWebConfig
from foodweb_atlas.graph.projection import collapsed_digraph

if TYPE_CHECKING:
    from foodweb_atlas.metrics.communities import CommunityAssignment
    from foodweb_atlas.pipeline import PipelineResult

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Shared palette
# ---------------------------------------------------------------------------
C_NODE = "#2196A6"      # teal: species
C_EDGE = "#5A6B7C"      # slate: feeding links
C_DARK = "#1A2B3C"      # near-black
C_LIGHT = "#E8EFF5"     # background tint

COMMUNITY_PALETTE = [
    "#2196A6", "#E05E3A", "#F2B134", "#7E57C2", "#43A047",
    "#EC407A", "#8D6E63", "#26C6DA", "#9E9D24", "#78909C",
]

STYLE = {
    "figure.facecolor": "white",
    "axes.facecolor": C_LIGHT,
    "axes.edgecolor": C_DARK,
    "text.color": C_DARK,
    "font.family": "DejaVu Sans",
}


def community_color(community_id: int) -> str:
    """Palette colour for a 1-based community id (cycles after 10)."""
    return COMMUNITY_PALETTE[(community_id - 1) % len(COMMUNITY_PALETTE)]


def compute_layout(
    G: nx.Graph,
    config: FoodWebConfig = DEFAULT_CONFIG,
) -> dict[str, tuple[float, float]]:
    """
    Fruchterman-Reingold positions for every species.

    Uses nx.spring_layout with k = 2/sqrt(N+1) and the configured seed, so the
    same web and config always produce the same picture.
    """
    if G.number_of_nodes() == 0:
        return {}
    k_value = 2.0 / sqrt(G.number_of_nodes() + 1)
    pos = nx.spring_layout(
        G, seed=config.seed, k=k_value, iterations=config.layout_iterations
    )
    return {node: (float(x), float(y)) for node, (x, y) in pos.items()}


def _draw_base(
    G: nx.MultiDiGraph,
    pos: dict[str, tuple[float, float]],
    node_colors: list[str],
    config: FoodWebConfig,
    title: str,
):
    plt.rcParams.update(STYLE)
    fig, ax = plt.subplots(figsize=config.figure_size)
    ax.set_axis_off()

    # Parallel links are drawn once; arrows point predator → prey.
    D = collapsed_digraph(G)
    if D.number_of_edges():
        nx.draw_networkx_edges(
            D, pos, ax=ax,
            edge_color=C_EDGE, width=1.4, alpha=0.8,
            arrows=True, arrowstyle="-|>", arrowsize=18,
            node_size=1400, connectionstyle="arc3,rad=0.08",
        )
    if D.number_of_nodes():
        nx.draw_networkx_nodes(
            D, pos, ax=ax,
            node_color=node_colors, node_size=1400,
            edgecolors="white", linewidths=1.5,
        )
        nx.draw_networkx_labels(D, pos, ax=ax, font_size=9, font_color=C_DARK)
    else:
        ax.text(0.5, 0.5, "(empty food web)", ha="center", va="center",
                transform=ax.transAxes, fontsize=12)

    ax.set_title(title, fontsize=13, fontweight="bold", pad=12)
    return fig, ax


def _save(fig, output_path: str, config: FoodWebConfig) -> str:
    parent = os.path.dirname(os.path.abspath(output_path))
    os.makedirs(parent, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output_path, dpi=config.figure_dpi, bbox_inches="tight")
    plt.close(fig)
    return os.path.abspath(output_path)


def render_food_web(
    G: nx.MultiDiGraph,
    output_path: str,
    config: FoodWebConfig = DEFAULT_CONFIG,
    title: str | None = None,
    pos: dict[str, tuple[float, float]] | None = None,
) -> str:
    """
    Draw the food web with predator → prey arrows and save it as an image.

    Args:
        G:           Food web.
        output_path: Target file (format inferred from the extension).
        config:      FoodWebConfig (seed, dpi, figure size).
        title:       Figure title; defaults to a species/link count line.
        pos:         Precomputed layout; computed from the seed when omitted.

    Returns:
        Absolute path of the written file.
    """
    pos = pos if pos is not None else compute_layout(G, config)
    title = title or (
        f"{G.graph.get('name', 'Food web')} — "
        f"{G.number_of_nodes()} species · {G.number_of_edges()} feeding links"
    )
    fig, _ = _draw_base(G, pos, [C_NODE] * G.number_of_nodes(), config, title)
    path = _save(fig, output_path, config)
    logger.debug("Food web figure written to %s.", path)
    return path


def render_communities(
    G: nx.MultiDiGraph,
    assignment: "CommunityAssignment",
    output_path: str,
    config: FoodWebConfig = DEFAULT_CONFIG,
    pos: dict[str, tuple[float, float]] | None = None,
) -> str:
    """
    Draw the food web with species coloured by community and a legend per community.

    Returns:
        Absolute path of the written file.
    """
    pos = pos if pos is not None else compute_layout(G, config)
    colors = [community_color(assignment.membership.get(n, 0) or 1) for n in G.nodes]
    title = (
        f"Communities ({assignment.method}) — "
        f"{assignment.count} groups · modularity {assignment.modularity:.2f}"
    )
    fig, ax = _draw_base(G, pos, colors, config, title)

    if assignment.count:
        handles = [
            mpatches.Patch(
                color=community_color(cid),
                label=f"Community {cid} ({len(members)})",
            )
            for cid, members in enumerate(assignment.communities, start=1)
        ]
        ax.legend(handles=handles, fontsize=9, loc="lower right", framealpha=0.85)

    path = _save(fig, output_path, config)
    logger.debug("Community figure written to %s.", path)
    return path


def generate_all_figures(
    result: "PipelineResult",
    output_dir: str,
) -> dict[str, str]:
    """
    Generate every static figure for a PipelineResult.

    Args:
        result:     PipelineResult from run_full_pipeline().
        output_dir: Directory to save PNG files into (created if needed).

    Returns:
        Dict mapping filename -> absolute path for each generated figure.
    """
    os.makedirs(output_dir, exist_ok=True)
    config = result.config
    pos = compute_layout(result.G, config)
    paths: dict[str, str] = {}

    p = render_food_web(result.G, os.path.join(output_dir, "foodweb_network.png"), config, pos=pos)
    paths[os.path.basename(p)] = p

    if result.communities is not None:
        p = render_communities(
            result.G, result.communities,
            os.path.join(output_dir, "foodweb_communities.png"), config, pos=pos,
        )
        paths[os.path.basename(p)] = p

    logger.info("Generated %d figures in %s.", len(paths), output_dir)
    return paths
