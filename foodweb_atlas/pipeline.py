"""
foodweb_atlas/pipeline.py — Single-call pipeline orchestrator.

Provides run_full_pipeline(), which executes the food-web analysis in its
fixed order and returns every intermediate result:

    build → metrics → render web → detect communities → render communities → summary

Usage:
    from foodweb_atlas.pipeline import run_full_pipeline
    result = run_full_pipeline()
    print("\\n".join(format_summary_lines(result.summary)))
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

import networkx as nx
import pandas as pd

from foodweb_atlas.config import DEFAULT_CONFIG, FoodWebConfig
from foodweb_atlas.graph.builder import (
    Interaction,
    build_example_food_web,
    build_food_web,
    build_food_web_from_csv,
)
from foodweb_atlas.metrics.centrality import betweenness_centrality
from foodweb_atlas.metrics.clustering import average_clustering
from foodweb_atlas.metrics.communities import CommunityAssignment, detect_communities
from foodweb_atlas.metrics.structure import connectance, degree
from foodweb_atlas.reports.summary import (
    FoodWebSummary,
    export_summary_json,
    export_summary_markdown,
    species_table,
    summarize_food_web,
)

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """
    Complete output of a single food-web analysis run.

    Contains every intermediate result for inspection, plus the summary and
    the paths of every file written.
    """

    G: nx.MultiDiGraph
    config: FoodWebConfig

    # Metrics
    degree_in: dict[str, int]
    degree_out: dict[str, int]
    degree_all: dict[str, int]
    connectance: float
    average_clustering: float
    betweenness: dict[str, float]

    # Communities
    communities: Optional[CommunityAssignment] = None

    # Reporting
    summary: Optional[FoodWebSummary] = None
    species_df: pd.DataFrame = field(default_factory=pd.DataFrame)

    # Written files: name → absolute path
    figure_paths: dict = field(default_factory=dict)
    report_paths: dict = field(default_factory=dict)


def _build(species, interactions, species_path, interactions_path, config) -> nx.MultiDiGraph:
    if species_path or interactions_path:
        if not (species_path and interactions_path):
            raise ValueError("species_path and interactions_path must be given together.")
        return build_food_web_from_csv(species_path, interactions_path, config)
    if species is not None:
        return build_food_web(species, interactions or [], config)
    logger.info("No input given; using the built-in example food web.")
    return build_example_food_web(config)


def run_full_pipeline(
    species: "list[str] | None" = None,
    interactions: "list[Interaction | tuple[str, str]] | None" = None,
    species_path: str | None = None,
    interactions_path: str | None = None,
    config: FoodWebConfig = DEFAULT_CONFIG,
    output_dir: str | None = None,
    generate_figures: bool = True,
    write_reports: bool = True,
) -> PipelineResult:
    """
    Execute the complete food-web analysis in one call.

    Order:
        1. Build the food web (literals, CSV pair, or the built-in example)
        2. Degree (in/out/all), connectance, average clustering
        3. Betweenness centrality
        4. Render the food web (optional)
        5. Community detection
        6. Render the communities (optional)
        7. Summary + species table; Markdown / JSON / CSV export (optional)

    Args:
        species, interactions:          Literal input.
        species_path, interactions_path: CSV input (both required together).
        config:           FoodWebConfig carrying the seed and all tunables.
        output_dir:       Where figures and reports go; defaults to
                          config.output_dir.
        generate_figures: Render PNG figures. Rendering failures are logged
                          and do not abort the run.
        write_reports:    Write report.md, summary.json and species.csv.

    Returns:
        PipelineResult with every intermediate and final result.

    Raises:
        SpeciesValidationError: invalid input (propagated from the builder).
    """
    output_dir = output_dir or config.output_dir
    logger.info("Food web pipeline starting (seed=%d).", config.seed)

    # ── 1. Build ──────────────────────────────────────────────────────────────
    G = _build(species, interactions, species_path, interactions_path, config)
    logger.info("Phase 1/7: Food web built — %d species, %d interactions.",
                G.number_of_nodes(), G.number_of_edges())

    # ── 2. Structural metrics ─────────────────────────────────────────────────
    deg_in = degree(G, "in")
    deg_out = degree(G, "out")
    deg_all = degree(G, "all")
    conn = connectance(G)
    clus = average_clustering(G)
    logger.info("Phase 2/7: Connectance %.4f, average clustering %.4f.", conn, clus)

    # ── 3. Betweenness ────────────────────────────────────────────────────────
    btw = betweenness_centrality(G, config=config)
    logger.info("Phase 3/7: Betweenness — scored %d species.", len(btw))

    result = PipelineResult(
        G=G,
        config=config,
        degree_in=deg_in,
        degree_out=deg_out,
        degree_all=deg_all,
        connectance=conn,
        average_clustering=clus,
        betweenness=btw,
    )

    # ── 4. Render food web ────────────────────────────────────────────────────
    pos = None
    fig_dir = os.path.join(output_dir, "figures")
    if generate_figures:
        from foodweb_atlas.viz.figures import compute_layout, render_food_web
        try:
            pos = compute_layout(G, config)
            p = render_food_web(G, os.path.join(fig_dir, "foodweb_network.png"), config, pos=pos)
            result.figure_paths[os.path.basename(p)] = p
            logger.info("Phase 4/7: Food web figure written to %s.", p)
        except (OSError, ValueError, RuntimeError) as exc:
            logger.warning("Phase 4/7: Food web figure failed: %s", exc)
    else:
        logger.info("Phase 4/7: Figure generation skipped.")

    # ── 5. Communities ────────────────────────────────────────────────────────
    result.communities = detect_communities(G, config)
    logger.info("Phase 5/7: %d communities detected.", result.communities.count)

    # ── 6. Render communities ─────────────────────────────────────────────────
    if generate_figures:
        from foodweb_atlas.viz.figures import render_communities
        try:
            p = render_communities(
                G, result.communities,
                os.path.join(fig_dir, "foodweb_communities.png"), config, pos=pos,
            )
            result.figure_paths[os.path.basename(p)] = p
            logger.info("Phase 6/7: Community figure written to %s.", p)
        except (OSError, ValueError, RuntimeError) as exc:
            logger.warning("Phase 6/7: Community figure failed: %s", exc)

    # ── 7. Summary ────────────────────────────────────────────────────────────
    result.summary = summarize_food_web(G, btw, result.communities, config)
    result.species_df = species_table(G, btw, result.communities)

    if write_reports:
        os.makedirs(output_dir, exist_ok=True)
        md_path = os.path.join(output_dir, "report.md")
        export_summary_markdown(result.summary, result.species_df, md_path, result.figure_paths)
        json_path = export_summary_json(result.summary, os.path.join(output_dir, "summary.json"))
        csv_path = os.path.join(output_dir, "species.csv")
        result.species_df.to_csv(csv_path, index=False)
        result.report_paths = {
            "report.md": os.path.abspath(md_path),
            "summary.json": os.path.abspath(json_path),
            "species.csv": os.path.abspath(csv_path),
        }
        logger.info("Phase 7/7: Reports written to %s.", output_dir)
    else:
        logger.info("Phase 7/7: Summary built; report export skipped.")

    logger.info("Food web pipeline complete.")
    return result
