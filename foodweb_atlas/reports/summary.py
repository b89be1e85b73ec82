"""
foodweb_atlas/reports/summary.py — Food-web summary report.

Collects the network-wide results of one analysis run into a FoodWebSummary
and renders it three ways:

    - format_summary_lines()      console text block
    - export_summary_markdown()   human-readable Markdown report
    - export_summary_json()       machine-readable snapshot

A per-species table (species_table()) accompanies the summary as a pandas
DataFrame and can be written to CSV.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Optional

import networkx as nx
import pandas as pd

from foodweb_atlas.config import DEFAULT_CONFIG, FoodWebConfig
from foodweb_atlas.metrics.centrality import keystone_species, rank_by_centrality
from foodweb_atlas.metrics.clustering import (
    average_clustering,
    global_transitivity,
    local_clustering,
)
from foodweb_atlas.metrics.communities import CommunityAssignment
from foodweb_atlas.metrics.structure import connectance, degree, edge_count, node_count
from foodweb_atlas.metrics.topology import CycleDetected, topological_order

logger = logging.getLogger(__name__)


@dataclass
class FoodWebSummary:
    """
    Network-wide results of one food-web analysis run.

    topological_order is None when the web contains a feeding cycle; the
    cycle itself is recorded in cycle as "A -> B -> A" text.
    """

    name: str
    generated_at: str                       # ISO 8601 timestamp

    species_count: int
    interaction_count: int
    connectance: float
    average_clustering: float
    global_transitivity: float

    top_central: list = field(default_factory=list)       # [{species, betweenness}]
    keystone_species: list = field(default_factory=list)  # [species]
    betweenness_normalized: bool = False

    community_method: str = ""
    community_count: int = 0
    modularity: float = 0.0
    communities: list = field(default_factory=list)       # [[species, ...], ...]

    topological_order: Optional[list] = None
    has_cycle: bool = False
    cycle: Optional[str] = None


def summarize_food_web(
    G: nx.MultiDiGraph,
    betweenness: dict[str, float],
    assignment: CommunityAssignment | None = None,
    config: FoodWebConfig = DEFAULT_CONFIG,
) -> FoodWebSummary:
    """
    Build the FoodWebSummary for a food web.

    A cyclic web does not fail the summary: the topological order is left
    empty and the cycle is recorded instead.
    """
    ranked = rank_by_centrality(G, betweenness, top_n=config.top_n_central)

    order: list[str] | None
    cycle_text: str | None = None
    try:
        order = topological_order(G)
    except CycleDetected as exc:
        order = None
        cycle_text = str(exc)
        logger.warning("%s", exc)

    summary = FoodWebSummary(
        name=str(G.graph.get("name", "food web")),
        generated_at=datetime.now().isoformat(timespec="seconds"),
        species_count=node_count(G),
        interaction_count=edge_count(G),
        connectance=connectance(G),
        average_clustering=average_clustering(G),
        global_transitivity=global_transitivity(G),
        top_central=[{"species": sp, "betweenness": score} for sp, score in ranked],
        keystone_species=keystone_species(G, betweenness, config),
        betweenness_normalized=config.betweenness_normalized,
        topological_order=order,
        has_cycle=order is None,
        cycle=cycle_text,
    )
    if assignment is not None:
        summary.community_method = assignment.method
        summary.community_count = assignment.count
        summary.modularity = assignment.modularity
        summary.communities = [list(c) for c in assignment.communities]
    return summary


def species_table(
    G: nx.MultiDiGraph,
    betweenness: dict[str, float],
    assignment: CommunityAssignment | None = None,
) -> pd.DataFrame:
    """
    One row per species, in declaration order.

    Columns: species, in_degree, out_degree, degree, betweenness,
    clustering, community (0 when no assignment is given).
    """
    deg_in = degree(G, "in")
    deg_out = degree(G, "out")
    deg_all = degree(G, "all")
    clustering = local_clustering(G)
    membership = assignment.membership if assignment is not None else {}

    rows = [
        {
            "species": sp,
            "in_degree": deg_in[sp],
            "out_degree": deg_out[sp],
            "degree": deg_all[sp],
            "betweenness": betweenness.get(sp, 0.0),
            "clustering": clustering.get(sp, 0.0),
            "community": membership.get(sp, 0),
        }
        for sp in G.nodes
    ]
    columns = ["species", "in_degree", "out_degree", "degree", "betweenness", "clustering", "community"]
    return pd.DataFrame(rows, columns=columns)


def format_summary_lines(summary: FoodWebSummary) -> list[str]:
    """Console block for a FoodWebSummary, one string per line."""
    lines = [
        "=" * 60,
        f"  FOOD WEB — {summary.name}",
        "=" * 60,
        f"  Species           : {summary.species_count}",
        f"  Interactions      : {summary.interaction_count}",
        f"  Connectance       : {summary.connectance:.4f}",
        f"  Avg clustering    : {summary.average_clustering:.4f}",
        f"  Transitivity      : {summary.global_transitivity:.4f}",
    ]
    if summary.community_method:
        lines.append(
            f"  Communities       : {summary.community_count} "
            f"({summary.community_method}, modularity {summary.modularity:.3f})"
        )
    lines += ["", "  Betweenness (top):"]
    for row in summary.top_central:
        lines.append(f"    {row['species']:<24} {row['betweenness']:>8.3f}")
    if summary.keystone_species:
        lines.append(f"  Keystone species  : {', '.join(summary.keystone_species)}")
    lines.append("")
    if summary.has_cycle:
        lines.append(f"  Topological order : unavailable ({summary.cycle})")
    else:
        lines.append(f"  Topological order : {' < '.join(summary.topological_order or [])}")
    for cid, members in enumerate(summary.communities, start=1):
        lines.append(f"  Community {cid:<8}: {', '.join(members)}")
    lines.append("=" * 60)
    return lines


def export_summary_markdown(
    summary: FoodWebSummary,
    table: pd.DataFrame,
    output_path: str,
    figure_paths: "dict[str, str] | None" = None,
) -> str:
    """
    Export a Markdown report and return it as a string.

    Structure:
        # Food Web Report — {name}
        ## Network Overview     (table of network-wide metrics)
        ## Centrality           (ranked betweenness, keystone species)
        ## Communities          (one line per community)
        ## Topological Order    (or the detected cycle)
        ## Species Table        (per-species metrics)
        ## Figures              (only when figure_paths is given)
    """
    lines: list[str] = [
        f"# Food Web Report — {summary.name}",
        "",
        f"**Generated:** {summary.generated_at}",
        "",
        "## Network Overview",
        "",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Species | {summary.species_count} |",
        f"| Interactions | {summary.interaction_count} |",
        f"| Connectance | {summary.connectance:.4f} |",
        f"| Average clustering | {summary.average_clustering:.4f} |",
        f"| Global transitivity | {summary.global_transitivity:.4f} |",
        f"| Communities | {summary.community_count} |",
        f"| Modularity | {summary.modularity:.3f} |",
        "",
        "## Centrality",
        "",
        f"Betweenness is {'normalized' if summary.betweenness_normalized else 'a raw path count'}"
        " over directed predator → prey paths.",
        "",
        "| Rank | Species | Betweenness |",
        "|------|---------|-------------|",
    ]
    for rank, row in enumerate(summary.top_central, start=1):
        lines.append(f"| {rank} | {row['species']} | {row['betweenness']:.3f} |")
    lines += [
        "",
        f"**Keystone species:** {', '.join(summary.keystone_species) or 'none'}",
        "",
        "## Communities",
        "",
    ]
    if summary.communities:
        for cid, members in enumerate(summary.communities, start=1):
            lines.append(f"- **Community {cid}** ({len(members)}): {', '.join(members)}")
    else:
        lines.append("_Community detection not run._")
    lines += ["", "## Topological Order", ""]
    if summary.has_cycle:
        lines.append(f"_Unavailable:_ {summary.cycle}")
    else:
        lines.append(" → ".join(summary.topological_order or []) or "_(empty)_")
    lines += ["", "## Species Table", ""]
    lines.append("| " + " | ".join(table.columns) + " |")
    lines.append("|" + "|".join("---" for _ in table.columns) + "|")
    for record in table.itertuples(index=False):
        cells = [f"{v:.3f}" if isinstance(v, float) else str(v) for v in record]
        lines.append("| " + " | ".join(cells) + " |")

    if figure_paths:
        lines += ["", "## Figures", ""]
        report_dir = os.path.dirname(os.path.abspath(output_path))
        for name, path in sorted(figure_paths.items()):
            lines.append(f"![{name}]({os.path.relpath(path, report_dir)})")

    markdown = "\n".join(lines) + "\n"

    os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(markdown)
    logger.info("Markdown report written to: %s", output_path)
    return markdown


def export_summary_json(summary: FoodWebSummary, output_path: str) -> str:
    """Write the summary as indented JSON; returns the output path."""
    os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(asdict(summary), f, indent=2, default=str)
    logger.info("Summary snapshot saved to: %s", output_path)
    return output_path
