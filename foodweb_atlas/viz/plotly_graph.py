"""
foodweb_atlas/viz/plotly_graph.py — Interactive Plotly food-web graph.

Generates an interactive HTML/Plotly view of the food web on the same
Fruchterman-Reingold layout as the static figures.

Visual encoding:
    - Node size:   Betweenness centrality (log scale, clamped [12, 48])
    - Node color:  Community (one legend entry per community)
    - Edges:       Predator → prey, drawn as lines with an arrow annotation
    - Hover:       Species, in/out degree, betweenness, community
"""

import logging
import math

import networkx as nx
import plotly.graph_objects as go

from foodweb_atlas.config import DEFAULT_CONFIG, FoodWebConfig
from foodweb_atlas.graph.projection import collapsed_digraph
from foodweb_atlas.metrics.communities import CommunityAssignment
from foodweb_atlas.viz.figures import C_EDGE, C_NODE, community_color, compute_layout

logger = logging.getLogger(__name__)


def _node_size(score: float) -> float:
    return max(12.0, min(48.0, 12.0 + math.log1p(score) * 12.0))


def build_plotly_figure(
    G: nx.MultiDiGraph,
    betweenness: dict[str, float],
    assignment: CommunityAssignment | None = None,
    config: FoodWebConfig = DEFAULT_CONFIG,
) -> go.Figure:
    """
    Build an interactive force-directed Plotly figure of the food web.

    Args:
        G:            Food web.
        betweenness:  Output of betweenness_centrality().
        assignment:   Optional CommunityAssignment; without it every species
                      is drawn in a single trace.
        config:       FoodWebConfig (layout seed).

    Returns:
        Plotly Figure object (no IO, no files written).
    """
    pos = compute_layout(G, config)
    D = collapsed_digraph(G)

    # ── Edges: one line trace + one arrow annotation per feeding link ────────
    x_coords: list[float | None] = []
    y_coords: list[float | None] = []
    annotations = []
    for u, v in D.edges():
        x0, y0 = pos[u]
        x1, y1 = pos[v]
        x_coords += [x0, x1, None]
        y_coords += [y0, y1, None]
        annotations.append({
            "x": x1, "y": y1, "ax": x0, "ay": y0,
            "xref": "x", "yref": "y", "axref": "x", "ayref": "y",
            "showarrow": True, "arrowhead": 2, "arrowsize": 1.2,
            "arrowwidth": 1, "arrowcolor": C_EDGE, "standoff": 12,
            "text": "",
        })

    traces = [
        go.Scatter(
            x=x_coords,
            y=y_coords,
            mode="lines",
            line={"width": 1, "color": C_EDGE},
            name="feeding link",
            hoverinfo="none",
            showlegend=True,
        )
    ]

    # ── Nodes grouped by community ───────────────────────────────────────────
    if assignment is not None and assignment.count:
        groups = {
            f"Community {cid}": (members, community_color(cid))
            for cid, members in enumerate(assignment.communities, start=1)
        }
    else:
        groups = {"species": (list(G.nodes), C_NODE)}

    for label, (members, color) in groups.items():
        hover_texts = []
        for sp in members:
            community = assignment.membership.get(sp, "-") if assignment else "-"
            hover_texts.append(
                f"<b>{sp}</b><br>"
                f"Consumers (in): {G.in_degree(sp)}<br>"
                f"Resources (out): {G.out_degree(sp)}<br>"
                f"Betweenness: {betweenness.get(sp, 0.0):.2f}<br>"
                f"Community: {community}"
            )
        traces.append(
            go.Scatter(
                x=[pos[sp][0] for sp in members],
                y=[pos[sp][1] for sp in members],
                mode="markers+text",
                name=label,
                text=members,
                textposition="top center",
                marker={
                    "size": [_node_size(betweenness.get(sp, 0.0)) for sp in members],
                    "color": color,
                    "line": {"color": "white", "width": 2},
                },
                customdata=hover_texts,
                hovertemplate="%{customdata}<extra></extra>",
            )
        )

    fig = go.Figure(
        data=traces,
        layout=go.Layout(
            title=f"{G.graph.get('name', 'Food web')} — interactive view",
            showlegend=True,
            hovermode="closest",
            annotations=annotations,
            xaxis={"showgrid": False, "zeroline": False, "showticklabels": False},
            yaxis={"showgrid": False, "zeroline": False, "showticklabels": False},
            margin={"l": 20, "r": 20, "t": 60, "b": 20},
            paper_bgcolor="white",
            plot_bgcolor="white",
        ),
    )

    logger.info(
        "Plotly figure built: %d species, %d links, %d traces.",
        G.number_of_nodes(),
        D.number_of_edges(),
        len(traces),
    )
    return fig


def build_centrality_chart(ranked: list[tuple[str, float]]) -> go.Figure:
    """Horizontal bar chart of species ranked by betweenness (highest on top)."""
    return go.Figure(
        data=[
            go.Bar(
                x=[score for _, score in ranked],
                y=[sp for sp, _ in ranked],
                orientation="h",
                marker_color=C_NODE,
            )
        ],
        layout=go.Layout(
            title="Betweenness centrality by species",
            xaxis_title="Betweenness",
            yaxis_title="Species",
            yaxis={"autorange": "reversed"},
        ),
    )


def save_figure_html(fig: go.Figure, output_path: str) -> str:
    """
    Write a Plotly figure to an HTML file (plotly.js loaded from CDN).

    Returns:
        The output path.
    """
    fig.write_html(output_path, include_plotlyjs="cdn")
    logger.info("Plotly figure saved to: %s", output_path)
    return output_path
