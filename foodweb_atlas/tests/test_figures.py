"""
foodweb_atlas/tests/test_figures.py — Tests for the matplotlib and Plotly renderers.

Rendering has no correctness contract beyond "does not crash and produces a
non-empty artifact", so these tests check exactly that, plus layout
determinism.

Tests verify:
- compute_layout is seeded: same seed → same positions.
- render_food_web / render_communities write non-empty PNGs.
- Empty and single-species webs render without raising.
- generate_all_figures returns both figure paths.
- The Plotly figure has one edge trace plus one trace per community.
"""

import dataclasses
import os

import plotly.graph_objects as go

from foodweb_atlas.config import DEFAULT_CONFIG
from foodweb_atlas.metrics.centrality import betweenness_centrality, rank_by_centrality
from foodweb_atlas.metrics.communities import detect_communities
from foodweb_atlas.pipeline import run_full_pipeline
from foodweb_atlas.viz.figures import (
    community_color,
    compute_layout,
    generate_all_figures,
    render_communities,
    render_food_web,
)
from foodweb_atlas.viz.plotly_graph import (
    build_centrality_chart,
    build_plotly_figure,
    save_figure_html,
)


def _non_empty(path: str) -> bool:
    return os.path.isfile(path) and os.path.getsize(path) > 0


# ── Layout ───────────────────────────────────────────────────────────────────

def test_layout_deterministic(example_web):
    assert compute_layout(example_web) == compute_layout(example_web)


def test_layout_covers_every_species(example_web):
    pos = compute_layout(example_web)
    assert set(pos) == set(example_web.nodes)


def test_layout_depends_on_seed(example_web):
    other = dataclasses.replace(DEFAULT_CONFIG, seed=DEFAULT_CONFIG.seed + 1)
    assert compute_layout(example_web) != compute_layout(example_web, other)


def test_layout_empty(empty_web):
    assert compute_layout(empty_web) == {}


def test_community_color_cycles():
    assert community_color(1) == community_color(11)


# ── Matplotlib ───────────────────────────────────────────────────────────────

def test_render_food_web(example_web, tmp_path):
    path = render_food_web(example_web, str(tmp_path / "web.png"))
    assert os.path.isabs(path)
    assert _non_empty(path)


def test_render_creates_parent_dirs(example_web, tmp_path):
    path = render_food_web(example_web, str(tmp_path / "nested" / "dir" / "web.png"))
    assert _non_empty(path)


def test_render_communities(example_web, tmp_path):
    assignment = detect_communities(example_web)
    path = render_communities(example_web, assignment, str(tmp_path / "communities.png"))
    assert _non_empty(path)


def test_render_degenerate_webs(empty_web, single_species_web, tmp_path):
    assert _non_empty(render_food_web(empty_web, str(tmp_path / "empty.png")))
    assert _non_empty(render_food_web(single_species_web, str(tmp_path / "single.png")))
    assignment = detect_communities(empty_web)
    assert _non_empty(render_communities(empty_web, assignment, str(tmp_path / "empty_c.png")))


def test_render_self_loop_and_parallel_links(tmp_path):
    from foodweb_atlas.graph.builder import build_food_web

    G = build_food_web(["Pike", "Roach"], [("Pike", "Pike"), ("Pike", "Roach"), ("Pike", "Roach")])
    assert _non_empty(render_food_web(G, str(tmp_path / "loops.png")))


def test_generate_all_figures(tmp_path):
    result = run_full_pipeline(
        output_dir=str(tmp_path / "run"), generate_figures=False, write_reports=False,
    )
    paths = generate_all_figures(result, str(tmp_path / "figs"))
    assert set(paths) == {"foodweb_network.png", "foodweb_communities.png"}
    assert all(_non_empty(p) for p in paths.values())


# ── Plotly ───────────────────────────────────────────────────────────────────

def test_plotly_figure_with_communities(example_web):
    scores = betweenness_centrality(example_web)
    assignment = detect_communities(example_web)
    fig = build_plotly_figure(example_web, scores, assignment)
    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 1 + assignment.count
    assert len(fig.layout.annotations) == 6


def test_plotly_figure_without_communities(example_web):
    fig = build_plotly_figure(example_web, betweenness_centrality(example_web))
    assert len(fig.data) == 2


def test_plotly_empty_web(empty_web):
    fig = build_plotly_figure(empty_web, {})
    assert isinstance(fig, go.Figure)


def test_save_html(example_web, tmp_path):
    fig = build_plotly_figure(example_web, betweenness_centrality(example_web))
    path = save_figure_html(fig, str(tmp_path / "web.html"))
    assert _non_empty(path)


def test_centrality_chart(example_web):
    ranked = rank_by_centrality(example_web, betweenness_centrality(example_web))
    fig = build_centrality_chart(ranked)
    assert list(fig.data[0].y) == [sp for sp, _ in ranked]
