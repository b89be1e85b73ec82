"""
foodweb_atlas/tests/test_summary.py — Tests for foodweb_atlas.reports.summary.

Tests verify:
- summarize_food_web captures counts, connectance, ranking and communities.
- A cyclic web is summarized with has_cycle=True instead of raising.
- species_table has one row per species with the expected columns.
- Console, Markdown and JSON renderings contain the key figures.
"""

import json

import pytest

from foodweb_atlas.metrics.centrality import betweenness_centrality
from foodweb_atlas.metrics.communities import detect_communities
from foodweb_atlas.reports.summary import (
    export_summary_json,
    export_summary_markdown,
    format_summary_lines,
    species_table,
    summarize_food_web,
)


@pytest.fixture
def example_summary(example_web):
    scores = betweenness_centrality(example_web)
    assignment = detect_communities(example_web)
    return summarize_food_web(example_web, scores, assignment)


def test_summary_fields(example_summary):
    assert example_summary.species_count == 6
    assert example_summary.interaction_count == 6
    assert example_summary.connectance == pytest.approx(0.2)
    assert example_summary.average_clustering == 0.0
    assert example_summary.top_central[0] == {"species": "Small Fish", "betweenness": 3.0}
    assert example_summary.keystone_species == ["Small Fish", "Zooplankton"]
    assert example_summary.topological_order[0] == "Algae"
    assert not example_summary.has_cycle
    assert 1 <= example_summary.community_count <= 6


def test_summary_top_n_length(example_summary):
    assert len(example_summary.top_central) == 5


def test_summary_without_communities(example_web):
    summary = summarize_food_web(example_web, betweenness_centrality(example_web))
    assert summary.community_count == 0
    assert summary.communities == []


def test_cyclic_summary_records_cycle(cyclic_web):
    summary = summarize_food_web(cyclic_web, betweenness_centrality(cyclic_web))
    assert summary.has_cycle
    assert summary.topological_order is None
    assert "Large Fish" in summary.cycle


def test_species_table(example_web):
    scores = betweenness_centrality(example_web)
    df = species_table(example_web, scores, detect_communities(example_web))
    assert list(df.columns) == [
        "species", "in_degree", "out_degree", "degree",
        "betweenness", "clustering", "community",
    ]
    assert len(df) == 6
    algae = df.set_index("species").loc["Algae"]
    assert algae["in_degree"] == 2
    assert algae["out_degree"] == 0
    assert (df["community"] >= 1).all()


def test_species_table_without_assignment(example_web):
    df = species_table(example_web, betweenness_centrality(example_web))
    assert (df["community"] == 0).all()


def test_format_summary_lines(example_summary):
    text = "\n".join(format_summary_lines(example_summary))
    assert "Connectance       : 0.2000" in text
    assert "Small Fish" in text
    assert "Algae < Zooplankton" in text


def test_format_cyclic_summary(cyclic_web):
    summary = summarize_food_web(cyclic_web, betweenness_centrality(cyclic_web))
    text = "\n".join(format_summary_lines(summary))
    assert "unavailable" in text


def test_export_markdown(example_web, example_summary, tmp_path):
    df = species_table(example_web, betweenness_centrality(example_web))
    out = tmp_path / "reports" / "report.md"
    markdown = export_summary_markdown(example_summary, df, str(out))
    assert out.read_text(encoding="utf-8") == markdown
    assert "## Network Overview" in markdown
    assert "| Connectance | 0.2000 |" in markdown
    assert "## Figures" not in markdown


def test_export_markdown_with_figures(example_web, example_summary, tmp_path):
    df = species_table(example_web, betweenness_centrality(example_web))
    fig = tmp_path / "figures" / "foodweb_network.png"
    fig.parent.mkdir()
    fig.write_bytes(b"png")
    markdown = export_summary_markdown(
        example_summary, df, str(tmp_path / "report.md"),
        figure_paths={"foodweb_network.png": str(fig)},
    )
    assert "![foodweb_network.png](figures/foodweb_network.png)" in markdown


def test_export_json(example_summary, tmp_path):
    path = export_summary_json(example_summary, str(tmp_path / "summary.json"))
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    assert data["species_count"] == 6
    assert data["topological_order"][0] == "Algae"
