"""
foodweb_atlas.viz — Food-web visualization.

Modules:
    figures       — Static matplotlib PNGs (network, communities).
    plotly_graph  — Interactive Plotly figure and HTML export.

Both share compute_layout(), a seeded Fruchterman-Reingold layout.
"""

from foodweb_atlas.viz.figures import generate_all_figures
