"""
foodweb_atlas.graph — NetworkX food-web construction and projection layer.

Modules:
    builder     — Build the predator → prey MultiDiGraph from literals or CSV.
    examples    — The six-species coastal example web.
    projection  — Explicit undirected / collapsed projections.

All food webs are NetworkX MultiDiGraphs:
    Nodes : species names (attribute ``order`` = declaration index)
    Edges : predator → prey, one per interaction (parallel edges kept)
"""

from foodweb_atlas.graph.builder import (
    Interaction,
    SpeciesValidationError,
    build_example_food_web,
    build_food_web,
    build_food_web_from_csv,
)
from foodweb_atlas.graph.projection import undirected_projection
