"""
foodweb_atlas/tests/conftest.py — Shared pytest fixtures for the Food Web Atlas test suite.

Fixtures:
    example_web         — The six-species coastal web (6 species, 6 links).
    cyclic_web          — Example web plus Algae → Large Fish, closing a feeding cycle.
    triangle_web        — Triangle A/B/C with pendant D (known clustering values).
    empty_web           — No species, no links.
    single_species_web  — One species, no links.
    example_csv_paths   — (species.csv, interactions.csv) for the example web in tmp_path.
"""

import pandas as pd
import pytest

from foodweb_atlas.graph.builder import Interaction, build_example_food_web, build_food_web
from foodweb_atlas.graph.examples import EXAMPLE_INTERACTIONS, EXAMPLE_SPECIES


@pytest.fixture
def example_web():
    return build_example_food_web()


@pytest.fixture
def cyclic_web():
    links = EXAMPLE_INTERACTIONS + [Interaction(predator="Algae", prey="Large Fish")]
    return build_food_web(EXAMPLE_SPECIES, links, name="cyclic example")


@pytest.fixture
def triangle_web():
    """
    Undirected shape:

        A ── B
         \\  /
          C ── D

    Local clustering: A = 1, B = 1, C = 1/3, D undefined (one neighbour).
    """
    return build_food_web(
        ["A", "B", "C", "D"],
        [("A", "B"), ("B", "C"), ("A", "C"), ("C", "D")],
        name="triangle",
    )


@pytest.fixture
def empty_web():
    return build_food_web([], [], name="empty")


@pytest.fixture
def single_species_web():
    return build_food_web(["Algae"], [], name="single")


@pytest.fixture
def example_csv_paths(tmp_path):
    species_path = tmp_path / "species.csv"
    links_path = tmp_path / "interactions.csv"
    pd.DataFrame({"species": EXAMPLE_SPECIES}).to_csv(species_path, index=False)
    pd.DataFrame(
        [{"predator": i.predator, "prey": i.prey} for i in EXAMPLE_INTERACTIONS]
    ).to_csv(links_path, index=False)
    return str(species_path), str(links_path)
