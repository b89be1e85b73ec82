"""
foodweb_atlas/tests/test_builder.py — Tests for foodweb_atlas.graph.builder.

Tests verify:
- The example web has 6 species and 6 predator → prey links.
- Isolated species are kept as nodes.
- Parallel interactions are kept as separate edges.
- Unknown species are rejected by default and no node is created.
- allow_implicit_species=True inserts the missing species instead.
- Duplicate / blank names and malformed records are rejected.
- CSV loading via pandas, including missing-column and blank-cell errors.
"""

import dataclasses

import networkx as nx
import pandas as pd
import pytest

from foodweb_atlas.config import DEFAULT_CONFIG
from foodweb_atlas.graph.builder import (
    Interaction,
    SpeciesValidationError,
    build_food_web,
    build_food_web_from_csv,
    species_order,
)
from foodweb_atlas.graph.examples import EXAMPLE_SPECIES


class TestBuildFoodWeb:
    """Tests for the literal-data builder."""

    def test_returns_multidigraph(self, example_web):
        assert isinstance(example_web, nx.MultiDiGraph)

    def test_example_counts(self, example_web):
        assert example_web.number_of_nodes() == 6
        assert example_web.number_of_edges() == 6

    def test_node_set_equals_declared_species(self, example_web):
        assert set(example_web.nodes) == set(EXAMPLE_SPECIES)

    def test_edges_point_predator_to_prey(self, example_web):
        assert example_web.has_edge("Zooplankton", "Algae")
        assert not example_web.has_edge("Algae", "Zooplankton")

    def test_isolated_species_kept(self):
        G = build_food_web(["Algae", "Zooplankton", "Hermit"], [("Zooplankton", "Algae")])
        assert "Hermit" in G
        assert G.degree("Hermit") == 0

    def test_parallel_interactions_not_deduplicated(self):
        G = build_food_web(["Fox", "Rabbit"], [("Fox", "Rabbit"), ("Fox", "Rabbit")])
        assert G.number_of_edges() == 2
        assert G.number_of_edges("Fox", "Rabbit") == 2

    def test_self_loop_accepted(self):
        G = build_food_web(["Pike"], [("Pike", "Pike")])
        assert G.number_of_edges() == 1

    def test_tuple_and_record_inputs_equivalent(self):
        a = build_food_web(["X", "Y"], [("X", "Y")])
        b = build_food_web(["X", "Y"], [Interaction(predator="X", prey="Y")])
        assert list(a.edges()) == list(b.edges())

    def test_declaration_order_recorded(self, example_web):
        order = species_order(example_web)
        assert [sp for sp, _ in sorted(order.items(), key=lambda kv: kv[1])] == EXAMPLE_SPECIES


class TestUnknownSpecies:
    """Unknown-species policy: reject by default, insert on request."""

    def test_unknown_prey_rejected(self):
        with pytest.raises(SpeciesValidationError) as exc_info:
            build_food_web(["Fox"], [("Fox", "Rabbit")])
        assert exc_info.value.species == "Rabbit"
        assert "Rabbit" in str(exc_info.value)

    def test_unknown_predator_rejected(self):
        with pytest.raises(SpeciesValidationError) as exc_info:
            build_food_web(["Rabbit"], [("Fox", "Rabbit")])
        assert exc_info.value.species == "Fox"

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            build_food_web(["Fox"], [("Fox", "Rabbit")])

    def test_implicit_insert_when_allowed(self):
        config = dataclasses.replace(DEFAULT_CONFIG, allow_implicit_species=True)
        G = build_food_web(["Fox"], [("Fox", "Rabbit")], config)
        assert "Rabbit" in G
        assert G.nodes["Rabbit"]["implicit"] is True
        assert G.number_of_nodes() == 2

    def test_implicit_species_sort_after_declared(self):
        config = dataclasses.replace(DEFAULT_CONFIG, allow_implicit_species=True)
        G = build_food_web(["Fox"], [("Fox", "Rabbit")], config)
        order = species_order(G)
        assert order["Fox"] < order["Rabbit"]


class TestMalformedInput:

    def test_duplicate_species_rejected(self):
        with pytest.raises(SpeciesValidationError):
            build_food_web(["Algae", "Algae"], [])

    def test_blank_species_rejected(self):
        with pytest.raises(SpeciesValidationError):
            build_food_web(["Algae", "  "], [])

    def test_non_pair_interaction_rejected(self):
        with pytest.raises(SpeciesValidationError):
            build_food_web(["A", "B", "C"], [("A", "B", "C")])


class TestBuildFromCsv:
    """Tests for the pandas-backed CSV builder."""

    def test_loads_example(self, example_csv_paths):
        species_path, links_path = example_csv_paths
        G = build_food_web_from_csv(species_path, links_path)
        assert G.number_of_nodes() == 6
        assert G.number_of_edges() == 6
        assert G.graph["source"] == "csv"

    def test_missing_column(self, tmp_path, example_csv_paths):
        species_path, _ = example_csv_paths
        bad = tmp_path / "bad.csv"
        pd.DataFrame({"eater": ["Crab"], "eaten": ["Algae"]}).to_csv(bad, index=False)
        with pytest.raises(SpeciesValidationError, match="predator"):
            build_food_web_from_csv(species_path, str(bad))

    def test_empty_file_rejected(self, tmp_path, example_csv_paths):
        species_path, _ = example_csv_paths
        empty = tmp_path / "empty.csv"
        empty.write_text("", encoding="utf-8")
        with pytest.raises(SpeciesValidationError, match="empty"):
            build_food_web_from_csv(species_path, str(empty))

    def test_unparseable_file_rejected(self, tmp_path, example_csv_paths):
        _, links_path = example_csv_paths
        broken = tmp_path / "broken.csv"
        broken.write_text('species\n"Algae\n', encoding="utf-8")
        with pytest.raises(SpeciesValidationError):
            build_food_web_from_csv(str(broken), links_path)

    def test_unknown_species_in_csv(self, tmp_path, example_csv_paths):
        species_path, _ = example_csv_paths
        bad = tmp_path / "bad.csv"
        pd.DataFrame({"predator": ["Seal"], "prey": ["Large Fish"]}).to_csv(bad, index=False)
        with pytest.raises(SpeciesValidationError) as exc_info:
            build_food_web_from_csv(species_path, str(bad))
        assert exc_info.value.species == "Seal"

    def test_blank_cell_rejected(self, tmp_path, example_csv_paths):
        species_path, _ = example_csv_paths
        bad = tmp_path / "bad.csv"
        bad.write_text("predator,prey\nCrab,\n", encoding="utf-8")
        with pytest.raises(SpeciesValidationError):
            build_food_web_from_csv(species_path, str(bad))

    def test_whitespace_stripped(self, tmp_path):
        sp = tmp_path / "s.csv"
        ln = tmp_path / "l.csv"
        sp.write_text("species\n Algae \nCrab\n", encoding="utf-8")
        ln.write_text("predator,prey\nCrab , Algae\n", encoding="utf-8")
        G = build_food_web_from_csv(str(sp), str(ln))
        assert G.has_edge("Crab", "Algae")
