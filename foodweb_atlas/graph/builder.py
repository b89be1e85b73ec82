"""
foodweb_atlas/graph/builder.py — NetworkX food-web construction layer.

Builds a NetworkX MultiDiGraph from a declared species list and a table of
predator → prey interactions, either from literal Python data or from two CSV
files.

Edge convention:
    Every edge points from predator to prey ("who eats whom"). A species'
    in-degree is therefore the number of its consumers and its out-degree the
    number of its resources. All direction-sensitive metrics (betweenness,
    topological order) assume this convention.

Multiplicity:
    Repeated (predator, prey) pairs are kept as parallel edges, so the graph
    is a MultiDiGraph. Self-loops (cannibalism) are accepted.

Unknown species:
    NetworkX silently creates a node when an edge names one it has not seen.
    The builder does not: an interaction naming an undeclared species raises
    SpeciesValidationError unless config.allow_implicit_species is set.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import networkx as nx
import pandas as pd

from foodweb_atlas.config import DEFAULT_CONFIG, FoodWebConfig

logger = logging.getLogger(__name__)


class SpeciesValidationError(ValueError):
    """Raised when the species list or an interaction record is invalid."""

    def __init__(self, message: str, species: str | None = None):
        super().__init__(message)
        self.species = species


@dataclass(frozen=True)
class Interaction:
    """One feeding link: ``predator`` consumes ``prey``."""

    predator: str
    prey: str

    @classmethod
    def coerce(cls, record: "Interaction | Sequence[str]") -> "Interaction":
        """Accept an Interaction or a (predator, prey) pair."""
        if isinstance(record, Interaction):
            return record
        if isinstance(record, (tuple, list)) and len(record) == 2:
            return cls(predator=record[0], prey=record[1])
        raise SpeciesValidationError(
            f"Interaction must be an Interaction or a (predator, prey) pair, got {record!r}."
        )


def _check_name(name: object, where: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise SpeciesValidationError(f"Blank or non-string species name in {where}: {name!r}.")
    return name


def build_food_web(
    species: Iterable[str],
    interactions: Iterable["Interaction | Sequence[str]"],
    config: FoodWebConfig = DEFAULT_CONFIG,
    name: str = "food web",
) -> nx.MultiDiGraph:
    """
    Build the food-web graph from declared species and feeding interactions.

    Args:
        species:      Ordered species names. Each must be a unique, non-blank
                      string. Species with no interactions are kept as
                      isolated nodes.
        interactions: Interaction records or (predator, prey) pairs.
        config:       FoodWebConfig. Uses config.allow_implicit_species.
        name:         Stored as G.graph["name"].

    Returns:
        G: nx.MultiDiGraph, one node per species (attribute ``order`` holds
           the declaration index) and one predator → prey edge per interaction.

    Raises:
        SpeciesValidationError: duplicate or blank species names, malformed
            interaction records, or (under the default policy) an interaction
            naming an undeclared species. Nothing is returned in that case.
    """
    G = nx.MultiDiGraph(name=name, source="literal")

    for idx, sp in enumerate(species):
        sp = _check_name(sp, "species list")
        if sp in G:
            raise SpeciesValidationError(f"Duplicate species name: '{sp}'.", species=sp)
        G.add_node(sp, order=idx)

    declared = G.number_of_nodes()
    implicit: list[str] = []

    for raw in interactions:
        link = Interaction.coerce(raw)
        for endpoint in (link.predator, link.prey):
            _check_name(endpoint, "interaction")
            if endpoint in G:
                continue
            if not config.allow_implicit_species:
                raise SpeciesValidationError(
                    f"Interaction {link.predator!r} -> {link.prey!r} references "
                    f"undeclared species '{endpoint}'.",
                    species=endpoint,
                )
            G.add_node(endpoint, order=G.number_of_nodes(), implicit=True)
            implicit.append(endpoint)
        G.add_edge(link.predator, link.prey)

    if implicit:
        logger.warning(
            "Inserted %d undeclared species from interactions: %s",
            len(implicit),
            ", ".join(implicit),
        )

    logger.info(
        "Food web '%s' built: %d species (%d declared), %d interactions.",
        name,
        G.number_of_nodes(),
        declared,
        G.number_of_edges(),
    )
    return G


def build_food_web_from_csv(
    species_path: str,
    interactions_path: str,
    config: FoodWebConfig = DEFAULT_CONFIG,
) -> nx.MultiDiGraph:
    """
    Build the food web from two CSV tables.

    Expected columns:
        species_path:      ``species``
        interactions_path: ``predator``, ``prey``

    Extra columns are ignored. Cells are stripped of surrounding whitespace.

    Raises:
        SpeciesValidationError: a file is empty or unparseable, a required
            column is missing or a cell is blank,
            plus every condition build_food_web() rejects.
    """
    logger.info("Loading species from: %s", species_path)
    df_species = _read_table(species_path)
    _require_columns(df_species, ["species"], species_path)

    logger.info("Loading interactions from: %s", interactions_path)
    df_links = _read_table(interactions_path)
    _require_columns(df_links, ["predator", "prey"], interactions_path)

    species = [s.strip() for s in df_species["species"].tolist()]
    interactions = [
        Interaction(predator=str(row.predator).strip(), prey=str(row.prey).strip())
        for row in df_links.itertuples(index=False)
    ]

    G = build_food_web(species, interactions, config, name=str(species_path))
    G.graph["source"] = "csv"
    G.graph["species_path"] = species_path
    G.graph["interactions_path"] = interactions_path
    return G


def _read_table(path: str) -> pd.DataFrame:
    try:
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        raise SpeciesValidationError(f"{path} is empty or not a readable CSV: {exc}") from exc


def _require_columns(df: pd.DataFrame, columns: list[str], path: str) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise SpeciesValidationError(
            f"{path} is missing required column(s): {', '.join(missing)}."
        )


def build_example_food_web(config: FoodWebConfig = DEFAULT_CONFIG) -> nx.MultiDiGraph:
    """Build the six-species coastal food web used throughout the docs and tests."""
    from foodweb_atlas.graph.examples import EXAMPLE_INTERACTIONS, EXAMPLE_SPECIES

    return build_food_web(EXAMPLE_SPECIES, EXAMPLE_INTERACTIONS, config, name="coastal example")


def species_order(G: nx.MultiDiGraph) -> dict[str, int]:
    """
    Return species → declaration index.

    Nodes added without an ``order`` attribute sort after declared species,
    by name.
    """
    declared = {n: d["order"] for n, d in G.nodes(data=True) if "order" in d}
    extra = sorted(n for n in G.nodes if n not in declared)
    base = max(declared.values(), default=-1) + 1
    declared.update({n: base + i for i, n in enumerate(extra)})
    return declared
