"""
Literal example data: a six-species coastal food web.

Interactions are (predator, prey) pairs:

    Bird ──► Small Fish ──► Zooplankton ──► Algae
      │         ▲                             ▲
      │     Large Fish                        │
      └──────► Crab ──────────────────────────┘
"""

from foodweb_atlas.graph.builder import Interaction

EXAMPLE_SPECIES: list[str] = [
    "Algae",
    "Zooplankton",
    "Crab",
    "Small Fish",
    "Large Fish",
    "Bird",
]

EXAMPLE_INTERACTIONS: list[Interaction] = [
    Interaction(predator="Zooplankton", prey="Algae"),
    Interaction(predator="Crab", prey="Algae"),
    Interaction(predator="Small Fish", prey="Zooplankton"),
    Interaction(predator="Large Fish", prey="Small Fish"),
    Interaction(predator="Bird", prey="Small Fish"),
    Interaction(predator="Bird", prey="Crab"),
]
