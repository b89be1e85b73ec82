"""
foodweb_atlas — Network analysis of ecological interaction graphs.

Builds a directed predator → prey graph (a food web) from a declared species
list and a table of interactions, then computes the standard structural
metrics of food-web ecology on top of NetworkX:

- Graph construction with strict species validation (foodweb_atlas.graph)
- Degree, connectance, clustering, betweenness, topological order (foodweb_atlas.metrics)
- Community detection on the undirected projection (foodweb_atlas.metrics.communities)
- Static and interactive network figures (foodweb_atlas.viz)
- Console / Markdown / JSON summaries (foodweb_atlas.reports)
"""

__version__ = "0.1.0"
