"""
foodweb_atlas.metrics — Food-web metric computation.

Modules:
    structure    — Species / interaction counts, degree, connectance.
    clustering   — Local and average clustering, global transitivity.
    centrality   — Directed betweenness, centrality ranking, keystone species.
    topology     — Prey-first topological order, CycleDetected.
    communities  — Community detection on the undirected projection.

Every metric is a read-only function of the food web returned by
foodweb_atlas.graph.builder.build_food_web(). Tunables come from
foodweb_atlas.config.FoodWebConfig.
"""
